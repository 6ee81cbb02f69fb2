import filecmp
import os

import pytest
import requests

from filesplit.client.download import download_parts
from filesplit.client.upload import upload_parts
from filesplit.config import MergeConfig, SplitConfig, TransferConfig
from filesplit.core.chunker import split_file
from filesplit.core.concat import merge_files
from filesplit.errors import TransferError


@pytest.fixture
def config(node_url):
    return TransferConfig(node_url=node_url)


def test_upload_download_merge_round_trip(tmp_path, make_file, sample_bytes, node, config):
    source = make_file("sample.bin", sample_bytes)
    parts = split_file(SplitConfig(source, 4096))

    placement = upload_parts(parts, config)

    names = list(placement)
    assert names == ["sample.bin.part1", "sample.bin.part2", "sample.bin.part3"]
    assert sorted(os.listdir(node)) == names

    local = download_parts(names, str(tmp_path / "fetched"), config)
    assert local == [str(tmp_path / "fetched" / n) for n in names]

    merge_files(MergeConfig(local, str(tmp_path / "sample.bin.new")))
    assert filecmp.cmp(source, str(tmp_path / "sample.bin.new"), shallow=False)


def test_download_keeps_requested_order(tmp_path, make_file, node, config):
    a = make_file("f.part1", b"one")
    b = make_file("f.part2", b"two")
    upload_parts([a, b], config)

    local = download_parts(["f.part2", "f.part1"], str(tmp_path / "fetched"), config)

    assert [os.path.basename(p) for p in local] == ["f.part2", "f.part1"]


def test_upload_stops_on_conflict(make_file, node, config):
    a = make_file("f.part1", b"one")
    upload_parts([a], config)

    with pytest.raises(TransferError, match="f.part1"):
        upload_parts([a], config)


def test_download_missing_part(tmp_path, node, config):
    with pytest.raises(TransferError, match="nope"):
        download_parts(["nope"], str(tmp_path / "fetched"), config)


def test_download_does_not_overwrite_local_parts(tmp_path, make_file, node, config):
    upload_parts([make_file("f.part1", b"remote")], config)
    fetched = tmp_path / "fetched"
    fetched.mkdir()
    (fetched / "f.part1").write_bytes(b"local")

    with pytest.raises(FileExistsError):
        download_parts(["f.part1"], str(fetched), config)

    config.overwrite = True
    download_parts(["f.part1"], str(fetched), config)
    assert (fetched / "f.part1").read_bytes() == b"remote"


def test_unreachable_node(make_file, monkeypatch, config):
    def refuse(*args, **kwargs):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(requests, "post", refuse)

    with pytest.raises(TransferError, match="connection refused"):
        upload_parts([make_file("f.part1", b"x")], config)


@pytest.mark.parametrize("file_name", ["report#1.bin", "what?.bin", "100%.bin"])
def test_round_trip_with_url_special_characters(tmp_path, make_file, node, config, file_name):
    source = make_file(file_name, os.urandom(5000))
    parts = split_file(SplitConfig(source, 4096))
    names = list(upload_parts(parts, config))

    local = download_parts(names, str(tmp_path / "fetched"), config)

    assert [os.path.basename(p) for p in local] == [f"{file_name}.part1", f"{file_name}.part2"]
    merge_files(MergeConfig(local, str(tmp_path / "restored")))
    assert filecmp.cmp(source, str(tmp_path / "restored"), shallow=False)
