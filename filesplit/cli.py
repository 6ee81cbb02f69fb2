import argparse
import os
import sys

from filesplit import DEFAULT_SIZE_MB, DEFAULT_TIMEOUT, log
from filesplit.config import MergeConfig, SplitConfig, TransferConfig, split_csv
from filesplit.core.chunker import split_file
from filesplit.core.concat import merge_files
from filesplit.errors import FileSplitError, NotFoundError, UsageError

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_USAGE_ERROR = 2


def _status(err, usage=(UsageError,)):
    if isinstance(err, usage):
        return EXIT_USAGE_ERROR
    return EXIT_FAILURE


def cmd_split(args):
    config = SplitConfig.from_megabytes(
        args.file, args.size, args.out,
        overwrite=args.overwrite, allow_empty=not args.reject_empty,
    )
    try:
        parts = split_file(config)
    except (FileSplitError, OSError) as e:
        log(f"failed to split file {args.file}, error: {e}", context="SPLIT")
        return _status(e, usage=(UsageError, NotFoundError))

    log(f"split file {args.file} into parts: {parts}", context="SPLIT")
    return EXIT_SUCCESS


def cmd_merge(args):
    config = MergeConfig.from_csv(args.files, args.out)
    try:
        merge_files(config)
    except (FileSplitError, OSError) as e:
        log(f"failed to merge files {config.files}, error: {e}", context="MERGE")
        return _status(e)

    log(f"merged parts {config.files} into file {config.out}", context="MERGE")
    return EXIT_SUCCESS


def _transfer_config(args, **kwargs):
    if args.node:
        kwargs["node_url"] = args.node
    return TransferConfig(timeout=args.timeout, **kwargs)


def cmd_serve(args):
    from filesplit.nodes.node_storage import create_app

    create_app(args.storage_dir).run(host=args.host, port=args.port)
    return EXIT_SUCCESS


def cmd_upload(args):
    from filesplit.client.upload import upload_parts

    parts = split_csv(args.files)
    if not parts:
        log("failed to upload parts, error: empty file list", context="UPLOAD")
        return EXIT_USAGE_ERROR

    config = _transfer_config(args)
    try:
        upload_parts(parts, config)
    except (FileSplitError, OSError) as e:
        log(f"failed to upload parts {parts}, error: {e}", context="UPLOAD")
        return _status(e)

    log(f"uploaded parts {parts} to {config.node_url}", context="UPLOAD")
    return EXIT_SUCCESS


def cmd_download(args):
    from filesplit.client.download import download_parts

    names = split_csv(args.files)
    if not names or not args.out:
        log("failed to download parts, error: empty file list or output file name", context="DOWNLOAD")
        return EXIT_USAGE_ERROR

    config = _transfer_config(args, overwrite=args.overwrite)
    dest_dir = args.dir or os.path.dirname(os.path.abspath(args.out))
    try:
        paths = download_parts(names, dest_dir, config)
        merge_files(MergeConfig(files=paths, out=args.out))
    except (FileSplitError, OSError) as e:
        log(f"failed to download parts {names}, error: {e}", context="DOWNLOAD")
        return _status(e)

    log(f"downloaded parts {names} and merged them into file {args.out}", context="DOWNLOAD")
    return EXIT_SUCCESS


def build_parser():
    parser = argparse.ArgumentParser(prog="filesplit", description="Split big files into parts and merge them back.")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("split", help="split a big file into smaller parts")
    p.add_argument("--file", required=True, help="The big file to split")
    p.add_argument("--size", type=int, default=DEFAULT_SIZE_MB, help="The maximal size per part in megabytes")
    p.add_argument("--out", default="", help="The prefix of output files, the same as --file by default")
    p.add_argument("--overwrite", action="store_true", help="Rewrite parts that already exist")
    p.add_argument("--reject-empty", action="store_true", help="Fail instead of producing no parts for an empty file")
    p.set_defaults(func=cmd_split)

    p = sub.add_parser("merge", help="merge smaller files (usually obtained from split) into a big file")
    p.add_argument("--files", required=True, help="File names separated by ,")
    p.add_argument("--out", required=True, help="Output file name")
    p.set_defaults(func=cmd_merge)

    p = sub.add_parser("serve", help="run a part storage node")
    p.add_argument("--host", default="0.0.0.0")
    p.add_argument("--port", type=int, default=5001)
    p.add_argument("--storage-dir", default=None)
    p.set_defaults(func=cmd_serve)

    p = sub.add_parser("upload", help="push parts to a storage node")
    p.add_argument("--files", required=True, help="Part file names separated by ,")
    p.add_argument("--node", default=None, help="Node URL, $FILESPLIT_NODE by default")
    p.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT)
    p.set_defaults(func=cmd_upload)

    p = sub.add_parser("download", help="fetch parts from a storage node and merge them")
    p.add_argument("--files", required=True, help="Part names separated by ,")
    p.add_argument("--out", required=True, help="Output file name")
    p.add_argument("--node", default=None, help="Node URL, $FILESPLIT_NODE by default")
    p.add_argument("--dir", default=None, help="Where downloaded parts go, next to --out by default")
    p.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT)
    p.add_argument("--overwrite", action="store_true", help="Rewrite local parts that already exist")
    p.set_defaults(func=cmd_download)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
