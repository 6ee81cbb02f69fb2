import os
from dataclasses import dataclass, field
from typing import List

from filesplit import DEFAULT_TIMEOUT, MEGABYTE


def split_csv(value):
    return value.split(",") if value else []


@dataclass
class SplitConfig:
    file: str
    chunk_size: int  # bytes
    out: str = ""  # prefix of part names, the source path when empty
    overwrite: bool = False  # rewrite parts that already exist instead of failing
    allow_empty: bool = True  # an empty source yields zero parts

    @classmethod
    def from_megabytes(cls, file, size_mb, out="", **kwargs):
        return cls(file=file, chunk_size=size_mb * MEGABYTE, out=out, **kwargs)

    @property
    def prefix(self):
        return self.out or self.file


@dataclass
class MergeConfig:
    files: List[str] = field(default_factory=list)
    out: str = ""

    @classmethod
    def from_csv(cls, files_csv, out):
        return cls(files=split_csv(files_csv), out=out)


@dataclass
class TransferConfig:
    node_url: str = field(default_factory=lambda: os.getenv("FILESPLIT_NODE", "http://localhost:5001"))
    timeout: float = DEFAULT_TIMEOUT
    overwrite: bool = False
