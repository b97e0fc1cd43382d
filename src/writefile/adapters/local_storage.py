from collections.abc import Iterator
from pathlib import Path

from writefile.adapters.staging import is_staging_name


def iter_staging_files(root: str, recursive: bool = False) -> Iterator[Path]:
    p = Path(root)
    paths = p.rglob("*") if recursive else p.glob("*")
    for fp in paths:
        if not is_staging_name(fp.name):
            continue
        if fp.is_symlink() or not fp.is_file():
            continue
        yield fp
