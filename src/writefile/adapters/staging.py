import os
import tempfile
from typing import BinaryIO

STAGING_PREFIX = ".new."


def open_staging(directory: str) -> tuple[BinaryIO, str]:
    """Create a uniquely named staging file inside ``directory``.

    The file is created exclusively (mode 0600) and opened for reading and
    writing. Any ``OSError`` propagates unchanged.
    """
    fd, name = tempfile.mkstemp(dir=directory or os.curdir, prefix=STAGING_PREFIX)
    try:
        return os.fdopen(fd, "w+b"), name
    except BaseException:
        os.close(fd)
        os.unlink(name)
        raise


def is_staging_name(name: str) -> bool:
    return os.path.basename(name).startswith(STAGING_PREFIX)
