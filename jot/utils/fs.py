"""Filesystem helpers."""

import os
import tempfile
from pathlib import Path
from typing import Union


def atomic_write(path: Union[str, Path], data: bytes) -> None:
    """
    Write data to path by writing a sibling temp file and renaming it over.
    
    Readers either see the previous contents or the new contents, never a
    partially written file. Does not protect against two concurrent writers.
    
    Args:
        path: Destination file
        data: Bytes to write
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    
    fd, tmp_name = tempfile.mkstemp(prefix=f'.{path.name}.', suffix='.tmp', dir=str(path.parent))
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
        os.replace(tmp_name, path)
    except BaseException:
        # Leave no stray temp file behind
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
