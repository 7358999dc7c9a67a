"""
Crash-safe slot writes.

A slot is one file holding one encoded record. Writers go through a
uniquely-named temp file in the slot's own directory and an atomic
``os.replace``, so readers only ever see the old bytes or the new bytes.
"""

import os
import tempfile
from pathlib import Path

from folio.errors import IOFailure, NotFoundError
from folio.logging import get_logger

logger = get_logger("storage.atomic")

TEMP_PREFIX = "."
TEMP_SUFFIX = ".tmp"


def write_atomic(path: Path, data: bytes, durable: bool = True) -> None:
    """
    Replace the contents of ``path`` with ``data`` atomically.

    :param path: Target slot path
    :type path: Path
    :param data: Bytes to store
    :type data: bytes
    :param durable: fsync the temp file before the rename
    :type durable: bool
    :raises IOFailure: If any step fails; the previous slot content is kept
    """
    path = Path(path)
    try:
        fd, temp_name = tempfile.mkstemp(
            dir=path.parent,
            prefix=f"{TEMP_PREFIX}{path.name}.",
            suffix=TEMP_SUFFIX,
        )
    except OSError as e:
        raise IOFailure(f"Cannot create temp file for {path.name}: {e}", path=str(path)) from e

    temp_path = Path(temp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            if durable:
                os.fsync(f.fileno())
        os.replace(temp_path, path)
    except BaseException as e:
        _discard(temp_path)
        if isinstance(e, OSError):
            raise IOFailure(f"Failed to write {path.name}: {e}", path=str(path)) from e
        raise


def _discard(temp_path: Path) -> None:
    try:
        temp_path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Failed to remove temp file {temp_path.name}: {e}")


def read_slot(path: Path) -> bytes:
    """
    Read the full contents of a slot.

    :raises NotFoundError: If the slot does not exist
    :raises IOFailure: On any other read error
    """
    try:
        return Path(path).read_bytes()
    except FileNotFoundError as e:
        raise NotFoundError(f"No slot at {Path(path).name}", path=str(path)) from e
    except OSError as e:
        raise IOFailure(f"Failed to read {Path(path).name}: {e}", path=str(path)) from e


def remove_slot(path: Path) -> bool:
    """
    Remove a slot. Removing a missing slot is a no-op.

    :return: True if a file was removed, False if it was already gone
    :rtype: bool
    :raises IOFailure: On any error other than the file being missing
    """
    try:
        Path(path).unlink()
        return True
    except FileNotFoundError:
        return False
    except OSError as e:
        raise IOFailure(f"Failed to remove {Path(path).name}: {e}", path=str(path)) from e


def clear_stale_temp_files(directory: Path) -> int:
    """
    Delete temp files left behind by writes that were interrupted before the rename.

    :return: Number of files removed
    :rtype: int
    """
    removed = 0
    for temp_path in Path(directory).glob(f"{TEMP_PREFIX}*{TEMP_SUFFIX}"):
        try:
            temp_path.unlink()
            removed += 1
        except FileNotFoundError:
            continue
        except OSError as e:
            logger.warning(f"Could not remove stale temp file {temp_path.name}: {e}")
    if removed:
        logger.info(f"Removed {removed} interrupted write(s) from {directory}")
    return removed
