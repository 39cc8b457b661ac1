"""Document writer — atomic JSON writes and deletes for the search artifacts.

The payload is fully serialized before the target directory is touched, and
the bytes land in a temp file next to the target that is then renamed into
place.  A reader sees either the previous document or the new one, never a
partial file.  Failures are returned as a ``WriteResult``, not raised.
"""

from __future__ import annotations

import contextlib
import logging
import os
import stat
import tempfile
from pathlib import Path

from pydantic import BaseModel

from search_index.index.models import WriteResult

logger = logging.getLogger(__name__)


def serialize(envelope: BaseModel) -> bytes:
    """Compact JSON with Unicode and ``/`` left unescaped."""
    return envelope.model_dump_json(by_alias=True).encode("utf-8")


def _target_mode(path: Path) -> int:
    """Mode of the existing target, else the umask-derived default."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def atomic_write(path: Path, data: bytes) -> None:
    """Write ``data`` to ``path`` via a temp file and rename.

    The temp file gets the mode a plain write would produce (mkstemp
    creates it 0600).  Raises OSError; the temp file is cleaned up on
    failure.
    """
    mode = _target_mode(path)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as tmp:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_name)
        raise


class DocumentWriter:
    """Writes and deletes search documents."""

    def write(self, path: Path, envelope: BaseModel) -> WriteResult:
        try:
            payload = serialize(envelope)
        except (ValueError, TypeError) as exc:
            logger.warning("Could not serialize %s: %s", path, exc)
            return WriteResult(path=path, ok=False, error=f"serialize: {exc}")

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.warning("Could not create directory %s: %s", path.parent, exc)
            return WriteResult(path=path, ok=False, error=f"mkdir: {exc}")

        try:
            atomic_write(path, payload)
        except OSError as exc:
            logger.warning("Could not write %s: %s", path, exc)
            return WriteResult(path=path, ok=False, error=f"write: {exc}")

        logger.info("Wrote %s (%d bytes)", path, len(payload))
        return WriteResult(path=path, ok=True, bytes_written=len(payload))

    def delete(self, path: Path) -> WriteResult:
        """Remove a document; a missing file counts as success."""
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not delete %s: %s", path, exc)
            return WriteResult(path=path, ok=False, action="delete", error=str(exc))
        return WriteResult(path=path, ok=True, action="delete")
