"""Whole-file persistence for feed output and cached provider responses."""

from __future__ import annotations

import os
from pathlib import Path
import tempfile

from social_activity.errors import StoreError


def write_file(path: str | Path, data: str | bytes) -> Path:
    """Write ``data`` to ``path`` atomically, replacing any existing file."""
    target = Path(path)
    payload = data.encode("utf-8") if isinstance(data, str) else data
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", dir=target.parent)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(payload)
            os.replace(tmp_name, target)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
    except OSError as exc:
        raise StoreError(f"Could not write {target}: {exc}") from exc
    return target
