from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from ..components.models import Listing

PathLike = Union[str, os.PathLike]


def serialize_listings(listings: Iterable[Union[Listing, Dict[str, Any]]]) -> str:
    """Pretty JSON array with optional fields that are absent left out."""

    records = [item.to_record() if isinstance(item, Listing) else item for item in listings]
    return json.dumps(records, ensure_ascii=False, indent=2)


def write_checkpoint(path: PathLike, listings: Iterable[Union[Listing, Dict[str, Any]]]) -> Path:
    """Overwrite ``path`` with the full listing snapshot.

    The document is written to a temp file in the same directory and moved
    into place, so readers never observe a half-written file.
    """

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    body = serialize_listings(listings)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(body)
        os.replace(tmp_name, target)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
    return target


def load_checkpoint(path: PathLike) -> Optional[List[Dict[str, Any]]]:
    """Return cached listings, or ``None`` when the file is missing or blank.

    An empty JSON array is returned as ``[]``; decode errors propagate.
    """

    target = Path(path)
    try:
        text = target.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None

    if not text.strip():
        return None

    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError(f"Checkpoint {target} does not contain a JSON array")
    return [row for row in data if isinstance(row, dict)]
