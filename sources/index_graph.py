"""
Decoder for index-graph JSON.

The structured dictionary streams line-delimited JSON records. One of them is
a data chunk whose ``data`` array is an arena of de-duplicated values; objects
in that arena point at each other by integer offset.
"""

from __future__ import annotations

import json
from typing import Any, Iterable

DATA_CHUNK_ID = 2
ROOT_SLOT = 0


def locate_data_chunk(lines: Iterable[str]) -> list[Any] | None:
    """Return the arena of the first ``{"type": "chunk", "id": 2, "data": [...]}`` record."""
    for line in lines:
        line = line.strip()
        if not line:
            continue
        try:
            record = json.loads(line)
        except ValueError:
            continue
        if (
            isinstance(record, dict)
            and record.get("type") == "chunk"
            and record.get("id") == DATA_CHUNK_ID
            and isinstance(record.get("data"), list)
        ):
            return record["data"]
    return None


def resolve(store: list[Any], ref: Any) -> Any:
    """
    Follow one reference into the arena.

    Strings are literals and come back verbatim, integers are offsets, anything
    else (including out-of-range offsets) resolves to None.
    """
    if ref is None:
        return None
    if isinstance(ref, str):
        return ref
    if isinstance(ref, int) and not isinstance(ref, bool):
        if 0 <= ref < len(store):
            return store[ref]
        return None
    return None


def resolve_text(store: list[Any], ref: Any) -> str:
    value = resolve(store, ref)
    return value if isinstance(value, str) else ""


def resolve_object(store: list[Any], ref: Any) -> dict[str, Any]:
    value = resolve(store, ref)
    return value if isinstance(value, dict) else {}


def resolve_list(store: list[Any], ref: Any) -> list[Any]:
    """A list field may be stored inline or behind an offset."""
    value = ref if isinstance(ref, list) else resolve(store, ref)
    return value if isinstance(value, list) else []


def root_object(store: list[Any]) -> dict[str, Any]:
    return resolve_object(store, ROOT_SLOT)
