"""Key omission applied to every result record."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, Mapping


def omit_key(record: Mapping[str, Any], key: str) -> Dict[str, Any]:
    """
    Return a new dict holding every entry of ``record`` except ``key``.
    The source mapping is left untouched and key order is kept.
    """
    return {name: value for name, value in record.items() if name != key}


def project_records(
    records: Iterable[Mapping[str, Any]], key: str
) -> Iterator[Dict[str, Any]]:
    for record in records:
        yield omit_key(record, key)


def count_carrying(records: Iterable[Mapping[str, Any]], key: str) -> int:
    return sum(1 for record in records if key in record)
