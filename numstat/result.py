"""
Immutable result record: statistic name -> value.

A key that is absent was not requested. A key that is present with value None was
requested but is undefined for this input (e.g. variance of a single value, or a
tied mode). Zero is always a computed value, never a placeholder.
"""
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Iterator


class ResultRecord(Mapping):
    def __init__(self, items: list[tuple[str, float | int | None]]):
        self._values = MappingProxyType(dict(items))

    def __getitem__(self, key: str) -> float | int | None:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def is_defined(self, key: str) -> bool:
        return key in self._values and self._values[key] is not None

    def to_dict(self) -> dict[str, Any]:
        return dict(self._values)

    def __repr__(self) -> str:
        return f"ResultRecord({dict(self._values)!r})"
