"""Small structural helpers shared by the resolver and presets."""

from __future__ import annotations

import copy
import re
from typing import Any, Callable, Hashable, Iterable, TypeVar

T = TypeVar("T")

_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")


def deep_merge(base: Any, overrides: Any) -> Any:
    """Merge *overrides* on top of *base* without mutating either.

    Dicts merge key by key and lists merge index by index; any other
    override value replaces the base value.
    """
    if isinstance(base, dict) and isinstance(overrides, dict):
        merged = copy.deepcopy(base)
        for key, value in overrides.items():
            if key in merged:
                merged[key] = deep_merge(merged[key], value)
            else:
                merged[key] = copy.deepcopy(value)
        return merged
    if isinstance(base, list) and isinstance(overrides, list):
        merged_list = copy.deepcopy(base)
        for index, value in enumerate(overrides):
            if index < len(merged_list):
                merged_list[index] = deep_merge(merged_list[index], value)
            else:
                merged_list.append(copy.deepcopy(value))
        return merged_list
    return copy.deepcopy(overrides)


def kebab_case(value: str) -> str:
    """Convert camelCase words to dashed lower case, leaving other separators alone."""
    return _CAMEL_BOUNDARY.sub(r"\1-\2", value).lower()


def group_by(items: Iterable[T], key: Callable[[T], Hashable]) -> list[list[T]]:
    """Group *items* by *key*, preserving the first-seen order of keys."""
    groups: dict[Hashable, list[T]] = {}
    for item in items:
        groups.setdefault(key(item), []).append(item)
    return list(groups.values())
