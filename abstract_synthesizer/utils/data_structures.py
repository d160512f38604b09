from collections.abc import (
    Hashable,
    MutableMapping,
)
from typing import Any


def get_or_init(d, k, v):
    """Gets (or initiates) a value in a dictionary key

    Args:
        d (dict): dictionary to work
        k (hashable): key to use
        v (value): value to initiate if key doesn't exist

    Returns:
        the value stored under k
    """
    d.setdefault(k, v)
    return d[k]


def bury(mapping: MutableMapping, *path: Hashable, value: Any) -> MutableMapping:
    """Deep-assign value at path, creating intermediate dicts as needed

    Intermediate keys that hold something other than a mapping are replaced
    by a fresh dict. The last segment is always overwritten.

    Args:
        mapping (dict): mapping to write into, mutated in place
        path (hashable): one or more keys leading to the value
        value: value to store under the last key

    Returns:
        the mapping passed in
    """
    if not path:
        raise ValueError("bury requires at least one path segment")

    current = mapping
    for segment in path[:-1]:
        nested = get_or_init(current, segment, {})
        if not isinstance(nested, MutableMapping):
            nested = current[segment] = {}
        current = nested
    current[path[-1]] = value
    return mapping


def snapshot_mappings(
    mapping: MutableMapping, _seen: set[int] | None = None
) -> list[tuple[MutableMapping, dict]]:
    """Record the items of mapping and of every mapping nested in it

    Only the mapping structure is copied, leaf values are kept by reference.
    Pass the result to restore_mappings to put every recorded mapping back
    in place, keeping the identity of each one.
    """
    seen = set() if _seen is None else _seen
    if id(mapping) in seen:
        return []
    seen.add(id(mapping))
    saved = [(mapping, dict(mapping))]
    for value in mapping.values():
        if isinstance(value, MutableMapping):
            saved.extend(snapshot_mappings(value, seen))
    return saved


def restore_mappings(saved: list[tuple[MutableMapping, dict]]) -> None:
    for mapping, items in saved:
        mapping.clear()
        mapping.update(items)
