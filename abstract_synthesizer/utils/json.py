import json
from collections.abc import Callable
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel

JSON_COMPACT_SEPARATORS = (",", ":")


def pydantic_encoder(obj: Any) -> Any:
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", exclude_none=True)

    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)

    if isinstance(obj, (set, frozenset)):
        return sorted(obj)

    if isinstance(obj, (datetime, date)):
        return obj.isoformat()

    if isinstance(obj, Enum):
        return obj.value

    if isinstance(obj, Decimal):
        return float(obj)

    raise TypeError(
        f"Object of type '{obj.__class__.__name__}' is not JSON serializable"
    )


def json_dumps(
    data: Any,
    *,
    compact: bool = False,
    indent: int | None = None,
    sort_keys: bool = True,
    cls: type[json.JSONEncoder] | None = None,
    defaults: Callable | None = pydantic_encoder,
) -> str:
    """
    Serialize `data` to a consistent JSON formatted `str`.

    Args:
        data: The data to serialize.
        compact: If True, use compact separators (no spaces after commas or colons).
        indent: If specified, pretty-print the JSON with this many spaces of indentation.
        sort_keys: Sort dict keys. Manifests are rendered in declaration order
            with sort_keys=False.
        cls: A custom JSONEncoder subclass to use for serialization.
        defaults: Fallback encoder for objects json can't handle.
    Returns:
        A JSON formatted string.
    """
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json", exclude_none=True)
    separators = JSON_COMPACT_SEPARATORS if compact else None
    return json.dumps(
        data,
        indent=indent,
        separators=separators,
        sort_keys=sort_keys,
        cls=cls,
        default=defaults if cls is None else None,
    )
