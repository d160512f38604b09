from collections.abc import Mapping
from io import StringIO
from typing import Any

from ruamel import yaml


def create_ruamel_instance(
    preserve_quotes: bool = True,
    explicit_start: bool = False,
    width: int = 4096,
    pure: bool = False,
) -> yaml.YAML:
    ruamel_instance = yaml.YAML(pure=pure)

    ruamel_instance.preserve_quotes = preserve_quotes
    ruamel_instance.explicit_start = explicit_start
    ruamel_instance.width = width

    return ruamel_instance


def dump_yaml(data: Mapping[Any, Any], explicit_start: bool = False) -> str:
    """Dump a manifest as block style YAML, keeping key order."""
    stream = StringIO()
    create_ruamel_instance(explicit_start=explicit_start).dump(_plain(data), stream)
    return stream.getvalue()


def _plain(data: Any) -> Any:
    # tuples and dict subclasses may come straight from user blocks
    if isinstance(data, Mapping):
        return {k: _plain(v) for k, v in data.items()}
    if isinstance(data, (list, tuple)):
        return [_plain(v) for v in data]
    return data
