from collections.abc import (
    Iterable,
    Mapping,
)
from typing import Any

from abstract_synthesizer.dsl import Path
from abstract_synthesizer.synthesizer import Synthesizer
from abstract_synthesizer.utils.json import json_dumps

TERRAFORM_KEYS = frozenset(
    [
        "terraform",
        "provider",
        "variable",
        "data",
        "resource",
        "locals",
        "output",
        "module",
    ]
)


class TerraformSynthesizer(Synthesizer):
    """
    Synthesizer producing Terraform JSON configuration.

    Top level declarations are restricted to the Terraform block types. Inside
    a declaration any nested block is allowed, e.g. `tags`, `filter` or
    `required_providers`.
    """

    def __init__(
        self, name: str = "terraform", keys: Iterable[str] = TERRAFORM_KEYS
    ) -> None:
        super().__init__(name, keys)

    def accepts_block(self, name: str, path: Path) -> bool:
        return bool(path) or name in self.keys


def safe_resource_id(s: str) -> str:
    """Sanitize a string into a valid terraform resource id"""
    if not s:
        raise ValueError("resource id must not be empty")
    res = s.translate({ord(c): "_" for c in ".-/ "})
    res = res.replace("*", "_star")
    if res[0].isdigit():
        res = "_" + res
    return res


def render_terraform_json(manifest: Mapping[Any, Any], indent: int | None = 2) -> str:
    return json_dumps(manifest, indent=indent, sort_keys=False)
