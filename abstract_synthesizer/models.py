from typing import Literal

from pydantic import (
    BaseModel,
    Field,
    field_validator,
)


class SynthesizerSettings(BaseModel):
    """A named synthesizer as declared in the [synthesizers.<name>] config table"""

    name: str
    kind: Literal["abstract", "terraform"] = "abstract"
    keys: list[str] = Field(default_factory=list)

    @field_validator("keys")
    @classmethod
    def keys_are_names(cls, keys: list[str]) -> list[str]:
        for key in keys:
            if not key or key.startswith("_"):
                raise ValueError(f"invalid synthesizer key {key!r}")
        return keys
