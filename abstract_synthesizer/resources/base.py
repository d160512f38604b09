"""
Building blocks for AWS resource wrappers.

Every wrapper follows the same three steps: validate the user supplied
attributes with a pydantic model, emit a `resource` block into the synthesis
context, and return a ResourceReference exposing Terraform interpolations of
the resource outputs plus the computed properties of the attribute model.

Wrappers need a context of a TerraformSynthesizer, which accepts the nested
`tags` block.
"""

import ipaddress
from collections.abc import (
    Iterable,
    Mapping,
)
from dataclasses import dataclass
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)

from abstract_synthesizer.dsl import SynthesisContext

DEFAULT_DESCRIPTION = "Managed by abstract-synthesizer"


class ResourceAttributes(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    tags: dict[str, str] = Field(default_factory=dict)

    @field_validator("tags")
    @classmethod
    def tag_keys_are_valid(cls, tags: dict[str, str]) -> dict[str, str]:
        for key in tags:
            if not key or key.startswith("_") or key.lower().startswith("aws:"):
                raise ValueError(f"invalid tag key {key!r}")
        return tags

    def terraform_arguments(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True, exclude={"tags"})


def interpolate(resource_type: str, name: str, attribute: str) -> str:
    return f"${{{resource_type}.{name}.{attribute}}}"


@dataclass(frozen=True)
class ResourceReference:
    """
    Handle on an emitted resource.

    Unknown attributes resolve to the resource outputs first, e.g. `ref.id`
    gives "${aws_vpc.main.id}", then to the attribute model, which carries the
    computed properties (`ref.is_private_cidr`).
    """

    type: str
    name: str
    attributes: ResourceAttributes
    outputs: Mapping[str, str]

    @classmethod
    def build(
        cls,
        resource_type: str,
        name: str,
        attributes: ResourceAttributes,
        outputs: Iterable[str],
    ) -> "ResourceReference":
        return cls(
            type=resource_type,
            name=name,
            attributes=attributes,
            outputs={o: interpolate(resource_type, name, o) for o in outputs},
        )

    @property
    def address(self) -> str:
        return f"{self.type}.{self.name}"

    def __getattr__(self, item: str) -> Any:
        if item.startswith("_"):
            raise AttributeError(item)
        outputs = self.__dict__.get("outputs", {})
        if item in outputs:
            return outputs[item]
        attributes = self.__dict__.get("attributes")
        if attributes is not None and hasattr(attributes, item):
            return getattr(attributes, item)
        raise AttributeError(f"{self.type} has no output or attribute '{item}'")


def emit_resource(
    ctx: SynthesisContext, resource_type: str, name: str, attributes: ResourceAttributes
) -> None:
    with ctx.resource(resource_type, name) as resource:
        for key, value in attributes.terraform_arguments().items():
            getattr(resource, key)(value)
        if attributes.tags:
            with resource.tags() as tags:
                for key, value in attributes.tags.items():
                    getattr(tags, key)(value)


def validate_cidr(cidr_block: str, min_prefix: int = 16, max_prefix: int = 28) -> str:
    try:
        network = ipaddress.IPv4Network(cidr_block)
    except ValueError as e:
        raise ValueError(f"invalid CIDR block {cidr_block}: {e}") from None
    if not min_prefix <= network.prefixlen <= max_prefix:
        raise ValueError(
            f"CIDR block {cidr_block} must have a prefix between "
            f"/{min_prefix} and /{max_prefix}"
        )
    return cidr_block
