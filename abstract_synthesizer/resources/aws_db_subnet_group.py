import re
from collections.abc import Mapping
from typing import Any

from pydantic import (
    Field,
    field_validator,
)

from abstract_synthesizer.dsl import SynthesisContext
from abstract_synthesizer.resources.base import (
    DEFAULT_DESCRIPTION,
    ResourceAttributes,
    ResourceReference,
    emit_resource,
)

OUTPUTS = [
    "id",
    "arn",
    "name",
    "description",
    "subnet_ids",
    "supported_network_types",
    "vpc_id",
]

NAME_PATTERN = re.compile(r"^[a-z0-9._\- ]{1,255}$")


class DbSubnetGroupAttributes(ResourceAttributes):
    name: str
    subnet_ids: list[str] = Field(min_length=2)
    description: str = DEFAULT_DESCRIPTION

    @field_validator("name")
    @classmethod
    def name_is_valid(cls, name: str) -> str:
        if name == "default":
            raise ValueError("'default' is reserved for the default DB subnet group")
        if not NAME_PATTERN.match(name):
            raise ValueError(
                "name may only contain lowercase alphanumeric characters, "
                "periods, underscores, spaces and hyphens"
            )
        return name

    @field_validator("subnet_ids")
    @classmethod
    def subnet_ids_are_unique(cls, subnet_ids: list[str]) -> list[str]:
        if len(set(subnet_ids)) != len(subnet_ids):
            raise ValueError("subnet_ids must not contain duplicates")
        return subnet_ids

    @property
    def subnet_count(self) -> int:
        return len(self.subnet_ids)

    @property
    def is_highly_available(self) -> bool:
        return self.subnet_count >= 3


def aws_db_subnet_group(
    ctx: SynthesisContext, name: str, attributes: Mapping[str, Any]
) -> ResourceReference:
    group_attrs = DbSubnetGroupAttributes.model_validate(attributes)
    emit_resource(ctx, "aws_db_subnet_group", name, group_attrs)
    return ResourceReference.build("aws_db_subnet_group", name, group_attrs, OUTPUTS)
