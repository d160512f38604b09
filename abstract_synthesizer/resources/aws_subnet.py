import ipaddress
from collections.abc import Mapping
from typing import Any

from pydantic import field_validator

from abstract_synthesizer.dsl import SynthesisContext
from abstract_synthesizer.resources.base import (
    ResourceAttributes,
    ResourceReference,
    emit_resource,
    validate_cidr,
)

OUTPUTS = [
    "id",
    "arn",
    "availability_zone",
    "availability_zone_id",
    "cidr_block",
    "vpc_id",
    "owner_id",
]

# network address, VPC router, DNS, future use and broadcast
AWS_RESERVED_IPS = 5


class SubnetAttributes(ResourceAttributes):
    vpc_id: str
    cidr_block: str
    availability_zone: str | None = None
    map_public_ip_on_launch: bool = False

    @field_validator("cidr_block")
    @classmethod
    def cidr_block_is_valid(cls, cidr_block: str) -> str:
        return validate_cidr(cidr_block)

    @property
    def is_public(self) -> bool:
        return self.map_public_ip_on_launch

    @property
    def subnet_type(self) -> str:
        return "public" if self.is_public else "private"

    @property
    def ip_count(self) -> int:
        return ipaddress.IPv4Network(self.cidr_block).num_addresses - AWS_RESERVED_IPS


def aws_subnet(
    ctx: SynthesisContext, name: str, attributes: Mapping[str, Any]
) -> ResourceReference:
    subnet_attrs = SubnetAttributes.model_validate(attributes)
    emit_resource(ctx, "aws_subnet", name, subnet_attrs)
    return ResourceReference.build("aws_subnet", name, subnet_attrs, OUTPUTS)
