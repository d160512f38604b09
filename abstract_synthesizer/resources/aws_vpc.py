import ipaddress
from collections.abc import Mapping
from typing import (
    Any,
    Literal,
)

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
    "cidr_block",
    "default_security_group_id",
    "default_route_table_id",
    "default_network_acl_id",
    "main_route_table_id",
    "owner_id",
]


class VpcAttributes(ResourceAttributes):
    cidr_block: str
    instance_tenancy: Literal["default", "dedicated", "host"] = "default"
    enable_dns_support: bool = True
    enable_dns_hostnames: bool = False

    @field_validator("cidr_block")
    @classmethod
    def cidr_block_is_valid(cls, cidr_block: str) -> str:
        return validate_cidr(cidr_block)

    @property
    def is_private_cidr(self) -> bool:
        return ipaddress.IPv4Network(self.cidr_block).is_private

    @property
    def ip_count(self) -> int:
        return ipaddress.IPv4Network(self.cidr_block).num_addresses


def aws_vpc(
    ctx: SynthesisContext, name: str, attributes: Mapping[str, Any]
) -> ResourceReference:
    """Declare an aws_vpc resource and return its reference"""
    vpc_attrs = VpcAttributes.model_validate(attributes)
    emit_resource(ctx, "aws_vpc", name, vpc_attrs)
    return ResourceReference.build("aws_vpc", name, vpc_attrs, OUTPUTS)
