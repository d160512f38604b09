import copy

import pytest
from pydantic import ValidationError

from abstract_synthesizer.dsl import SynthesisContext
from abstract_synthesizer.resources.aws_db_subnet_group import (
    DbSubnetGroupAttributes,
    aws_db_subnet_group,
)
from abstract_synthesizer.resources.aws_subnet import (
    SubnetAttributes,
    aws_subnet,
)
from abstract_synthesizer.resources.aws_vpc import (
    VpcAttributes,
    aws_vpc,
)
from abstract_synthesizer.resources.base import (
    DEFAULT_DESCRIPTION,
    ResourceReference,
)
from abstract_synthesizer.terraform import TerraformSynthesizer


def test_vpc_with_subnets(terraform_synthesizer: TerraformSynthesizer) -> None:
    refs: dict[str, ResourceReference] = {}

    def block(ctx: SynthesisContext) -> None:
        vpc = aws_vpc(
            ctx,
            "main",
            {
                "cidr_block": "10.0.0.0/16",
                "enable_dns_hostnames": True,
                "tags": {"Name": "main-vpc"},
            },
        )
        refs["vpc"] = vpc
        for i, zone in enumerate(["us-east-1a", "us-east-1b"]):
            refs[zone] = aws_subnet(
                ctx,
                f"private_{i}",
                {
                    "vpc_id": vpc.id,
                    "cidr_block": f"10.0.{i}.0/24",
                    "availability_zone": zone,
                },
            )
        aws_db_subnet_group(
            ctx,
            "db",
            {
                "name": "main-db",
                "subnet_ids": [refs["us-east-1a"].id, refs["us-east-1b"].id],
            },
        )
        with ctx.output("vpc_id") as output:
            output.value(vpc.id)

    manifest = terraform_synthesizer.synthesize(block)

    assert manifest["resource"]["aws_vpc"] == {
        "main": {
            "cidr_block": "10.0.0.0/16",
            "instance_tenancy": "default",
            "enable_dns_support": True,
            "enable_dns_hostnames": True,
            "tags": {"Name": "main-vpc"},
        }
    }
    assert manifest["resource"]["aws_subnet"]["private_1"] == {
        "vpc_id": "${aws_vpc.main.id}",
        "cidr_block": "10.0.1.0/24",
        "availability_zone": "us-east-1b",
        "map_public_ip_on_launch": False,
    }
    assert manifest["resource"]["aws_db_subnet_group"]["db"] == {
        "name": "main-db",
        "subnet_ids": ["${aws_subnet.private_0.id}", "${aws_subnet.private_1.id}"],
        "description": DEFAULT_DESCRIPTION,
    }
    assert manifest["output"] == {"vpc_id": {"value": "${aws_vpc.main.id}"}}

    assert refs["vpc"].is_private_cidr is True
    assert refs["vpc"].ip_count == 65536
    assert refs["us-east-1a"].subnet_type == "private"
    assert refs["us-east-1a"].ip_count == 251


def test_resource_validation_rolls_back(
    terraform_synthesizer: TerraformSynthesizer,
) -> None:
    terraform_synthesizer.synthesize(
        lambda ctx: aws_vpc(ctx, "main", {"cidr_block": "10.0.0.0/16"})
    )
    before = copy.deepcopy(terraform_synthesizer.synthesis)

    def block(ctx: SynthesisContext) -> None:
        aws_vpc(ctx, "other", {"cidr_block": "10.1.0.0/16"})
        aws_subnet(ctx, "broken", {"vpc_id": "vpc-1", "cidr_block": "10.1.0.0/8"})

    with pytest.raises(ValidationError):
        terraform_synthesizer.synthesize(block)
    assert terraform_synthesizer.synthesis == before


def test_vpc_outputs() -> None:
    ref = ResourceReference.build(
        "aws_vpc", "main", VpcAttributes(cidr_block="10.0.0.0/16"), ["arn"]
    )
    assert ref.arn == "${aws_vpc.main.arn}"


@pytest.mark.parametrize(
    "attributes",
    [
        {"cidr_block": "10.0.0.0/8"},
        {"cidr_block": "10.0.0.0/16", "instance_tenancy": "shared"},
        {"cidr_block": "10.0.0.0/16", "enable_classiclink": True},
        {},
    ],
)
def test_vpc_invalid(attributes: dict) -> None:
    with pytest.raises(ValidationError):
        VpcAttributes.model_validate(attributes)


def test_vpc_public_cidr() -> None:
    assert VpcAttributes(cidr_block="8.8.0.0/16").is_private_cidr is False


def test_subnet_public() -> None:
    attrs = SubnetAttributes(
        vpc_id="vpc-1", cidr_block="10.0.0.0/28", map_public_ip_on_launch=True
    )
    assert attrs.is_public
    assert attrs.subnet_type == "public"
    assert attrs.ip_count == 11
    assert "availability_zone" not in attrs.terraform_arguments()


def test_db_subnet_group_high_availability() -> None:
    attrs = DbSubnetGroupAttributes(
        name="db", subnet_ids=["subnet-a", "subnet-b", "subnet-c"]
    )
    assert attrs.subnet_count == 3
    assert attrs.is_highly_available
    assert not DbSubnetGroupAttributes(
        name="db", subnet_ids=["subnet-a", "subnet-b"]
    ).is_highly_available


@pytest.mark.parametrize(
    "attributes,match",
    [
        ({"name": "default", "subnet_ids": ["a", "b"]}, "reserved"),
        ({"name": "Main_DB", "subnet_ids": ["a", "b"]}, "lowercase"),
        ({"name": "db", "subnet_ids": ["a"]}, "at least 2"),
        ({"name": "db", "subnet_ids": ["a", "a"]}, "duplicates"),
    ],
)
def test_db_subnet_group_invalid(attributes: dict, match: str) -> None:
    with pytest.raises(ValidationError, match=match):
        DbSubnetGroupAttributes.model_validate(attributes)
