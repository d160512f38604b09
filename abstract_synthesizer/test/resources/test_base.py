import pytest
from pydantic import ValidationError

from abstract_synthesizer.dsl import SynthesisContext
from abstract_synthesizer.resources.base import (
    ResourceAttributes,
    ResourceReference,
    emit_resource,
    interpolate,
    validate_cidr,
)
from abstract_synthesizer.terraform import TerraformSynthesizer


class BucketAttributes(ResourceAttributes):
    bucket: str
    acl: str | None = None

    @property
    def is_private(self) -> bool:
        return self.acl in {None, "private"}


def test_interpolate() -> None:
    assert interpolate("aws_vpc", "main", "id") == "${aws_vpc.main.id}"


def test_emit_resource(terraform_synthesizer: TerraformSynthesizer) -> None:
    attrs = BucketAttributes(bucket="logs", tags={"Team": "platform"})

    def block(ctx: SynthesisContext) -> None:
        emit_resource(ctx, "aws_s3_bucket", "logs", attrs)

    assert terraform_synthesizer.synthesize(block) == {
        "resource": {
            "aws_s3_bucket": {
                "logs": {"bucket": "logs", "tags": {"Team": "platform"}}
            }
        }
    }


def test_emit_resource_without_tags(terraform_synthesizer: TerraformSynthesizer) -> None:
    def block(ctx: SynthesisContext) -> None:
        emit_resource(ctx, "aws_s3_bucket", "logs", BucketAttributes(bucket="logs"))

    manifest = terraform_synthesizer.synthesize(block)
    assert manifest["resource"]["aws_s3_bucket"]["logs"] == {"bucket": "logs"}


def test_reference() -> None:
    attrs = BucketAttributes(bucket="logs", acl="public-read")
    ref = ResourceReference.build("aws_s3_bucket", "logs", attrs, ["id", "arn"])
    assert ref.address == "aws_s3_bucket.logs"
    assert ref.id == "${aws_s3_bucket.logs.id}"
    assert ref.arn == "${aws_s3_bucket.logs.arn}"
    assert ref.bucket == "logs"
    assert ref.is_private is False
    assert ref.outputs == {
        "id": "${aws_s3_bucket.logs.id}",
        "arn": "${aws_s3_bucket.logs.arn}",
    }


def test_reference_unknown_attribute() -> None:
    ref = ResourceReference.build(
        "aws_s3_bucket", "logs", BucketAttributes(bucket="logs"), ["id"]
    )
    with pytest.raises(AttributeError, match="no output or attribute 'nope'"):
        ref.nope  # noqa: B018
    with pytest.raises(AttributeError):
        ref._private  # noqa: B018


def test_attributes_are_strict() -> None:
    with pytest.raises(ValidationError):
        BucketAttributes(bucket="logs", unknown="x")
    attrs = BucketAttributes(bucket="logs")
    with pytest.raises(ValidationError):
        attrs.bucket = "other"


@pytest.mark.parametrize("key", ["", "_internal", "aws:createdBy", "AWS:x"])
def test_invalid_tag_keys(key: str) -> None:
    with pytest.raises(ValidationError, match="invalid tag key"):
        BucketAttributes(bucket="logs", tags={key: "x"})


def test_terraform_arguments() -> None:
    attrs = BucketAttributes(bucket="logs", tags={"Name": "logs"})
    assert attrs.terraform_arguments() == {"bucket": "logs"}


@pytest.mark.parametrize("cidr", ["10.0.0.0/16", "10.0.1.0/24", "192.168.0.0/28"])
def test_validate_cidr(cidr: str) -> None:
    assert validate_cidr(cidr) == cidr


@pytest.mark.parametrize(
    "cidr,match",
    [
        ("10.0.0.0/8", "prefix between"),
        ("10.0.0.0/30", "prefix between"),
        ("10.0.0.1/24", "invalid CIDR block"),
        ("not-a-cidr", "invalid CIDR block"),
    ],
)
def test_validate_cidr_invalid(cidr: str, match: str) -> None:
    with pytest.raises(ValueError, match=match):
        validate_cidr(cidr)
