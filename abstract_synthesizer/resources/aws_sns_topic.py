import json
from collections.abc import Mapping
from typing import (
    Annotated,
    Any,
    Literal,
)

from pydantic import (
    Field,
    field_validator,
    model_validator,
)

from abstract_synthesizer.dsl import SynthesisContext
from abstract_synthesizer.resources.base import (
    ResourceAttributes,
    ResourceReference,
    emit_resource,
)

OUTPUTS = [
    "id",
    "arn",
    "name",
    "owner",
    "beginning_archive_time",
]

FEEDBACK_PROTOCOLS = ["application", "http", "lambda", "sqs", "firehose"]

SampleRate = Annotated[int | None, Field(ge=0, le=100)]


class SnsTopicAttributes(ResourceAttributes):
    name: str | None = None
    display_name: str | None = None
    kms_master_key_id: str | None = None
    fifo_topic: bool = False
    content_based_deduplication: bool = False
    delivery_policy: str | None = None
    policy: str | None = None
    message_data_protection_policy: str | None = None
    tracing_config: Literal["Active", "PassThrough"] | None = None

    application_success_feedback_role_arn: str | None = None
    application_success_feedback_sample_rate: SampleRate = None
    application_failure_feedback_role_arn: str | None = None
    http_success_feedback_role_arn: str | None = None
    http_success_feedback_sample_rate: SampleRate = None
    http_failure_feedback_role_arn: str | None = None
    lambda_success_feedback_role_arn: str | None = None
    lambda_success_feedback_sample_rate: SampleRate = None
    lambda_failure_feedback_role_arn: str | None = None
    sqs_success_feedback_role_arn: str | None = None
    sqs_success_feedback_sample_rate: SampleRate = None
    sqs_failure_feedback_role_arn: str | None = None
    firehose_success_feedback_role_arn: str | None = None
    firehose_success_feedback_sample_rate: SampleRate = None
    firehose_failure_feedback_role_arn: str | None = None

    @field_validator("delivery_policy", "policy", "message_data_protection_policy")
    @classmethod
    def policy_is_json(cls, policy: str | None) -> str | None:
        if policy is not None:
            try:
                json.loads(policy)
            except json.JSONDecodeError as e:
                raise ValueError(f"policy must be valid JSON: {e.msg}") from None
        return policy

    @model_validator(mode="after")
    def fifo_settings_are_consistent(self) -> "SnsTopicAttributes":
        if self.name:
            if self.fifo_topic and not self.name.endswith(".fifo"):
                raise ValueError("FIFO topic names must end with '.fifo' suffix")
            if not self.fifo_topic and self.name.endswith(".fifo"):
                raise ValueError("Standard topic names cannot end with '.fifo' suffix")
        if not self.fifo_topic and self.content_based_deduplication:
            raise ValueError("content_based_deduplication is only valid for FIFO topics")
        for protocol in FEEDBACK_PROTOCOLS:
            sample_rate = f"{protocol}_success_feedback_sample_rate"
            role_arn = f"{protocol}_success_feedback_role_arn"
            if getattr(self, sample_rate) is not None and not getattr(self, role_arn):
                raise ValueError(f"{sample_rate} requires {role_arn} to be set")
        return self

    def terraform_arguments(self) -> dict[str, Any]:
        arguments = super().terraform_arguments()
        if not self.fifo_topic:
            arguments.pop("content_based_deduplication")
        return arguments

    @property
    def topic_type(self) -> str:
        return "FIFO" if self.fifo_topic else "Standard"

    @property
    def is_fifo(self) -> bool:
        return self.fifo_topic

    @property
    def is_encrypted(self) -> bool:
        return bool(self.kms_master_key_id)

    @property
    def has_access_policy(self) -> bool:
        return bool(self.policy)

    @property
    def feedback_protocols(self) -> list[str]:
        return [
            protocol
            for protocol in FEEDBACK_PROTOCOLS
            if getattr(self, f"{protocol}_success_feedback_role_arn")
            or getattr(self, f"{protocol}_failure_feedback_role_arn")
        ]

    @property
    def has_feedback_enabled(self) -> bool:
        return bool(self.feedback_protocols)

    @property
    def tracing_enabled(self) -> bool:
        return self.tracing_config == "Active"


def aws_sns_topic(
    ctx: SynthesisContext, name: str, attributes: Mapping[str, Any] | None = None
) -> ResourceReference:
    topic_attrs = SnsTopicAttributes.model_validate(attributes or {})
    emit_resource(ctx, "aws_sns_topic", name, topic_attrs)
    return ResourceReference.build("aws_sns_topic", name, topic_attrs, OUTPUTS)
