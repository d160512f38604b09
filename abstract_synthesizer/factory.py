from collections.abc import Iterable

from abstract_synthesizer.models import SynthesizerSettings
from abstract_synthesizer.synthesizer import Synthesizer
from abstract_synthesizer.terraform import (
    TERRAFORM_KEYS,
    TerraformSynthesizer,
)


class SynthesizerFactory:
    @staticmethod
    def create_synthesizer(
        name: str, keys: Iterable[str] | None = None, kind: str = "abstract"
    ) -> Synthesizer:
        """Build a synthesizer; name is only a label, keys is the vocabulary"""
        if kind == "terraform":
            return TerraformSynthesizer(name, keys or TERRAFORM_KEYS)
        if kind == "abstract":
            if keys is None:
                raise ValueError(f"synthesizer {name} needs a vocabulary")
            return Synthesizer(name, keys)
        raise ValueError(f"unknown synthesizer kind {kind}")

    @classmethod
    def from_settings(cls, settings: SynthesizerSettings) -> Synthesizer:
        return cls.create_synthesizer(
            settings.name, settings.keys or None, kind=settings.kind
        )


def create_synthesizer(name: str, keys: Iterable[str]) -> Synthesizer:
    return SynthesizerFactory.create_synthesizer(name, keys)
