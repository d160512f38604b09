from typing import Any

import toml
from pydantic import ValidationError

from abstract_synthesizer.exceptions import SynthesizerError
from abstract_synthesizer.models import SynthesizerSettings

_config: dict[str, Any] | None = None


class ConfigNotFound(SynthesizerError):
    pass


class SynthesizerNotConfigured(SynthesizerError):
    pass


def get_config() -> dict[str, Any]:
    if _config is None:
        raise ConfigNotFound("configuration was not initialized")
    return _config


def init(config: dict[str, Any] | None) -> dict[str, Any] | None:
    global _config  # noqa: PLW0603
    _config = config
    return _config


def init_from_toml(configfile: str) -> dict[str, Any] | None:
    try:
        return init(toml.load(configfile))
    except FileNotFoundError:
        raise ConfigNotFound(f"config file {configfile} not found") from None
    except toml.TomlDecodeError as e:
        raise ConfigNotFound(f"config file {configfile} is not valid toml: {e}") from None


def get_synthesizer_settings(name: str) -> SynthesizerSettings:
    try:
        table = get_config()["synthesizers"][name]
    except KeyError:
        raise SynthesizerNotConfigured(
            f"synthesizer {name} not found in [synthesizers] config"
        ) from None
    try:
        return SynthesizerSettings(name=name, **table)
    except ValidationError as e:
        raise SynthesizerNotConfigured(f"synthesizer {name} is invalid: {e}") from None


def list_synthesizers() -> list[str]:
    return list(get_config().get("synthesizers", {}))
