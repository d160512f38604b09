from collections.abc import Iterator

import pytest

from abstract_synthesizer.synthesizer import Synthesizer
from abstract_synthesizer.terraform import TerraformSynthesizer
from abstract_synthesizer.utils import config

APP_KEYS = ["server", "database", "user"]


@pytest.fixture
def app_synthesizer() -> Synthesizer:
    return Synthesizer("app_config", APP_KEYS)


@pytest.fixture
def terraform_synthesizer() -> TerraformSynthesizer:
    return TerraformSynthesizer()


@pytest.fixture(autouse=True)
def reset_config() -> Iterator[None]:
    yield
    config.init(None)
