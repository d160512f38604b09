import logging
import os

from abstract_synthesizer.utils import config

SYNTHESIZER_CONFIG = "SYNTHESIZER_CONFIG"
SYNTHESIZER_LOG_LEVEL = "SYNTHESIZER_LOG_LEVEL"

LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
LOG_FMT = "[%(asctime)s] [%(levelname)s] [%(filename)s:%(funcName)s:%(lineno)d] - %(message)s"


def init_env(
    log_level: str | None = None,
    config_file: str | None = None,
) -> None:
    # store env configs in environment variables. this way child processes
    # will inherit them and can set up the same environment by running
    # `init_env()` with no parameters.
    if log_level:
        os.environ[SYNTHESIZER_LOG_LEVEL] = log_level
    if config_file:
        os.environ[SYNTHESIZER_CONFIG] = config_file

    logging.basicConfig(
        format=LOG_FMT,
        datefmt=LOG_DATEFMT,
        level=getattr(logging, os.environ.get(SYNTHESIZER_LOG_LEVEL, "INFO")),
    )

    # the configuration file is optional, the built-in terraform
    # synthesizer works without one
    config_file = os.environ.get(SYNTHESIZER_CONFIG)
    if config_file:
        config.init_from_toml(config_file)
        logging.debug(f"loaded configuration from {config_file}")
    else:
        config.init({})
