import logging
import os
import sys
from collections.abc import Callable
from pathlib import Path

import click
from ruamel.yaml.error import YAMLError

from abstract_synthesizer.exceptions import SynthesizerError
from abstract_synthesizer.factory import SynthesizerFactory
from abstract_synthesizer.status import ExitCodes
from abstract_synthesizer.synthesizer import Synthesizer
from abstract_synthesizer.terraform import (
    TerraformSynthesizer,
    render_terraform_json,
)
from abstract_synthesizer.utils import config
from abstract_synthesizer.utils.environment import (
    SYNTHESIZER_CONFIG,
    init_env,
)
from abstract_synthesizer.utils.ruamel import dump_yaml

BUILTIN_SYNTHESIZERS: dict[str, Callable[[], Synthesizer]] = {
    "terraform": TerraformSynthesizer,
}


def config_file(function: Callable) -> Callable:
    help_msg = "Path to configuration file in toml format."
    function = click.option(
        "--config",
        "configfile",
        default=lambda: os.environ.get(SYNTHESIZER_CONFIG),
        help=help_msg,
    )(function)
    return function


def log_level(function: Callable) -> Callable:
    function = click.option(
        "--log-level",
        help="log-level of the command. Defaults to INFO.",
        type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    )(function)
    return function


def synthesizer_name(function: Callable) -> Callable:
    function = click.option(
        "--synthesizer",
        "synthesizer_name",
        required=True,
        help="name of a synthesizer from the configuration file, "
        "or 'terraform' for the built-in terraform vocabulary.",
    )(function)
    return function


def source_file(function: Callable) -> Callable:
    function = click.argument(
        "source",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
    )(function)
    return function


def get_synthesizer(name: str) -> Synthesizer:
    if name in BUILTIN_SYNTHESIZERS and name not in config.list_synthesizers():
        return BUILTIN_SYNTHESIZERS[name]()
    return SynthesizerFactory.from_settings(config.get_synthesizer_settings(name))


def load_synthesizer(name: str) -> Synthesizer:
    try:
        return get_synthesizer(name)
    except (config.ConfigNotFound, config.SynthesizerNotConfigured, ValueError) as e:
        logging.error(str(e))
        sys.exit(ExitCodes.CONFIG_ERROR)


def run_synthesis(name: str, source: Path) -> Synthesizer:
    synthesizer = load_synthesizer(name)
    logging.debug(f"synthesizing {source} with {synthesizer!r}")
    try:
        synthesizer.synthesize(source.read_text(encoding="utf-8"))
    except SynthesizerError as e:
        logging.error(f"{source}: {e}")
        sys.exit(ExitCodes.ERROR)
    return synthesizer


def serialize_manifest(synthesizer: Synthesizer, output_format: str) -> str:
    try:
        if output_format == "yaml":
            return dump_yaml(synthesizer.synthesis)
        return render_terraform_json(synthesizer.synthesis) + "\n"
    except (TypeError, ValueError, YAMLError) as e:
        logging.error(
            f"manifest of {synthesizer.name} can not be rendered as {output_format}: {e}"
        )
        sys.exit(ExitCodes.ERROR)


@click.group()
@config_file
@log_level
def root(configfile: str | None, log_level: str | None) -> None:
    try:
        init_env(log_level=log_level, config_file=configfile)
    except config.ConfigNotFound as e:
        logging.error(str(e))
        sys.exit(ExitCodes.CONFIG_ERROR)


@root.command(short_help="Render a DSL source file into a manifest.")
@source_file
@synthesizer_name
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"]),
    default="json",
    help="output format of the manifest.",
)
@click.option("--output", help="write the manifest to this file.", default=None)
def render(
    source: Path, synthesizer_name: str, output_format: str, output: str | None
) -> None:
    synthesizer = run_synthesis(synthesizer_name, source)
    content = serialize_manifest(synthesizer, output_format)

    if output:
        Path(output).write_text(content, encoding="utf-8")
        logging.info(f"manifest written to {output}")
    else:
        click.echo(content, nl=False)


@root.command(short_help="Check a DSL source file without printing the manifest.")
@source_file
@synthesizer_name
def validate(source: Path, synthesizer_name: str) -> None:
    synthesizer = run_synthesis(synthesizer_name, source)
    logging.info(
        f"{source} is valid, {len(synthesizer.synthesis)} top level declarations"
    )


@root.command(short_help="List the vocabulary of a synthesizer.")
@synthesizer_name
def keys(synthesizer_name: str) -> None:
    for key in sorted(load_synthesizer(synthesizer_name).keys):
        click.echo(key)
