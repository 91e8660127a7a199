import logging
import os

import click
from rich.logging import RichHandler

from .constants import (
    DEFAULT_BASE_IMAGE,
    DEFAULT_BUILD_SUBDIR,
    DEFAULT_CONFIG_FILE,
    DEFAULT_IMAGE_TAG,
    DEFAULT_MATURIN_EXTRA_ARGS,
    DEFAULT_PYTHON_BIN,
)
from .core import BuildError, DeltaBuilder
from .services.config_loader import ConfigLoader


def _resolve_option(cli_value, config, key, default=None):
    if cli_value is not None:
        return cli_value
    if key in config:
        return config[key]
    return default


logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True, show_level=False, show_path=False)],
)


@click.command()
@click.option(
    "--config",
    required=False,
    type=click.Path(),
    help=f"Path to a YAML configuration file. Defaults to {DEFAULT_CONFIG_FILE} if present.",
)
@click.option(
    "--workdir",
    required=False,
    type=click.Path(file_okay=False),
    help="delta-rs checkout to build. It receives the Dockerfile and is mounted into the container (default: current directory).",
)
@click.option("--image-tag", required=False, help=f"Tag for the build image (default: {DEFAULT_IMAGE_TAG}).")
@click.option("--base-image", required=False, help=f"manylinux base image (default: {DEFAULT_BASE_IMAGE}).")
@click.option(
    "--python-bin",
    required=False,
    help=f"Interpreter bin directory inside the image (default: {DEFAULT_PYTHON_BIN}).",
)
@click.option(
    "--build-subdir",
    required=False,
    help=f"Directory holding the Makefile, relative to the checkout (default: {DEFAULT_BUILD_SUBDIR}).",
)
@click.option(
    "--maturin-extra-args",
    required=False,
    help=f"Value exported as MATURIN_EXTRA_ARGS (default: '{DEFAULT_MATURIN_EXTRA_ARGS}').",
)
@click.option(
    "--command-timeout",
    required=False,
    type=float,
    default=None,
    help="Timeout in seconds for each docker command. Unlimited by default.",
)
@click.option("--verbose", is_flag=True, default=None, help="Enable verbose logging")
@click.option("--log-file", type=click.Path(), help="Path to log file")
@click.option(
    "--dry-run",
    is_flag=True,
    default=None,
    help="Print the Dockerfile path and docker commands without writing or running anything.",
)
def main(
    config,
    workdir,
    image_tag,
    base_image,
    python_bin,
    build_subdir,
    maturin_extra_args,
    command_timeout,
    verbose,
    log_file,
    dry_run,
):
    """Build a manylinux release wheel of the delta-rs Python bindings in Docker."""
    logger = logging.getLogger("deltabuild")

    try:
        config_loader = ConfigLoader()
        resolved_config = config
        if resolved_config is None:
            default_config_path = os.path.join(os.getcwd(), DEFAULT_CONFIG_FILE)
            if os.path.exists(default_config_path):
                resolved_config = default_config_path

        config_values = config_loader.load(resolved_config)
    except BuildError as exc:
        raise click.ClickException(str(exc)) from exc

    workdir = _resolve_option(workdir, config_values, "workdir")
    image_tag = str(_resolve_option(image_tag, config_values, "image_tag", default=DEFAULT_IMAGE_TAG))
    base_image = str(_resolve_option(base_image, config_values, "base_image", default=DEFAULT_BASE_IMAGE))
    python_bin = str(_resolve_option(python_bin, config_values, "python_bin", default=DEFAULT_PYTHON_BIN))
    build_subdir = str(
        _resolve_option(build_subdir, config_values, "build_subdir", default=DEFAULT_BUILD_SUBDIR)
    )
    maturin_extra_args = str(
        _resolve_option(
            maturin_extra_args,
            config_values,
            "maturin_extra_args",
            default=DEFAULT_MATURIN_EXTRA_ARGS,
        )
    )
    command_timeout = _resolve_option(command_timeout, config_values, "command_timeout")
    if command_timeout is not None:
        command_timeout = float(command_timeout)
    verbose = bool(_resolve_option(verbose, config_values, "verbose", default=False))
    log_file = _resolve_option(log_file, config_values, "log_file")
    dry_run = bool(_resolve_option(dry_run, config_values, "dry_run", default=False))

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        logger.addHandler(file_handler)

    try:
        builder = DeltaBuilder(
            workdir=workdir,
            image_tag=image_tag,
            base_image=base_image,
            python_bin=python_bin,
            build_subdir=build_subdir,
            maturin_extra_args=maturin_extra_args,
            dry_run=dry_run,
            command_timeout=command_timeout,
        )
    except BuildError as exc:
        raise click.ClickException(str(exc)) from exc

    raise SystemExit(builder.run())


if __name__ == "__main__":
    main()
