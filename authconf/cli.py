"""Command line interface for validating authentication backend configuration."""

import argparse
import sys

import structlog
import yaml

from .loader import (
    ConfigLoader,
    ConfigurationLoadError,
    dump_configuration,
    get_config_loader,
)
from .logging import configure_logging
from .sink import ErrorSink
from .validator import validate_authentication_backend

logger = structlog.get_logger()

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_LOAD_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="authconf",
        description="Validate the `authentication_backend` section of a configuration file",
    )
    parser.add_argument(
        "config",
        nargs="?",
        default=None,
        help="Path to the YAML configuration file (default: $AUTHCONF_CONFIG_PATH)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not print the effective configuration on success",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Validate a configuration file and print the effective configuration.

    Returns:
        0 when the configuration is valid, 1 when validation reported
        problems and 2 when the file could not be loaded
    """
    args = build_parser().parse_args(argv)
    configure_logging()

    loader = ConfigLoader(args.config) if args.config else get_config_loader()
    path = str(loader.config_file)

    try:
        config = loader.load()
    except ConfigurationLoadError as e:
        logger.error("Unable to load configuration", file=path, error=str(e))
        return EXIT_LOAD_ERROR

    sink = ErrorSink()
    validate_authentication_backend(config, sink)

    if sink.has_errors():
        for message in sink:
            logger.error("Configuration error", file=path, error=message)
        logger.error(
            "Configuration is invalid", file=path, error_count=sink.count()
        )
        return EXIT_INVALID

    logger.info("Configuration is valid", file=path)
    if not args.quiet:
        yaml.safe_dump(
            {"authentication_backend": dump_configuration(config)},
            sys.stdout,
            sort_keys=False,
        )
    return EXIT_OK
