"""
Command line entry point.

    quantumsynth [--config PATH] [--log LEVEL] serve [--host HOST] [--port PORT]

The serve command loads settings, configures logging and runs the API
under uvicorn. SIGINT/SIGTERM drain in-flight requests for up to
server.shutdown_timeout seconds before the process exits.
"""

import argparse
import dataclasses
import logging
import sys
from typing import Optional, Sequence

import uvicorn

from . import __version__
from .core.config import LOG_LEVELS, Settings
from .core.exceptions import ConfigError
from .core.utils import configure_logging

logger = logging.getLogger(__name__)

DESCRIPTION = "QuantumSynth: quantum-inspired text and noise synthesis API."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="quantumsynth", description=DESCRIPTION)
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", default=None,
                        help="config file (default is ./config.yaml)")
    parser.add_argument("--log", default=None, choices=sorted(LOG_LEVELS),
                        help="set log level, overriding the config file")

    subparsers = parser.add_subparsers(dest="command")
    serve = subparsers.add_parser("serve", help="Start the QuantumSynth API server")
    serve.add_argument("--host", default=None, help="bind address (overrides server.host)")
    serve.add_argument("--port", type=int, default=None, help="bind port (overrides server.port)")
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Settings from file and environment with command line overrides applied."""
    settings = Settings.load(args.config)
    if args.log:
        settings.log = dataclasses.replace(settings.log, level=LOG_LEVELS[args.log])
    overrides = {}
    if getattr(args, "host", None):
        overrides["host"] = args.host
    if getattr(args, "port", None):
        overrides["port"] = args.port
    if overrides:
        settings.server = dataclasses.replace(settings.server, **overrides)
    return settings


def serve(settings: Settings) -> None:
    """Run the API until interrupted."""
    from .main import create_app

    app = create_app(settings)
    logger.info(f"Starting QuantumSynth on {settings.server.host}:{settings.server.port}...")
    uvicorn.run(
        app,
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.log.level,
        access_log=True,
        timeout_graceful_shutdown=settings.server.shutdown_timeout
    )
    logger.info("QuantumSynth stopped. Goodbye.")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        print("Welcome to QuantumSynth! Use --help to explore available commands.")
        return 0

    try:
        settings = load_settings(args)
    except ConfigError as e:
        configure_logging("error")
        logger.error(f"Invalid configuration: {e.detail}")
        return 2

    configure_logging(settings.log.level)

    if args.command == "serve":
        serve(settings)
    return 0


if __name__ == "__main__":
    sys.exit(main())
