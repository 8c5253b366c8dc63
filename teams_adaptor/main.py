"""teams-adaptor entry point.

Receives Bitbucket Server pull-request webhooks and forwards them to a
Microsoft Teams incoming webhook. Usage: teams-adaptor [--config PATH]
[--check].
"""

import argparse
import logging
import sys
from pathlib import Path

from teams_adaptor.config import AppConfig, load_config
from teams_adaptor.errors import ConfigError
from teams_adaptor.logging import AdaptorLogging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="teams-adaptor",
        description="Bitbucket pull-request webhook to Microsoft Teams notification adaptor",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to optional YAML config file (environment is used otherwise)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    return parser.parse_args(argv)


def run_adaptor(config: AppConfig) -> None:
    """Set up logging and serve until interrupted."""
    adaptor_logging = AdaptorLogging(config.logging)
    adaptor_logging.setup()
    log = adaptor_logging.get_logger("teams_adaptor.main")
    log.info("TEAMS_HOSTNAME: %s", config.teams.hostname)
    log.info(
        "RLOG_LOG_LEVEL: %s; RLOG_TRACE_LEVEL: %d",
        config.logging.log_level,
        config.logging.trace_level,
    )

    from teams_adaptor.webhook.server import run_servers

    run_servers(config)


def main(argv: list[str] | None = None) -> int:
    """Entry point: load config, then run listeners."""
    args = parse_args(argv)
    config_path = args.config
    if not config_path.is_file() and config_path == Path("config.yaml"):
        if Path("config.example.yaml").is_file():
            config_path = Path("config.example.yaml")

    try:
        config = load_config(config_path)
    except ConfigError as e:
        logging.basicConfig(level=logging.INFO)
        logging.getLogger("teams_adaptor.main").critical("%s, exiting", e)
        return 1

    if args.check:
        print("Config OK:", config.teams.hostname)
        return 0

    try:
        run_adaptor(config)
    except KeyboardInterrupt:
        return 0
    except OSError as e:
        logging.getLogger("teams_adaptor.main").critical("Listener error: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
