#!/usr/bin/env python3
"""
Main entry point for the Twitch command bot
"""

import argparse
import asyncio
import logging
import sys

from .commands import build_context, build_handlers
from .config import BotConfig, DynamicCommandStore, load_config
from .constants import CONFIG_FILE, DYNAMIC_CMDS_FILE
from .errors.handling import log_error
from .errors.internal import ConfigError
from .irc import AsyncTwitchIRC
from .logging_config import LoggerConfigurator
from .logs.logger import logger


def build_client(store: DynamicCommandStore) -> AsyncTwitchIRC:
    client = AsyncTwitchIRC()
    for handler in build_handlers(build_context(store)):
        client.register_handler(handler)
    return client


async def run_bot(config: BotConfig, store: DynamicCommandStore) -> None:
    """Connect, authenticate, join and process lines until the server hangs up."""
    client = build_client(store)
    await client.connect()
    try:
        await client.request_tags()
        await client.authenticate(config.nick, config.password)
        await client.join(config.channel)
        await client.listen()
    finally:
        await client.disconnect()


async def main(config_file: str = CONFIG_FILE, commands_file: str = DYNAMIC_CMDS_FILE) -> None:
    """Load configuration and the command store, then run the bot.

    Raises:
        SystemExit: on configuration or unrecoverable runtime errors.
    """
    try:
        logger.log_event("app", "start")
        config = load_config(config_file)
        store = DynamicCommandStore(commands_file)
        store.load()
        await run_bot(config, store)
    except asyncio.CancelledError:
        raise
    except ConfigError as e:
        log_error("Configuration error", e)
        sys.exit(1)
    except Exception as e:
        log_error("Main application error", e)
        sys.exit(1)
    finally:
        logging.info("✅ Application shutdown complete")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Twitch chat command bot")
    parser.add_argument("--config", default=CONFIG_FILE, help="path to config.ini")
    parser.add_argument(
        "--commands", default=DYNAMIC_CMDS_FILE, help="path to the dynamic command file"
    )
    parser.add_argument(
        "--check-config",
        action="store_true",
        help="validate the configuration and exit",
    )
    return parser.parse_args(argv)


def run(argv: list[str] | None = None) -> None:
    """Synchronous entry point for the application.

    Raises:
        SystemExit: If a critical error occurs during execution.
    """
    args = _parse_args(argv)
    LoggerConfigurator().configure()

    if args.check_config:
        try:
            config = load_config(args.config)
        except ConfigError as e:
            logging.error(f"❌ Configuration check failed: {e}")
            sys.exit(1)
        logging.info(f"✅ Configuration check passed nick={config.nick} channel={config.channel}")
        sys.exit(0)

    try:
        asyncio.run(main(args.config, args.commands))
    except KeyboardInterrupt:
        sys.exit(0)
    except asyncio.CancelledError:
        sys.exit(0)


if __name__ == "__main__":
    run()
