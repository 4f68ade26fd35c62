"""CLI entry point for the forecast alert bot."""

import argparse
import logging

from alertbot.config.loader import get_config_value, load_config
from alertbot.config.schema import BotConfig
from alertbot.daemon import BotDaemon
from alertbot.messaging.viber_client import ViberClientError
from alertbot.models.common import epoch_to_iso

DEFAULT_CONFIG = "ops/configs/bot.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="alertbot",
        description="Weather forecast notification bot",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("serve", help="Run the webhook server with the scheduler")
    sub.add_parser("daemon", help="Run only the scheduler in the foreground")
    sub.add_parser("tick", help="Run one scheduler tick")

    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Print one config value")
    get_p.add_argument("key", help="Dotted key, e.g. schedule.interval_seconds")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command in ("serve", "daemon", "tick"):
        try:
            bot = BotDaemon(config)
        except ViberClientError as e:
            print(f"Error: {e}")
            return 1
        if args.command == "serve":
            return _cmd_serve(config, bot)
        elif args.command == "daemon":
            return _cmd_daemon(bot)
        return _cmd_tick(bot)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_serve(config: BotConfig, bot: BotDaemon) -> int:
    import uvicorn

    from alertbot.webhook import create_app

    app = create_app(bot)
    uvicorn.run(app, host=config.server.host, port=config.server.port)
    return 0


def _cmd_daemon(bot: BotDaemon) -> int:
    bot.run_forever()
    return 0


def _cmd_tick(bot: BotDaemon) -> int:
    summary = bot.run_one_tick()
    print(f"Tick at {epoch_to_iso(summary.now)}")
    print(f"  Stale: {summary.stale} | Fetched: {summary.fetched}")
    print(f"  Registry refreshed: {summary.registry_refreshed}")
    print(f"  Broadcast due: {summary.broadcast_due} | Dispatched: {summary.dispatched}")
    if summary.dispatched:
        print(
            f"  Recipients: {summary.recipients_attempted} attempted, "
            f"{summary.recipients_failed} failed"
        )
    for error in summary.errors:
        print(f"  Error: {error}")
    return 0 if not summary.errors else 1


def _cmd_config(config: BotConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            print(get_config_value(config, args.key))
            return 0
        except (KeyError, IndexError, ValueError) as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config get key")
        return 1
