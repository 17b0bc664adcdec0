"""
Herald CLI entry point.

Provides command-line interface for running the bot and inspecting the
stored guild configuration offline.
"""

import argparse
import json
import sys
from pathlib import Path

from herald import __version__
from herald.config.logging import get_logger, setup_logging
from herald.config.settings import Settings, load_settings
from herald.render.renderer import RenderContext, render
from herald.store import ConfigStore, EventKind


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="herald",
        description="Per-guild welcome/goodbye notification bot for Discord",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Herald {__version__}",
    )

    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to .env file (default: .env in current directory)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override logging level from config",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("run", help="Run the Discord bot")
    subparsers.add_parser("config", help="Show current configuration")

    show_parser = subparsers.add_parser(
        "show",
        help="Print stored templates as JSON",
    )
    show_parser.add_argument(
        "guild_id",
        nargs="?",
        default=None,
        help="Only show this guild (default: every guild)",
    )

    preview_parser = subparsers.add_parser(
        "preview",
        help="Render a guild's stored template without sending it",
    )
    preview_parser.add_argument("guild_id", help="Guild to render for")
    preview_parser.add_argument(
        "kind",
        choices=[kind.value for kind in EventKind],
        help="Which template to render",
    )
    preview_parser.add_argument(
        "--user",
        default="<@0>",
        help="Value substituted for {user} (default: <@0>)",
    )
    preview_parser.add_argument(
        "--server",
        default="Server",
        help="Value substituted for {server} (default: Server)",
    )
    preview_parser.add_argument(
        "--avatar",
        default=None,
        help="Avatar URL used as the welcome thumbnail",
    )

    return parser


def cmd_config(settings: Settings) -> int:
    """Show current configuration."""
    logger = get_logger(__name__)

    logger.info("\n=== Herald Configuration ===\n")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Log Level: {settings.log_level}")
    logger.info(f"Log File: {settings.log_file or 'None (console only)'}")
    logger.info(f"\nBot Name: {settings.bot.name}")
    logger.info(f"Bot Token: {'Set' if settings.bot.token else 'Not set'}")
    logger.info(f"Dev Guild: {settings.bot.dev_guild_id or 'None (global sync)'}")
    logger.info(f"\nStore Path: {settings.store.path}")
    logger.info(
        f"Status Server: "
        f"{f'{settings.status.host}:{settings.status.port}' if settings.status.enabled else 'disabled'}"
    )

    return 0


def cmd_run(settings: Settings) -> int:
    """Start the Discord bot."""
    logger = get_logger(__name__)

    if not settings.bot.token:
        logger.error(
            "Discord bot token not set. Add BOT__TOKEN=<your-token> to your .env file."
        )
        return 1

    from herald.bot import HeraldBot

    bot = HeraldBot(settings)
    logger.info(f"Starting {settings.bot.name}...")
    # log_handler=None: disable discord.py's default logging setup and use ours
    bot.run(settings.bot.token, log_handler=None)
    return 0


def cmd_show(args, settings: Settings) -> int:
    """Dump stored templates in the persisted layout."""
    logger = get_logger(__name__)

    store = ConfigStore.open(settings.store.path)
    if args.guild_id is not None:
        config = store.get(args.guild_id)
        if config is None:
            logger.error(f"No configuration stored for guild {args.guild_id}")
            return 1
        document = {args.guild_id: config.to_document()}
    else:
        document = {guild_id: store.get(guild_id).to_document() for guild_id in store.guild_ids()}

    print(json.dumps(document, indent=2, ensure_ascii=False))
    return 0


def cmd_preview(args, settings: Settings) -> int:
    """Render a stored template with placeholder values and print the payload."""
    logger = get_logger(__name__)

    kind = EventKind(args.kind)
    store = ConfigStore.open(settings.store.path)
    config = store.get(args.guild_id)
    template = config.slot(kind) if config else None
    if template is None:
        logger.error(f"No {kind.value} template stored for guild {args.guild_id}")
        return 1

    context = RenderContext(
        mention_or_tag=args.user,
        guild_name=args.server,
        avatar_url=args.avatar,
    )
    payload = render(template, kind, context)
    print(json.dumps({"channel": template.channel_id, **payload.to_dict()}, indent=2, ensure_ascii=False))
    return 0


def main() -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    # Load settings
    try:
        settings = load_settings(env_file=args.env_file)
    except Exception as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    # Override log level if specified
    if args.log_level:
        settings.log_level = args.log_level

    setup_logging(settings)

    if args.command == "config":
        return cmd_config(settings)
    elif args.command == "run":
        return cmd_run(settings)
    elif args.command == "show":
        return cmd_show(args, settings)
    elif args.command == "preview":
        return cmd_preview(args, settings)
    else:
        # Default: show help
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
