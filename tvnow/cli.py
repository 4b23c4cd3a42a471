import argparse
import asyncio
import logging
import os
import sys
from datetime import datetime
from typing import Sequence, TextIO

import httpx
from pydantic import ValidationError

from tvnow.areas import SATELLITE_AREAS, area_names, resolve_variant
from tvnow.config import Settings, get_settings, setup_logging
from tvnow.errors import TvNowError
from tvnow.schemas import ChannelColor, GuideRequest, ViewMode
from tvnow.services.guide_service import show_guide
from tvnow.services.renderers import colorize


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1


class UsageError(TvNowError):
    """Bad command line arguments"""
    pass


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog="tvnow", description="tv program display")
    views = parser.add_mutually_exclusive_group()
    views.add_argument("-t", "--today", action="store_true", help="Prints today's program")
    views.add_argument("-w", "--week", action="store_true", help="Prints a week program")
    views.add_argument("-a", "--area", action="store_true", help="Prints area list")
    parser.add_argument("--strict", action="store_true", help="Abort on malformed program entries")
    parser.add_argument("--no-color", action="store_true", help="Never color channel names")
    parser.add_argument("area_name", nargs="?", metavar="AREA", help="Area name (default: $TV_AREA or tokyo)")
    return parser


def view_mode(args: argparse.Namespace) -> ViewMode:
    if args.today:
        return ViewMode.FULL_DAY
    if args.week:
        return ViewMode.WEEKLY
    return ViewMode.SNAPSHOT


def color_supported(out: TextIO) -> bool:
    """Color only for terminals, and never when NO_COLOR is set."""
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(out, "isatty", None)
    return bool(isatty and isatty())


def print_areas(out: TextIO, *, color_enabled: bool = False) -> None:
    """Write all area names sorted, satellite networks highlighted."""
    color = ChannelColor.BRIGHT_YELLOW if color_enabled else None
    for name in area_names():
        out.write(f"{colorize(name, color) if name in SATELLITE_AREAS else name}\n")
    out.flush()


async def run(
    argv: Sequence[str],
    out: TextIO,
    err: TextIO,
    *,
    settings: Settings | None = None,
    now: datetime | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    """
    Run the command and map the outcome to an exit code

    Any error is written to `err` as a single line.

    Returns:
        EXIT_OK on success, EXIT_ERROR otherwise
    """
    try:
        args = build_parser().parse_args(list(argv))
        settings = settings or get_settings()
        color_enabled = not args.no_color and color_supported(out)

        if args.area:
            print_areas(out, color_enabled=color_enabled)
            return EXIT_OK

        if args.strict:
            settings = settings.model_copy(update={"strict_parsing": True})

        variant = resolve_variant(args.area_name or settings.tv_area)
        request = GuideRequest(variant=variant, mode=view_mode(args))
        await show_guide(
            request,
            out,
            settings=settings,
            color_enabled=color_enabled,
            now=now,
            transport=transport,
        )
    except TvNowError as e:
        logger.debug("Guide request failed", exc_info=True)
        err.write(f"{e}\n")
        err.flush()
        return EXIT_ERROR
    except ValidationError as e:
        logger.error("Invalid configuration: %s", e)
        err.write(f"invalid configuration: {e.error_count()} error(s), see log\n")
        err.flush()
        return EXIT_ERROR

    return EXIT_OK


def main() -> None:
    """Console entry point."""
    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging()
        logger.error("Invalid configuration: %s", e)
        sys.exit(EXIT_ERROR)

    setup_logging(settings.log_level)
    sys.exit(asyncio.run(run(sys.argv[1:], sys.stdout, sys.stderr, settings=settings)))
