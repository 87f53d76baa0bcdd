# src/freemind_sonos/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs one announcement:
- digest (default): music, then what is due today,
- alert: speak only if an alert falls into the next N minutes,
- date: greeting with the current date and time.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from collections.abc import Sequence

from ..config import Settings
from ..core import pipeline
from ..freemind.freemind_client import FreemindError
from ..freemind.registry_xml import RegistryFormatError
from ..logging_setup import setup_logging
from ..media.jellyfin import MediaError
from ..speaker.sonos import SpeakerError
from ..tts.engine import SpeechError
from .bootstrap import BootstrapError, create_initial_state

logger = logging.getLogger(__name__)

HANDLED_ERRORS = (
    BootstrapError,
    FreemindError,
    RegistryFormatError,
    SpeechError,
    MediaError,
    SpeakerError,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="freemind-sonos",
        description="Announce the Freemind digest on one Sonos speaker.",
    )
    parser.add_argument("--debug", action="store_true", help="Change log level to debug")
    parser.add_argument(
        "command",
        nargs="?",
        choices=("digest", "alert", "date"),
        default="digest",
        help="What to announce (default: digest)",
    )
    parser.add_argument(
        "--window",
        type=int,
        default=None,
        metavar="MINUTES",
        help="Alert window for the 'alert' command (default: FMSONOS_ALERT_WINDOW_MINUTES)",
    )
    return parser


async def run(command: str, settings: Settings, *, window: int | None = None) -> None:
    state = await create_initial_state(settings)
    logger.info("Initialized.")
    try:
        if command == "alert":
            await pipeline.announce_alert(state, window or settings.alert_window_minutes)
        elif command == "date":
            await pipeline.announce_date(state)
        else:
            await pipeline.announce_digest(state)
    finally:
        await state.aclose()


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()

    if args.debug:
        console_level = logging.DEBUG
    else:
        console_level = getattr(logging, str(settings.log_level).upper(), logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Initializing . . .")
    try:
        asyncio.run(run(args.command, settings, window=args.window))
    except HANDLED_ERRORS as exc:
        logger.error("%s", exc)
        logger.debug("Details:", exc_info=True)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted.")
        return 1

    logger.info("Done.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
