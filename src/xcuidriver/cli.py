"""Command-line interface for xcuidriver.

Runs single driver commands against a configured WebDriverAgent, or
serves the stub agent for local development.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="xcuidriver",
        description="WebDriverAgent command translator for iOS automation",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/xcuidriver.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--wda-url", type=str, default=None,
        help="Override the WebDriverAgent URL from the config",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("status", help="Print the agent status")
    subparsers.add_parser("screen", help="Print window size, pixel ratio and status bar height")
    subparsers.add_parser("settings", help="Print the session settings")

    background_parser = subparsers.add_parser("background", help="Send the app to the background")
    background_parser.add_argument(
        "--seconds", type=float, default=None,
        help="How long the app stays in the background",
    )

    touch_parser = subparsers.add_parser("touch-id", help="Simulate a Touch ID scan")
    touch_parser.add_argument(
        "--no-match", action="store_true",
        help="Simulate a non-matching finger",
    )

    enroll_parser = subparsers.add_parser("enroll-touch-id", help="Toggle Touch ID enrollment")
    enroll_parser.add_argument(
        "--disable", action="store_true",
        help="Remove the enrollment instead of adding it",
    )

    subparsers.add_parser("stub-agent", help="Start the stub WebDriverAgent server")

    return parser.parse_args(argv)


async def _run_command(settings, args) -> None:
    """Open a session, run one command and close the session."""
    from xcuidriver.driver.xcuitest import XCUITestDriver

    caps = settings.session.to_caps(wda_url=settings.wda.base_url)
    if args.command == "enroll-touch-id":
        caps["allowTouchIdEnroll"] = True

    driver = XCUITestDriver(wda_timeout=settings.wda.timeout)
    await driver.create_session(caps)
    try:
        if args.command == "status":
            print(json.dumps(await driver.status(), indent=2))

        elif args.command == "screen":
            size = await driver.get_window_size()
            viewport = await driver.get_viewport_rect()
            print(f"Window:      {size.width:g}x{size.height:g}")
            print(f"Pixel ratio: {await driver.get_device_pixel_ratio():g}")
            print(f"Status bar:  {await driver.get_status_bar_height():g}")
            print(
                f"Viewport:    {viewport.width:g}x{viewport.height:g} "
                f"at ({viewport.left:g}, {viewport.top:g})"
            )

        elif args.command == "settings":
            print(json.dumps((await driver.get_settings()).model_dump(by_alias=True), indent=2))

        elif args.command == "background":
            await driver.background(args.seconds)
            print("App sent to background")

        elif args.command == "touch-id":
            await driver.touch_id(match=not args.no_match)
            print(f"Touch ID {'non-' if args.no_match else ''}match simulated")

        elif args.command == "enroll-touch-id":
            await driver.toggle_enroll_touch_id(is_enabled=not args.disable)
            print(f"Touch ID {'unenrolled' if args.disable else 'enrolled'}")
    finally:
        await driver.delete_session()


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the xcuidriver CLI."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return

    from xcuidriver.config.settings import load_settings
    from xcuidriver.utils.logging import setup_logging

    settings = load_settings(args.config)

    if args.verbose:
        settings.logging.level = "DEBUG"
    if args.wda_url:
        settings.wda.base_url = args.wda_url

    setup_logging(settings.logging)

    if args.command == "stub-agent":
        logger.info("Starting stub agent")
        from xcuidriver.stub.server import main as run_stub
        run_stub(host=settings.stub.host, port=settings.stub.port)
    else:
        logger.info("Running %s against %s", args.command, settings.wda.base_url)
        asyncio.run(_run_command(settings, args))


if __name__ == "__main__":
    main()
