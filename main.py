#!/usr/bin/env python3
"""
Flagged Reply Cleanup - Main entry point.

Watches your X /with_replies timeline and deletes your own replies that the
post-quality classifier has flagged.
"""

import argparse
import asyncio
import signal
import sys
from pathlib import Path
from typing import Optional

# Add project root to path for imports
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

# Load environment variables
from dotenv import load_dotenv  # noqa: E402

load_dotenv()

from config import settings  # noqa: E402
from src.auth.browser_manager import BrowserManager  # noqa: E402
from src.context.identity import IdentityResolver  # noqa: E402
from src.context.view import ViewContext, build_with_replies_url  # noqa: E402
from src.deletion.agent_config import AgentConfig  # noqa: E402
from src.deletion.deletion_agent import DeletionAgent  # noqa: E402
from src.utils.events import EventBus  # noqa: E402
from src.utils.logging import setup_logging  # noqa: E402
from src.utils.statistics import StatisticsReporter  # noqa: E402


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def _positive_float(value: str) -> float:
    number = float(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return number


def parse_arguments(argv: Optional[list] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description="Delete your own X replies flagged by the post-quality classifier.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Open your replies timeline and clean it until interrupted
  python main.py --username alice

  # Scan every 8 seconds for ten minutes
  python main.py --username alice --interval 8000 --duration 600

  # Capture the username from the page (navigate to your /with_replies yourself)
  python main.py
        """,
    )

    parser.add_argument(
        "--username",
        type=str,
        default=settings.X_USERNAME or None,
        help="Your X handle. Defaults to X_USERNAME; captured from the page URL when unset.",
    )

    parser.add_argument(
        "--interval",
        type=_positive_int,
        default=settings.SCAN_INTERVAL_MS,
        help="Scan interval in milliseconds (default: %(default)s).",
    )

    parser.add_argument(
        "--duration",
        type=_positive_float,
        default=None,
        help="Stop after this many seconds. Runs until interrupted when omitted.",
    )

    parser.add_argument(
        "--headless",
        action="store_true",
        default=settings.HEADLESS,
        help="Run the browser without a window.",
    )

    return parser.parse_args(argv)


async def run_cleanup(
    username: Optional[str] = None,
    interval_ms: int = settings.SCAN_INTERVAL_MS,
    duration: Optional[float] = None,
    headless: bool = settings.HEADLESS,
) -> int:
    """
    Open an authenticated session and run the deletion agent.

    Args:
        username: Configured handle (optional, captured from the URL otherwise)
        interval_ms: Scan interval in milliseconds
        duration: Optional run time limit in seconds
        headless: Run browser in headless mode

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    logger = setup_logging()

    logger.info("=" * 60)
    logger.info("Flagged Reply Cleanup - Automated Reply Deletion")
    logger.info("=" * 60)
    logger.info(f"Username: {username or '(capture from page)'}")
    logger.info(f"Scan Interval: {interval_ms}ms")
    logger.info(f"Duration: {f'{duration}s' if duration else 'until interrupted'}")
    logger.info("=" * 60)

    browser_manager = BrowserManager()
    stop_requested = asyncio.Event()

    loop = asyncio.get_running_loop()
    for signum in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(signum, stop_requested.set)
        except (NotImplementedError, RuntimeError):
            # Platform without loop signal support; KeyboardInterrupt still applies
            pass

    try:
        logger.info("Creating authenticated browser session...")
        _, _, page = await browser_manager.create_authenticated_browser(headless=headless)

        view = ViewContext(page)
        identity = IdentityResolver(view, configured=username)
        event_bus = EventBus()
        stats_reporter = StatisticsReporter(event_bus)

        agent = DeletionAgent(
            page,
            get_username=identity.get_username,
            is_with_replies=view.is_with_replies,
            get_pathname=view.pathname,
            event_bus=event_bus,
            config=AgentConfig(scan_interval_ms=interval_ms),
        )

        def on_navigation(frame) -> None:
            if stop_requested.is_set() or frame is not page.main_frame:
                return
            identity.capture()
            agent.on_context_change()
            # Resume once the user is back on their replies timeline
            if not agent.state.running and agent.can_operate():
                agent.handle_toggle(True)

        page.on("framenavigated", on_navigation)

        if username:
            await page.goto(build_with_replies_url(username), wait_until="domcontentloaded")
        else:
            await page.goto(settings.X_BASE_URL, wait_until="domcontentloaded")
            logger.info("Open your profile's /with_replies page in the browser window to begin")

        identity.capture()
        agent.handle_toggle(True)

        try:
            await asyncio.wait_for(stop_requested.wait(), timeout=duration)
            logger.warning("Interrupt received, stopping...")
        except asyncio.TimeoutError:
            logger.info("Run duration elapsed, stopping...")

        # No navigation may resume the agent from here on
        stop_requested.set()
        page.remove_listener("framenavigated", on_navigation)
        agent.stop()
        agent.destroy()
        await agent.wait_idle()
        stats_reporter.print_summary()
        return 0

    except FileNotFoundError as e:
        logger.error("=" * 60)
        logger.error("ERROR: Cookie file not found")
        logger.error("=" * 60)
        logger.error(str(e))
        logger.error("")
        logger.error("Please:")
        logger.error("  1. Log into X in your browser")
        logger.error(f"  2. Export the session cookies to {browser_manager.cookie_path}")
        return 1

    except ValueError as e:
        logger.error("=" * 60)
        logger.error("ERROR: Invalid configuration")
        logger.error("=" * 60)
        logger.error(str(e))
        return 1

    except Exception as e:
        logger.error("=" * 60)
        logger.error("ERROR: Unexpected error during cleanup")
        logger.error("=" * 60)
        logger.error(f"Error: {e}", exc_info=True)
        return 1

    finally:
        await browser_manager.cleanup()
        logger.info("Browser session closed")


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for flagged reply cleanup.

    Parses command-line arguments and runs the agent.
    """
    args = parse_arguments(argv)
    try:
        return asyncio.run(
            run_cleanup(
                username=args.username,
                interval_ms=args.interval,
                duration=args.duration,
                headless=args.headless,
            )
        )
    except KeyboardInterrupt:
        logger = setup_logging()
        logger.warning("Interrupted by user")
        return 0


if __name__ == "__main__":
    sys.exit(main())
