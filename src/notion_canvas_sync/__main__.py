"""CLI entry point for Notion Canvas Sync.

Usage:
    python -m notion_canvas_sync             # Interactive sync
    python -m notion_canvas_sync --verbose   # Same, with debug logging
"""

import argparse
import logging
import sys

from dotenv import load_dotenv

from notion_canvas_sync.config import DEFAULT_CONFIG_DIR


def setup_logging(verbose: bool = False) -> None:
    """Configure logging to stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    # canvasapi and the HTTP stack are chatty at debug level
    for name in ("canvasapi", "httpx", "urllib3"):
        logging.getLogger(name).setLevel(logging.WARNING)


def main(argv: list[str] | None = None) -> None:
    """Main entry point for notion-canvas-sync CLI."""
    parser = argparse.ArgumentParser(
        prog="notion-canvas-sync",
        description="Sync Canvas LMS assignments into a Notion database",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show debug output",
    )
    parser.add_argument(
        "--config-dir",
        default=str(DEFAULT_CONFIG_DIR),
        help="Directory holding notion.key, canvas.key and canvas.url",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version and exit",
    )

    args = parser.parse_args(argv)

    if args.version:
        from notion_canvas_sync import __version__

        print(f"notion-canvas-sync {__version__}")
        sys.exit(0)

    load_dotenv()
    setup_logging(args.verbose)

    from notion_canvas_sync.api.auth import CredentialStore
    from notion_canvas_sync.prompts import Prompter
    from notion_canvas_sync.sync.assignments import run

    prompter = Prompter()
    run(CredentialStore(args.config_dir, prompt=prompter.ask), prompter)
    sys.exit(0)


if __name__ == "__main__":
    main()
