"""Command line entry point for Diary Analyzer.

Routes a single message and prints the routing result as JSON.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .core.config_manager import ConfigManager
from .core.error_handler import ConfigurationError, ErrorHandler
from .core.logging_manager import LoggingManager
from .intelligence.request_router import RequestRouter

EXIT_PATTERN_MATCH = 0
EXIT_CONFIG_ERROR = 1
EXIT_LLM_HANDOFF = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="diary-analyzer",
        description="Interpret an activity log message"
    )
    parser.add_argument("message", help="Message to interpret, e.g. 'log coding from 9am to 11am'")
    parser.add_argument("--utc-offset", type=int, default=None,
                       help="Minutes added to UTC to get local time (e.g. -420)")
    parser.add_argument("--last-event-end", help="ISO-8601 end time of the last logged event")
    parser.add_argument("--now", help="ISO-8601 reference time (defaults to the system clock)")
    parser.add_argument("--config", help="Configuration directory")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                       help="Console log level")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command line interface."""
    args = build_parser().parse_args(argv)
    error_handler = ErrorHandler()

    try:
        config = ConfigManager(config_path=Path(args.config) if args.config else None).load_config()
    except ConfigurationError as e:
        error_handler.handle_error(e, context="Loading configuration")
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    if args.log_level:
        config.logging.level = args.log_level
    LoggingManager().configure(config.logging)

    context = {
        "lastEventEndTime": args.last_event_end,
        "currentTime": args.now,
        "utcOffsetMinutes": args.utc_offset,
    }

    router = RequestRouter(default_utc_offset_minutes=config.parser.default_utc_offset_minutes)
    result = router.route(args.message, context)

    print(json.dumps(result.to_dict(), indent=2))
    return EXIT_PATTERN_MATCH if result.is_pattern_match else EXIT_LLM_HANDOFF


if __name__ == "__main__":
    sys.exit(main())
