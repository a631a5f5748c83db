#!/usr/bin/env python3
"""Diary Analyzer - Activity Log Message Interpreter

Entry point for running from a source checkout.
"""

import sys
from pathlib import Path

# Adding src to path for development
sys.path.insert(0, str(Path(__file__).parent / "src"))


def main():
    """Main entry point for Diary Analyzer."""
    from diary_analyzer.cli import main as cli_main

    sys.exit(cli_main())


if __name__ == "__main__":
    main()
