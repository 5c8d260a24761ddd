#!/usr/bin/env python3
"""
Logstream - Main Entry Point
Run the live log tail terminal UI
"""
import sys

from logstream.config import Settings
from logstream.util import setup_logging
from logstream.UI import run_app


def main() -> None:
    settings = Settings.from_env()
    logger = setup_logging(settings.log_dir)
    logger.info(f"Starting Logstream against {settings.stream_url}")

    try:
        run_app(settings)
    except KeyboardInterrupt:
        print("\nLogstream terminated by user")
    except Exception as e:
        logger.critical(f"Logstream crashed: {e}", exc_info=True)
        print(f"\nError running Logstream: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
