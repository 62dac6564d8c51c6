#!/usr/bin/env python3
"""
Pitch Board - Startup pitch listing site.

Command-line entry point for running the web application:
  - Validate configuration (strict in production)
  - Configure logging
  - Serve the Flask app

Usage:
    python main.py                      # Serve on 127.0.0.1:5001
    python main.py --port 8000          # Serve on another port
    python main.py --debug              # Flask debug mode with reloader
    python main.py --show-config        # Show configuration and exit

Examples:
    # Development run
    python main.py --debug

    # Production-like run on all interfaces
    APP_ENV=production python main.py --host 0.0.0.0 --port 8000
"""

import argparse
import sys

from src.config import (
    DEBUG,
    configure_logging,
    is_production,
    print_config_summary,
    validate_config,
)


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="pitch-board",
        description="Serve the Pitch Board startup listing site.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                           Serve on 127.0.0.1:5001
  %(prog)s --host 0.0.0.0 -p 8000    Serve on all interfaces, port 8000
  %(prog)s --debug                   Enable Flask debug mode
  %(prog)s --show-config             Show configuration and exit
        """,
    )

    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Interface to bind (default: 127.0.0.1)",
    )

    parser.add_argument(
        "--port", "-p",
        type=int,
        default=5001,
        metavar="PORT",
        help="Port to listen on (default: 5001)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        default=None,
        help="Enable Flask debug mode (default: DEBUG env var)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Override LOG_LEVEL",
    )

    # Info options
    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Show current configuration and exit",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 1.0.0",
    )

    return parser


def show_config() -> None:
    """Display current configuration."""
    print("=" * 60)
    print("Pitch Board Configuration")
    print("=" * 60)
    print_config_summary()

    errors = validate_config()
    if errors:
        print("\nConfiguration warnings:")
        for error in errors:
            print(f"  ⚠️  {error}")
    else:
        print("\n✓ Configuration valid")
    print("=" * 60)


def main(argv: list = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command-line arguments (default: sys.argv[1:]).

    Returns:
        Exit code (0 = success, 1 = error).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Handle --show-config
    if args.show_config:
        show_config()
        return 0

    errors = validate_config()
    if errors:
        for error in errors:
            print(f"⚠️  {error}")
        if is_production():
            print("\n❌ Refusing to start with invalid production configuration")
            return 1

    configure_logging(args.log_level)

    # Imported late so --show-config works without building the app
    from web.app import app

    debug = DEBUG if args.debug is None else args.debug

    print("=" * 60)
    print("Pitch Board")
    print("=" * 60)
    print(f"Open http://{args.host}:{args.port} in your browser")
    print("Press Ctrl+C to stop")
    print("=" * 60)

    try:
        app.run(host=args.host, port=args.port, debug=debug)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
