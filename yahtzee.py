#!/usr/bin/env python3
"""
Entry point for terminal Yahtzee.

Usage:
    python yahtzee.py                              # Play
    python yahtzee.py --seed 42                    # Reproducible dice
    python yahtzee.py --log-file yahtzee.log       # Write diagnostics to a file
"""
import argparse
import logging
import random


def parse_args(argv=None):
    """Parse command-line arguments.

    Args:
        argv: Optional list of args (for testing). None uses sys.argv.

    Returns:
        Parsed argparse.Namespace.
    """
    parser = argparse.ArgumentParser(description="Yahtzee — single player, in the terminal")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed the dice for a reproducible game")
    parser.add_argument("--log-file", default=None, metavar="PATH",
                        help="Write diagnostic logging to PATH (off by default)")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level for --log-file (default: INFO)")
    parser.add_argument("--settings", default=None, metavar="PATH",
                        help="Settings file (default: ~/.yahtzee_settings.json)")
    return parser.parse_args(argv)


def configure_logging(log_file, level):
    """Send logs to a file. The TUI owns the terminal, so nothing goes to stderr."""
    if log_file is None:
        logging.getLogger().addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        filename=log_file,
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.log_file, args.log_level)
    if args.seed is not None:
        random.seed(args.seed)

    from frontend_adapter import FrontendAdapter
    from tui import main as run_tui

    final_total = run_tui(FrontendAdapter(settings_path=args.settings))
    if final_total is None:
        print("Game abandoned.")
    else:
        print(f"Final score: {final_total}")


if __name__ == "__main__":
    main()
