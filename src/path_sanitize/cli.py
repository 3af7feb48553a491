"""CLI argument parsing."""

import argparse

from . import __version__


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="path-sanitize",
        description="Sanitize untrusted paths so they cannot escape a base directory",
        epilog="""
Examples:
  %(prog)s ../../etc/passwd                    # -> etc/passwd
  %(prog)s -b /var/www %%2e%%2e%%2fsecret.txt     # -> /var/www/secret.txt
  %(prog)s -i paths.txt --json                 # Sanitize a file of paths
  cat paths.txt | %(prog)s --check             # Fail if any path needed sanitizing
  %(prog)s --decode '%%2E=.' --decode '%%2e=.' PATH  # Custom decode rules

Environment variables:
  PATH_SANITIZE_CONFIG                     Config file (alternative to -c)
  PATH_SANITIZE_BASE_DIR                   Base directory (alternative to -b)
  PATH_SANITIZE_PARENT_DIRECTORY_PATTERN   Traversal pattern
  PATH_SANITIZE_DISALLOWED_CHAR_PATTERN    Disallowed character pattern

Config file: ~/.path-sanitize.toml or ~/.config/path-sanitize/config.toml
""",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "paths",
        nargs="*",
        metavar="PATH",
        help="Paths to sanitize (default: read from --input or stdin)",
    )

    # Input
    input_group = parser.add_argument_group("Input")
    input_group.add_argument(
        "-i",
        "--input",
        metavar="FILE",
        help="Read paths from FILE, one per line ('-' for stdin)",
    )
    input_group.add_argument(
        "-b",
        "--base",
        metavar="DIR",
        default=None,
        help="Join each sanitized path onto DIR and print the result",
    )

    # Rules
    rules_group = parser.add_argument_group("Rules")
    rules_group.add_argument(
        "--decode",
        action="append",
        metavar="PATTERN=REPLACEMENT",
        help="Decode rule applied before sanitizing (can repeat; replaces defaults)",
    )
    rules_group.add_argument(
        "--parent-pattern",
        metavar="REGEX",
        help="Pattern matching a separator-bounded parent directory segment",
    )
    rules_group.add_argument(
        "--disallowed-pattern",
        metavar="REGEX",
        help="Pattern matching characters to strip from the result",
    )
    rules_group.add_argument(
        "-c",
        "--config",
        metavar="PATH",
        help="TOML config file (default: ~/.path-sanitize.toml)",
    )

    # Output
    output_group = parser.add_argument_group("Output")
    output_group.add_argument(
        "--json",
        action="store_true",
        help="Output results as JSON",
    )
    output_group.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress progress and log output, only show errors",
    )
    output_group.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug information",
    )
    output_group.add_argument(
        "--log-file",
        metavar="PATH",
        help="Write logs to file",
    )
    output_group.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress bar while sanitizing",
    )

    # Other
    parser.add_argument(
        "--check",
        action="store_true",
        help="Exit with status 3 if any path was changed by sanitizing",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser.parse_args(args)
