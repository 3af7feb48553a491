"""Entry point for path-sanitize CLI."""

from __future__ import annotations

import sys
from argparse import Namespace
from logging import Logger

from .cli import parse_args
from .config import Config, load_config
from .exit_codes import ExitCode
from .log import setup_logging
from .options import InvalidConfiguration
from .output import OutputFormatter, format_summary
from .progress import BatchProgress
from .safe_path import PathTraversalError, join_sanitized
from .sanitize import sanitize


def _print_error(formatter: OutputFormatter, code: str, message: str) -> None:
    if formatter.json_output:
        print(formatter.error(code, message))
    else:
        print(formatter.error(code, message), file=sys.stderr)


def _load(args: Namespace) -> Config:
    return load_config(
        cli_decode=args.decode,
        cli_parent_directory_pattern=args.parent_pattern,
        cli_disallowed_char_pattern=args.disallowed_pattern,
        cli_base_dir=args.base,
        config_file=args.config,
        paths=args.paths,
        input_file=args.input,
        json_output=args.json,
        quiet=args.quiet,
        verbose=args.verbose,
        log_file=args.log_file,
        progress=args.progress,
        check=args.check,
    )


def _read_paths(config: Config, logger: Logger) -> list[str] | None:
    """Returns paths to sanitize, or None when there is no readable input."""
    if config.paths:
        return list(config.paths)

    if config.input_file and config.input_file != "-":
        logger.debug(f"Reading paths from {config.input_file}")
        with open(config.input_file, encoding="utf-8") as f:
            lines = f.read().splitlines()
    elif config.input_file == "-" or not sys.stdin.isatty():
        logger.debug("Reading paths from stdin")
        lines = sys.stdin.read().splitlines()
    else:
        return None

    return [line for line in lines if line]


def _sanitize_all(
    paths: list[str], config: Config, logger: Logger
) -> list[dict]:
    results = []
    progress = BatchProgress(
        total_paths=len(paths),
        show_progress=config.progress and not config.quiet,
    )

    try:
        for raw in paths:
            sanitized = sanitize(raw, config.options)
            result: dict = {
                "input": raw,
                "sanitized": sanitized,
                "changed": sanitized != raw,
            }
            if result["changed"]:
                logger.debug(f"Sanitized {raw!r} -> {sanitized!r}")
                if config.check:
                    logger.warning(f"Unsafe path: {raw!r}")

            if config.base_dir is not None:
                try:
                    result["joined"] = str(
                        join_sanitized(config.base_dir, sanitized, raw)
                    )
                except PathTraversalError as e:
                    logger.error(f"Skipping unsafe path {raw!r}: {e.reason}")
                    result["error"] = str(e)

            results.append(result)
            progress.update(changed=result["changed"], failed="error" in result)
    finally:
        progress.close()

    return results


def main() -> int:
    args = parse_args()

    logger = setup_logging(
        verbose=args.verbose, quiet=args.quiet, log_file=args.log_file
    )
    formatter = OutputFormatter(json_output=args.json)

    try:
        config = _load(args)
    except InvalidConfiguration as e:
        _print_error(formatter, "INVALID_CONFIGURATION", str(e))
        return ExitCode.INVALID_CONFIGURATION

    try:
        paths = _read_paths(config, logger)
    except (OSError, UnicodeDecodeError) as e:
        source = config.input_file if config.input_file not in (None, "-") else "stdin"
        _print_error(formatter, "INPUT_ERROR", f"Cannot read {source}: {e}")
        return ExitCode.INPUT_ERROR

    if not paths:
        _print_error(
            formatter,
            "INPUT_ERROR",
            "No paths given. Pass PATH arguments, --input FILE, or pipe paths on stdin.",
        )
        return ExitCode.INPUT_ERROR

    try:
        results = _sanitize_all(paths, config, logger)
    except KeyboardInterrupt:
        logger.info("Cancelled by user.")
        return ExitCode.USER_CANCELLED

    print(formatter.results(results))
    logger.debug(format_summary(results))

    if any("error" in r for r in results):
        return ExitCode.JOIN_FAILURE
    if config.check and any(r["changed"] for r in results):
        return ExitCode.UNSAFE_INPUT
    return ExitCode.SUCCESS


if __name__ == "__main__":
    sys.exit(main())
