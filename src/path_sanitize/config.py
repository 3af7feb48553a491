"""Configuration loading from CLI args, environment, and config file."""

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

from .options import DecodeRule, InvalidConfiguration, SanitizeOptions

# tomli is in stdlib as tomllib in Python 3.11+
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


ENV_CONFIG = "PATH_SANITIZE_CONFIG"
ENV_PARENT_DIRECTORY_PATTERN = "PATH_SANITIZE_PARENT_DIRECTORY_PATTERN"
ENV_DISALLOWED_CHAR_PATTERN = "PATH_SANITIZE_DISALLOWED_CHAR_PATTERN"
ENV_BASE_DIR = "PATH_SANITIZE_BASE_DIR"

DEFAULT_CONFIG_PATHS = [
    Path.home() / ".path-sanitize.toml",
    Path.home() / ".config" / "path-sanitize" / "config.toml",
]

CONFIG_FILE_KEYS = frozenset(
    {"decode", "parent_directory_pattern", "disallowed_char_pattern", "base_dir"}
)


@dataclass
class Config:
    """Resolved configuration from all sources."""

    options: SanitizeOptions
    base_dir: str | None = None

    # Input
    paths: list[str] | None = None
    input_file: str | None = None

    # Output options
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_file: str | None = None
    progress: bool = False

    # Behaviour
    check: bool = False


def parse_decode_rule(arg: str) -> DecodeRule:
    """Parse a ``PATTERN=REPLACEMENT`` argument; the replacement may be empty."""
    pattern, sep, replacement = arg.partition("=")
    if not sep or not pattern:
        raise InvalidConfiguration(arg, "decode rules must look like PATTERN=REPLACEMENT")
    return DecodeRule(pattern, replacement)


def _load_config_file(path: str | Path | None) -> dict[str, object]:
    if path is not None:
        paths = [Path(path)]
    elif os.environ.get(ENV_CONFIG):
        paths = [Path(os.environ[ENV_CONFIG])]
    else:
        paths = DEFAULT_CONFIG_PATHS

    for config_path in paths:
        if config_path.exists():
            try:
                with open(config_path, "rb") as f:
                    file_config = dict(tomllib.load(f))
            except tomllib.TOMLDecodeError as e:
                raise InvalidConfiguration(
                    str(config_path), f"cannot parse config file: {e}"
                ) from e
            except OSError as e:
                raise InvalidConfiguration(
                    str(config_path), f"cannot read config file: {e}"
                ) from e

            unknown = sorted(key for key in file_config if key not in CONFIG_FILE_KEYS)
            if unknown:
                raise InvalidConfiguration(
                    str(config_path), f"unknown config key(s): {', '.join(unknown)}"
                )
            return file_config

    return {}


def load_config(
    cli_decode: list[str] | None = None,
    cli_parent_directory_pattern: str | None = None,
    cli_disallowed_char_pattern: str | None = None,
    cli_base_dir: str | None = None,
    config_file: str | None = None,
    **kwargs: object,
) -> Config:
    """Precedence: CLI > env > config file > built-in defaults.

    Raises:
        InvalidConfiguration: If any source holds an invalid pattern or
            decode rule, or the config file is unreadable, is not valid
            TOML, or holds unknown keys
    """
    file_config = _load_config_file(config_file)

    # Resolve decode rules: CLI > file (a CLI list replaces the file's list)
    decode: object = None
    if cli_decode:
        decode = tuple(parse_decode_rule(arg) for arg in cli_decode)
    if decode is None:
        decode = file_config.get("decode")

    # Resolve patterns: CLI > env > file
    parent_pattern = cli_parent_directory_pattern
    if parent_pattern is None:
        parent_pattern = os.environ.get(ENV_PARENT_DIRECTORY_PATTERN)
    if parent_pattern is None:
        parent_pattern = cast(str | None, file_config.get("parent_directory_pattern"))

    disallowed_pattern = cli_disallowed_char_pattern
    if disallowed_pattern is None:
        disallowed_pattern = os.environ.get(ENV_DISALLOWED_CHAR_PATTERN)
    if disallowed_pattern is None:
        disallowed_pattern = cast(str | None, file_config.get("disallowed_char_pattern"))

    options = SanitizeOptions(
        decode=decode or (),  # type: ignore[arg-type]
        parent_directory_pattern=parent_pattern,  # type: ignore[arg-type]
        disallowed_char_pattern=disallowed_pattern,  # type: ignore[arg-type]
    )

    # Resolve base directory: CLI > env > file > none
    base_dir = cli_base_dir
    if base_dir is None:
        base_dir = os.environ.get(ENV_BASE_DIR)
    if base_dir is None:
        base_dir = cast(str | None, file_config.get("base_dir"))
    if base_dir is not None:
        if not isinstance(base_dir, str):
            raise InvalidConfiguration(base_dir, "base_dir must be a string")
        base_dir = os.path.abspath(os.path.expanduser(base_dir))

    return Config(
        options=options,
        base_dir=base_dir,
        **cast(dict[str, Any], kwargs),
    )
