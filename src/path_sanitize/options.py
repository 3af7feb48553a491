"""Sanitizer options and their built-in defaults."""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field, fields


class InvalidConfiguration(ValueError):
    """Raised when sanitizer options are not a valid configuration."""

    def __init__(self, value: object, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid configuration: {reason} (value: {value!r})")


def _compile(pattern: object, name: str) -> re.Pattern[str]:
    if isinstance(pattern, re.Pattern):
        if isinstance(pattern.pattern, bytes):
            raise InvalidConfiguration(pattern, f"{name} must be a str pattern")
        return pattern
    if not isinstance(pattern, str):
        raise InvalidConfiguration(pattern, f"{name} must be a string or compiled pattern")
    try:
        return re.compile(pattern)
    except re.error as e:
        raise InvalidConfiguration(pattern, f"{name} is not a valid regular expression: {e}") from e


@dataclass(frozen=True)
class DecodeRule:
    """Replace every match of ``pattern`` with the literal ``replacement``."""

    pattern: re.Pattern[str]
    replacement: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "pattern", _compile(self.pattern, "decode pattern"))
        if not isinstance(self.replacement, str):
            raise InvalidConfiguration(self.replacement, "decode replacement must be a string")

    @classmethod
    def coerce(cls, entry: object) -> "DecodeRule":
        """Build a rule from a DecodeRule, a (pattern, replacement) pair or a mapping."""
        if isinstance(entry, DecodeRule):
            return entry
        if isinstance(entry, Mapping):
            try:
                return cls(entry["pattern"], entry["replacement"])
            except KeyError as e:
                raise InvalidConfiguration(entry, f"decode rule is missing {e}") from e
        if isinstance(entry, (tuple, list)) and len(entry) == 2:
            return cls(entry[0], entry[1])
        raise InvalidConfiguration(entry, "decode rules must be (pattern, replacement) pairs")


@dataclass(frozen=True)
class SanitizeOptions:
    """Immutable sanitizer configuration.

    Any field left empty falls back to the built-in default when the options
    are resolved. Use ``resolve_options`` to get a fully populated copy.
    """

    decode: tuple[DecodeRule, ...] = field(default=())
    parent_directory_pattern: re.Pattern[str] | None = None
    disallowed_char_pattern: re.Pattern[str] | None = None

    def __post_init__(self) -> None:
        decode = self.decode or ()
        if isinstance(decode, (str, bytes, Mapping)):
            raise InvalidConfiguration(decode, "decode must be a sequence of rules")
        try:
            rules = tuple(DecodeRule.coerce(entry) for entry in decode)
        except TypeError as e:
            raise InvalidConfiguration(decode, "decode must be a sequence of rules") from e
        object.__setattr__(self, "decode", rules)

        for name in ("parent_directory_pattern", "disallowed_char_pattern"):
            value = getattr(self, name)
            object.__setattr__(self, name, _compile(value, name) if value else None)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, object]) -> "SanitizeOptions":
        known = {f.name for f in fields(cls)}
        unknown = sorted(str(key) for key in mapping if key not in known)
        if unknown:
            raise InvalidConfiguration(dict(mapping), f"unknown option(s): {', '.join(unknown)}")
        return cls(**mapping)  # type: ignore[arg-type]


DEFAULT_DECODE = (
    DecodeRule("%2e", "."),
    DecodeRule("%2f", "/"),
    DecodeRule("%5c", "\\"),
)
DEFAULT_PARENT_DIRECTORY_PATTERN = re.compile(r"[/\\]\.\.[/\\]")
DEFAULT_DISALLOWED_CHAR_PATTERN = re.compile(r"[:$!'\"@+`|=]")

DEFAULT_OPTIONS = SanitizeOptions(
    decode=DEFAULT_DECODE,
    parent_directory_pattern=DEFAULT_PARENT_DIRECTORY_PATTERN,
    disallowed_char_pattern=DEFAULT_DISALLOWED_CHAR_PATTERN,
)


def resolve_options(options: object = None) -> SanitizeOptions:
    """Merge caller options over the defaults into a new SanitizeOptions.

    Args:
        options: None, a SanitizeOptions, or a mapping of option fields

    Returns:
        Fully populated options; the caller's value is left untouched

    Raises:
        InvalidConfiguration: If options is neither empty, a mapping,
            nor a SanitizeOptions
    """
    if not options:
        return DEFAULT_OPTIONS
    if isinstance(options, Mapping):
        options = SanitizeOptions.from_mapping(options)
    elif not isinstance(options, SanitizeOptions):
        raise InvalidConfiguration(options, "options must be a SanitizeOptions or a mapping")

    return SanitizeOptions(
        decode=options.decode or DEFAULT_DECODE,
        parent_directory_pattern=(
            options.parent_directory_pattern or DEFAULT_PARENT_DIRECTORY_PATTERN
        ),
        disallowed_char_pattern=(
            options.disallowed_char_pattern or DEFAULT_DISALLOWED_CHAR_PATTERN
        ),
    )
