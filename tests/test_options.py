"""Tests for sanitizer options and defaulting."""

import re

import pytest

from path_sanitize import sanitize
from path_sanitize.options import (
    DEFAULT_DECODE,
    DEFAULT_DISALLOWED_CHAR_PATTERN,
    DEFAULT_OPTIONS,
    DEFAULT_PARENT_DIRECTORY_PATTERN,
    DecodeRule,
    InvalidConfiguration,
    SanitizeOptions,
    resolve_options,
)


class TestDecodeRule:
    """Test decode rule construction."""

    def test_string_pattern_is_compiled(self):
        rule = DecodeRule("%2e", ".")
        assert isinstance(rule.pattern, re.Pattern)
        assert rule.pattern.pattern == "%2e"

    def test_compiled_pattern_kept(self):
        pattern = re.compile("%2e", re.IGNORECASE)
        assert DecodeRule(pattern, ".").pattern is pattern

    def test_invalid_regex_rejected(self):
        with pytest.raises(InvalidConfiguration) as exc_info:
            DecodeRule("(", ".")
        assert "not a valid regular expression" in str(exc_info.value)

    def test_non_string_replacement_rejected(self):
        with pytest.raises(InvalidConfiguration):
            DecodeRule("%2e", 46)

    def test_coerce_from_mapping(self):
        rule = DecodeRule.coerce({"pattern": "%2f", "replacement": "/"})
        assert rule == DecodeRule("%2f", "/")

    def test_coerce_mapping_missing_key(self):
        with pytest.raises(InvalidConfiguration) as exc_info:
            DecodeRule.coerce({"pattern": "%2f"})
        assert "replacement" in exc_info.value.reason

    def test_coerce_bad_shape(self):
        with pytest.raises(InvalidConfiguration):
            DecodeRule.coerce(("%2f", "/", "extra"))

    def test_rules_are_immutable(self):
        rule = DecodeRule("%2e", ".")
        with pytest.raises(AttributeError):
            rule.replacement = ""  # type: ignore[misc]


class TestSanitizeOptions:
    """Test options construction and validation."""

    def test_empty_options(self):
        options = SanitizeOptions()
        assert options.decode == ()
        assert options.parent_directory_pattern is None
        assert options.disallowed_char_pattern is None

    def test_empty_string_patterns_are_absent(self):
        options = SanitizeOptions(disallowed_char_pattern="")  # type: ignore[arg-type]
        assert options.disallowed_char_pattern is None

    def test_decode_list_becomes_tuple(self):
        options = SanitizeOptions(decode=[("%2e", ".")])  # type: ignore[arg-type]
        assert options.decode == (DecodeRule("%2e", "."),)

    def test_decode_must_be_a_sequence(self):
        with pytest.raises(InvalidConfiguration):
            SanitizeOptions(decode="%2e")  # type: ignore[arg-type]

    def test_decode_not_iterable(self):
        with pytest.raises(InvalidConfiguration):
            SanitizeOptions(decode=5)  # type: ignore[arg-type]

    def test_invalid_pattern_rejected(self):
        with pytest.raises(InvalidConfiguration) as exc_info:
            SanitizeOptions(parent_directory_pattern="[")  # type: ignore[arg-type]
        assert "parent_directory_pattern" in exc_info.value.reason

    def test_non_string_pattern_rejected(self):
        with pytest.raises(InvalidConfiguration):
            SanitizeOptions(disallowed_char_pattern=42)  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        "make",
        [
            lambda: DecodeRule(re.compile(b"%2e"), "."),
            lambda: SanitizeOptions(parent_directory_pattern=re.compile(b"/\\.\\./")),
            lambda: SanitizeOptions(disallowed_char_pattern=re.compile(b"[$]")),
        ],
        ids=["decode", "parent_directory_pattern", "disallowed_char_pattern"],
    )
    def test_bytes_pattern_rejected(self, make):
        with pytest.raises(InvalidConfiguration) as exc_info:
            make()
        assert "must be a str pattern" in exc_info.value.reason

    def test_sanitize_rejects_bytes_pattern(self):
        with pytest.raises(InvalidConfiguration):
            sanitize("a/b", {"disallowed_char_pattern": re.compile(b"x")})

    def test_from_mapping_rejects_unknown_keys(self):
        with pytest.raises(InvalidConfiguration) as exc_info:
            SanitizeOptions.from_mapping({"notAllowedRegEx": "x"})
        assert "notAllowedRegEx" in exc_info.value.reason

    def test_options_are_immutable(self):
        with pytest.raises(AttributeError):
            DEFAULT_OPTIONS.decode = ()  # type: ignore[misc]


class TestResolveOptions:
    """Test merging caller options over the defaults."""

    @pytest.mark.parametrize("empty", [None, {}, "", 0, False])
    def test_falsy_options_use_defaults(self, empty):
        assert resolve_options(empty) is DEFAULT_OPTIONS

    def test_defaults(self):
        assert DEFAULT_OPTIONS.decode == DEFAULT_DECODE
        assert DEFAULT_OPTIONS.parent_directory_pattern is DEFAULT_PARENT_DIRECTORY_PATTERN
        assert DEFAULT_OPTIONS.disallowed_char_pattern is DEFAULT_DISALLOWED_CHAR_PATTERN

    def test_partial_options_filled_in(self):
        options = SanitizeOptions(disallowed_char_pattern=r"#")  # type: ignore[arg-type]
        resolved = resolve_options(options)
        assert resolved.decode == DEFAULT_DECODE
        assert resolved.parent_directory_pattern is DEFAULT_PARENT_DIRECTORY_PATTERN
        assert resolved.disallowed_char_pattern.pattern == "#"

    def test_caller_options_untouched(self):
        options = SanitizeOptions()
        resolved = resolve_options(options)
        assert resolved is not options
        assert options.decode == ()
        assert options.parent_directory_pattern is None

    def test_mapping_accepted(self):
        resolved = resolve_options({"decode": [("%41", "a")]})
        assert resolved.decode == (DecodeRule("%41", "a"),)

    @pytest.mark.parametrize("bad", ["invalid options", 42, ["decode"], object()])
    def test_non_configuration_rejected(self, bad):
        with pytest.raises(InvalidConfiguration) as exc_info:
            resolve_options(bad)
        assert exc_info.value.value is bad

    def test_sanitize_rejects_invalid_options(self):
        """sanitize() surfaces InvalidConfiguration before touching the path."""
        with pytest.raises(InvalidConfiguration) as exc_info:
            sanitize("path", "invalid options")
        assert "options must be" in str(exc_info.value)

    def test_invalid_configuration_is_value_error(self):
        assert issubclass(InvalidConfiguration, ValueError)

    def test_default_disallowed_characters(self):
        for char in ":$!'\"@+`|=":
            assert DEFAULT_DISALLOWED_CHAR_PATTERN.fullmatch(char)
        for char in "#%^&*()-_.~ ":
            assert DEFAULT_DISALLOWED_CHAR_PATTERN.fullmatch(char) is None

    def test_default_parent_pattern_is_separator_bounded(self):
        for text in ("/../", "\\../", "/..\\", "\\..\\"):
            assert DEFAULT_PARENT_DIRECTORY_PATTERN.fullmatch(text)
        for text in ("/..", "../", "/.../", "/a../"):
            assert DEFAULT_PARENT_DIRECTORY_PATTERN.search(text) is None
