"""Sanitize untrusted path strings before they are joined onto a trusted base."""

import posixpath
import re

from .log import get_logger
from .options import SanitizeOptions, resolve_options

SEPARATORS = "/\\"

LEADING_SEPARATOR = re.compile(r"^[/\\]?")
SEPARATOR_RUN = re.compile(r"[/\\]+")


def _replace_all(pattern: re.Pattern[str], replacement: str, text: str) -> str:
    # Replacement is literal; re.sub would expand backslash escapes in a str
    return pattern.sub(lambda _match: replacement, text)


def _strip_traversal(text: str, pattern: re.Pattern[str]) -> str:
    """Replace separator-bounded parent segments with "/" until none remain.

    Matches do not overlap, so one pass over "/../../" leaves "/../" behind.
    Each productive pass with the default pattern removes at least three
    characters, which bounds the loop by the text length.
    """
    for _ in range(len(text) + 1):
        stripped = _replace_all(pattern, "/", text)
        if stripped == text:
            break
        text = stripped
    return text


def _sanitize_once(text: str, options: SanitizeOptions) -> str:
    assert options.parent_directory_pattern is not None
    assert options.disallowed_char_pattern is not None

    for rule in options.decode:
        text = _replace_all(rule.pattern, rule.replacement, text)

    text = LEADING_SEPARATOR.sub("/", text, count=1)
    text = _strip_traversal(text, options.parent_directory_pattern)
    text = SEPARATOR_RUN.sub("/", text)

    # POSIX rules on every host so the result never gains backslashes
    text = posixpath.normpath(text)
    text = text.rstrip(SEPARATORS).lstrip(SEPARATORS)
    if text:
        text = posixpath.normpath(posixpath.join("", text))

    return _replace_all(options.disallowed_char_pattern, "", text)


def sanitize(path: object, options: object = None) -> str:
    """Reduce an untrusted path to a relative path that is safe to join.

    The result has no parent-directory segments, no backslashes, no leading
    or trailing separator, no repeated separators, and none of the
    disallowed characters. Configured percent-encodings are decoded first.

    Character filtering can re-form sequences an earlier stage removes
    (``..=\\`` becomes ``..\\``), so the pipeline is re-run until its output
    stops changing. That also makes ``sanitize`` idempotent.

    Args:
        path: Untrusted path; non-string values are converted with str()
        options: None, a SanitizeOptions, or a mapping of option fields.
            Empty fields fall back to the defaults.

    Returns:
        Sanitized relative path, possibly empty

    Raises:
        InvalidConfiguration: If options is not a valid configuration

    Examples:
        >>> sanitize("../../etc/passwd")
        'etc/passwd'

        >>> sanitize("%2e%2e%2fetc%2fpasswd")
        'etc/passwd'

        >>> sanitize("/path/$dir!/file|name.txt")
        'path/dir/filename.txt'
    """
    resolved = resolve_options(options)
    text = path if isinstance(path, str) else str(path)

    # Passes after the first only shrink the text under the default options
    max_passes = len(text) + 2
    for _ in range(max_passes):
        sanitized = _sanitize_once(text, resolved)
        if sanitized == text:
            return sanitized
        text = sanitized

    get_logger().warning(
        f"Sanitizer did not settle within {max_passes} passes; "
        "check custom decode and pattern options"
    )
    return text
