"""Join sanitized paths onto a trusted base directory."""

import os
from pathlib import Path

from .sanitize import sanitize


class PathTraversalError(ValueError):
    """Raised when a joined path would land outside its base directory."""

    def __init__(self, untrusted_path: object, reason: str) -> None:
        self.untrusted_path = untrusted_path
        self.reason = reason
        super().__init__(
            f"Path traversal detected: {reason} (input: {untrusted_path!r})"
        )


def safe_join(
    base_dir: str | Path,
    untrusted_path: object,
    options: object = None,
) -> Path:
    """Sanitize an untrusted path and join it onto a trusted base directory.

    Joining and containment checks are lexical only: nothing on disk is
    read and symlinks are not resolved.

    Args:
        base_dir: The trusted base directory
        untrusted_path: The untrusted path from a request or user input
        options: Sanitizer options, see ``sanitize``

    Returns:
        Normalized Path inside base_dir

    Raises:
        PathTraversalError: If the joined path escapes base_dir, which can
            only happen with custom options that weaken sanitization
        InvalidConfiguration: If options is not a valid configuration

    Examples:
        >>> safe_join("/data", "../../etc/passwd")
        PosixPath('/data/etc/passwd')

        >>> safe_join("/data", "%2e%2e%2fsecret.txt")
        PosixPath('/data/secret.txt')
    """
    return join_sanitized(base_dir, sanitize(untrusted_path, options), untrusted_path)


def join_sanitized(
    base_dir: str | Path,
    sanitized: str,
    untrusted_path: object = None,
) -> Path:
    """Join an already sanitized path onto base_dir and check containment.

    ``untrusted_path`` is only used to report the original input in a
    PathTraversalError; it defaults to ``sanitized``.
    """
    if untrusted_path is None:
        untrusted_path = sanitized
    base = os.path.normpath(os.fspath(base_dir))
    joined = os.path.normpath(os.path.join(base, sanitized))

    try:
        contained = os.path.commonpath([base, joined]) == os.path.commonpath([base])
    except ValueError as e:
        raise PathTraversalError(untrusted_path, f"invalid path: {e}") from e

    if not contained:
        raise PathTraversalError(
            untrusted_path, f"path escapes base directory {base}"
        )

    return Path(joined)
