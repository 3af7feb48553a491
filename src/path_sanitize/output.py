"""Output formatting for JSON and human-readable modes."""

import json
from dataclasses import dataclass


def format_results(
    results: list[dict],
    json_output: bool = False,
) -> str:
    """Format sanitized paths.

    Each result holds ``input``, ``sanitized`` and ``changed``, plus
    ``joined`` or ``error`` when a base directory was given.
    """
    changed = sum(1 for r in results if r.get("changed"))
    failed = sum(1 for r in results if "error" in r)

    if json_output:
        return json.dumps(
            {
                "status": "success",
                "results": results,
                "summary": {
                    "total": len(results),
                    "changed": changed,
                    "failed": failed,
                },
            },
            indent=2,
        )

    lines = []
    for r in results:
        if "error" in r:
            continue
        lines.append(r.get("joined", r["sanitized"]))
    return "\n".join(lines)


def format_summary(results: list[dict]) -> str:
    """One-line human summary, logged rather than printed."""
    changed = sum(1 for r in results if r.get("changed"))
    failed = sum(1 for r in results if "error" in r)
    return f"Sanitized {len(results)} paths: {changed} changed, {failed} failed"


def format_error(
    code: str,
    message: str,
    json_output: bool = False,
) -> str:
    """Format error result."""
    if json_output:
        return json.dumps(
            {
                "status": "error",
                "code": code,
                "message": message,
            },
            indent=2,
        )

    return f"Error: {message}"


@dataclass
class OutputFormatter:
    """Stateful output formatter."""

    json_output: bool = False

    def results(self, results: list[dict]) -> str:
        return format_results(results, json_output=self.json_output)

    def error(self, code: str, message: str) -> str:
        return format_error(code, message, json_output=self.json_output)
