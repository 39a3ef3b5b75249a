"""Typed errors for huffcode.

Single source of truth for exit codes lives here.

Policy:
- The engine has no failure modes for valid input; errors here are either
  usage/config problems or internal invariant violations.
- The CLI maps errors to stable exit codes (see EXIT_* constants).
- docs/exit_codes.md is generated from this module (scripts/gen_exit_codes_md.py).
"""

from __future__ import annotations

from dataclasses import dataclass

# -------------------------
# Exit codes (single source)
# -------------------------

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_GENERIC = 10
EXIT_INVARIANT = 11
EXIT_MISSING_RESOURCE = 12


@dataclass(frozen=True, slots=True)
class ExitCodeInfo:
    code: int
    name: str
    description: str


EXIT_CODES: tuple[ExitCodeInfo, ...] = (
    ExitCodeInfo(EXIT_OK, "OK", "Success"),
    ExitCodeInfo(EXIT_USAGE, "USAGE", "Usage/config error (invalid args, invalid report spec, etc.)"),
    ExitCodeInfo(EXIT_GENERIC, "GENERIC", "Generic failure (unexpected error)"),
    ExitCodeInfo(EXIT_INVARIANT, "INVARIANT", "Internal invariant violated (engine bug)"),
    ExitCodeInfo(
        EXIT_MISSING_RESOURCE,
        "MISSING_RESOURCE",
        "Missing required resource (input file, optional library)",
    ),
)

_EXIT_CODE_BY_CODE: dict[int, ExitCodeInfo] = {e.code: e for e in EXIT_CODES}


def exit_code_info(code: int) -> ExitCodeInfo | None:
    return _EXIT_CODE_BY_CODE.get(int(code))


def render_exit_codes_markdown() -> str:
    """Render docs/exit_codes.md content."""
    lines: list[str] = []
    lines.append("# Exit codes\n")
    lines.append("> GENERATED FILE, do not edit manually.\n")
    lines.append("> Source of truth: `src/huffcode/errors.py` (EXIT_CODES).\n")
    lines.append("> Regenerate: `python scripts/gen_exit_codes_md.py`.\n\n")
    lines.append("These are the CLI exit codes you can rely on.\n\n")
    lines.append("| Code | Name | Meaning |\n")
    lines.append("|---:|---|---|\n")
    for e in sorted(EXIT_CODES, key=lambda x: x.code):
        lines.append(f"| {e.code} | `{e.name}` | {e.description} |\n")
    lines.append("\n## Notes\n")
    lines.append("- Internal errors extend `HuffcodeError` and carry an `exit_code`.\n")
    lines.append("- `--debug` re-raises errors to show full stack traces.\n")
    lines.append(
        "- `--json` on `encode` prints errors as a JSON object on stderr, with the same exit code.\n"
    )
    return "".join(lines)


# ---------------
# Typed exceptions
# ---------------


class HuffcodeError(Exception):
    """Base error for huffcode."""

    exit_code: int = EXIT_GENERIC


class UsageError(HuffcodeError):
    exit_code = EXIT_USAGE


class InvariantViolation(HuffcodeError):
    """The engine produced structures that contradict each other."""

    exit_code = EXIT_INVARIANT


class MissingResource(HuffcodeError):
    exit_code = EXIT_MISSING_RESOURCE
