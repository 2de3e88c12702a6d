"""Version template expansion.

A template such as ``1.${BUILDS_THIS_YEAR}.${BUILDS_TODAY,XX}`` is expanded in
two steps:

1. Environment substitution: ``$NAME`` and ``${NAME}`` are replaced from the
   build environment in a single pass, leaving unknown names untouched.
2. Field substitution: the remaining ``${KEY}`` / ``${KEY,ARGUMENT}`` blocks
   are resolved against the built-in fields, then against the environment.

Substituted text is never scanned again, so expansion is linear in the
template length even when variable values contain ``${``.
"""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date, datetime

from ..models import BuildCounters
from .date_format import format_date

ENV_MACRO_PATTERN = re.compile(r"\$(\w+|\{[\w.]+\}|\$)")
SUBSTRING_ARGUMENT_PATTERN = re.compile(r'"\s*([+-]?[0-9]+)\s*"')

BLOCK_START = "${"
BLOCK_END = "}"


def expand_environment(text: str, environment: Mapping[str, str]) -> str:
    """Expand ``$NAME`` and ``${NAME}`` references in a single pass.

    Undefined variables are left as written and ``$$`` becomes ``$``.
    """

    def _replace(match: re.Match[str]) -> str:
        token = match.group(1)
        if token == "$":
            return "$"
        name = token[1:-1] if token.startswith("{") else token
        value = environment.get(name)
        return match.group(0) if value is None else value

    return ENV_MACRO_PATTERN.sub(_replace, text)


@dataclass(frozen=True)
class FieldContext:
    """Values available to built-in fields while expanding one template."""

    counters: BuildCounters
    timestamp: datetime
    project_start_date: date | None = None


def pad(value: int, argument: str) -> str:
    """Zero-pad `value` to the length of a bare padding argument such as ``XX``."""
    text = str(value)
    if not argument or '"' in argument:
        return text
    return text.zfill(len(argument)) if value >= 0 else text


def quoted(argument: str) -> str | None:
    """Return the text between the first pair of double quotes, if any."""
    start = argument.find('"')
    if start < 0:
        return None
    end = argument.find('"', start + 1)
    if end < 0:
        return None
    return argument[start + 1 : end]


def _months_since(ctx: FieldContext) -> int:
    start = ctx.project_start_date
    assert start is not None
    return (ctx.timestamp.year - start.year) * 12 + ctx.timestamp.month - start.month


def _years_since(ctx: FieldContext) -> int:
    start = ctx.project_start_date
    assert start is not None
    return ctx.timestamp.year - start.year


NUMERIC_FIELDS: dict[str, Callable[[FieldContext], int]] = {
    "BUILD_DAY": lambda ctx: ctx.timestamp.day,
    "BUILD_WEEK": lambda ctx: ctx.timestamp.isocalendar()[1],
    "BUILD_MONTH": lambda ctx: ctx.timestamp.month,
    "BUILD_YEAR": lambda ctx: ctx.timestamp.year,
    "BUILDS_TODAY": lambda ctx: ctx.counters.builds_today,
    "BUILDS_THIS_WEEK": lambda ctx: ctx.counters.builds_this_week,
    "BUILDS_THIS_MONTH": lambda ctx: ctx.counters.builds_this_month,
    "BUILDS_THIS_YEAR": lambda ctx: ctx.counters.builds_this_year,
    "BUILDS_ALL_TIME": lambda ctx: ctx.counters.builds_all_time,
    # Zero-based variants; there is deliberately no BUILDS_THIS_WEEK_Z
    "BUILDS_TODAY_Z": lambda ctx: ctx.counters.builds_today - 1,
    "BUILDS_THIS_MONTH_Z": lambda ctx: ctx.counters.builds_this_month - 1,
    "BUILDS_THIS_YEAR_Z": lambda ctx: ctx.counters.builds_this_year - 1,
    "BUILDS_ALL_TIME_Z": lambda ctx: ctx.counters.builds_all_time - 1,
}

PROJECT_START_FIELDS: dict[str, Callable[[FieldContext], int]] = {
    "MONTHS_SINCE_PROJECT_START": _months_since,
    "YEARS_SINCE_PROJECT_START": _years_since,
}

BUILT_IN_KEYS = frozenset(
    {"BUILD_DATE_FORMATTED", *NUMERIC_FIELDS, *PROJECT_START_FIELDS}
)


def resolve_builtin(key: str, argument: str, ctx: FieldContext) -> str | None:
    """Resolve a built-in field, or return None if `key` is not one here."""
    if key == "BUILD_DATE_FORMATTED":
        return format_date(quoted(argument), ctx.timestamp)
    if key in NUMERIC_FIELDS:
        return pad(NUMERIC_FIELDS[key](ctx), argument)
    if key in PROJECT_START_FIELDS and ctx.project_start_date is not None:
        return pad(PROJECT_START_FIELDS[key](ctx), argument)
    return None


def select_substring(value: str, argument: str) -> str:
    """Apply a ``"+N"`` / ``"-N"`` selection argument to a variable value."""
    match = SUBSTRING_ARGUMENT_PATTERN.fullmatch(argument)
    if match is None:
        return value
    try:
        count = int(match.group(1))
    except ValueError:
        return value
    if count == 0 or abs(count) >= len(value):
        return value
    return value[:count] if count > 0 else value[count:]


def resolve_variable(key: str, argument: str, environment: Mapping[str, str]) -> str:
    """Resolve a block against the environment; unknown keys expand to ''."""
    value = environment.get(key)
    if value is None:
        return ""
    if value == f"{BLOCK_START}{key}{BLOCK_END}":
        return ""
    return select_substring(value, argument)


def split_block(body: str) -> tuple[str, str]:
    """Split the inside of a block into (key, argument)."""
    key, comma, argument = body.partition(",")
    return key, argument.strip() if comma else ""


def expand_fields(
    text: str,
    ctx: FieldContext,
    environment: Mapping[str, str],
) -> str:
    """Replace every ``${KEY[,ARGUMENT]}`` block in `text`.

    An unclosed ``${`` truncates the output at that point.
    """
    parts: list[str] = []
    cursor = 0
    while True:
        start = text.find(BLOCK_START, cursor)
        if start < 0:
            parts.append(text[cursor:])
            break
        end = text.find(BLOCK_END, start)
        if end < 0:
            parts.append(text[cursor:start])
            break
        parts.append(text[cursor:start])
        key, argument = split_block(text[start + len(BLOCK_START) : end])
        if key:
            value = resolve_builtin(key, argument, ctx)
            if value is None:
                value = resolve_variable(key, argument, environment)
            parts.append(value)
        cursor = end + len(BLOCK_END)
    return "".join(parts)


def expand(
    format_string: str,
    counters: BuildCounters,
    environment: Mapping[str, str] | None,
    build_timestamp: datetime,
    project_start_date: date | None = None,
) -> str:
    """Expand a version template into the final version string.

    Args:
        format_string: Template with ``${KEY[,ARGUMENT]}`` blocks.
        counters: Counters resolved for the build.
        environment: Build environment variables.
        build_timestamp: When the build started.
        project_start_date: Optional start date for the *_SINCE_PROJECT_START
            fields; without it those keys fall back to the environment.

    Returns:
        The formatted version string.
    """
    environment = environment or {}
    ctx = FieldContext(
        counters=counters,
        timestamp=build_timestamp,
        project_start_date=project_start_date,
    )
    return expand_fields(expand_environment(format_string, environment), ctx, environment)
