"""Counter resolution for a new build.

Computes the five rolling counters of the current build from the previous
build in the chain, the skip-on-bad-result policy and the configured
overrides. Resolution never raises on bad override input and never persists
anything: literal overrides that were applied are reported back so the caller
can clear them from its configuration.
"""

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, TypeVar

from ..models import BuildContext, BuildCounters, BuildResult, OverrideSpec
from .windows import WINDOWS

logger = logging.getLogger(__name__)

DEFAULT_WORST_RESULT = BuildResult.NOT_BUILT


class BuildRef(Protocol):
    """Host-owned build as seen by the resolver."""

    @property
    def timestamp(self) -> datetime: ...

    @property
    def result(self) -> BuildResult | None: ...

    @property
    def counters(self) -> BuildCounters | None: ...

    @property
    def version(self) -> str | None: ...


B = TypeVar("B", bound=BuildRef)


class BuildChain(Protocol[B]):
    """Backward accessor over the host's build history."""

    def previous(self, build: B) -> B | None: ...


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving counters for one build.

    Attributes:
        counters: Counters for the current build.
        consumed: Fields whose one-shot (literal) override was applied and
            must be cleared before the next build.
    """

    counters: BuildCounters
    consumed: tuple[str, ...] = ()


def iter_previous_builds(chain: BuildChain[B], build: B) -> Iterator[B]:
    """Yield the ancestors of `build`, most recent first."""
    current = chain.previous(build)
    while current is not None:
        yield current
        current = chain.previous(current)


def find_previous_build(chain: BuildChain[B], build: B, prefix: str | None = None) -> B | None:
    """Find the build whose counters the next build continues from.

    Builds without counters (for example builds that failed before they were
    stamped) are skipped. With a prefix, only builds whose version starts with
    the prefix are considered.

    Args:
        chain: History accessor.
        build: The current build.
        prefix: Optional version prefix selecting the sequence.

    Returns:
        The matching ancestor, or None if the walk reaches the root.
    """
    for candidate in iter_previous_builds(chain, build):
        if candidate.counters is None:
            continue
        if prefix:
            if candidate.version is not None and candidate.version.startswith(prefix):
                return candidate
            continue
        return candidate
    return None


def _align(prior: datetime, current: datetime) -> datetime:
    """Express `prior` in the time zone of `current` when both are aware."""
    if prior.tzinfo is not None and current.tzinfo is not None:
        return prior.astimezone(current.tzinfo)
    return prior


def compute_increment(prior_result: BuildResult | None, worst_result: BuildResult) -> int:
    """Return 0 if the previous result blocks incrementing, else 1."""
    if prior_result is not None and prior_result.is_worse_than(worst_result):
        return 0
    return 1


def resolve(
    context: BuildContext,
    prior: BuildRef | None,
    overrides: Mapping[str, OverrideSpec] | None = None,
    worst_result_for_increment: BuildResult = DEFAULT_WORST_RESULT,
) -> Resolution:
    """Resolve the counters of the current build.

    Args:
        context: The build being stamped.
        prior: Previous build of the chain (see find_previous_build), or None.
        overrides: Override per counter field; missing fields mean no override.
        worst_result_for_increment: Results worse than this on the previous
            build stop the counters from incrementing.

    Returns:
        Resolution with the new counters and the consumed one-shot overrides.
    """
    overrides = overrides or {}
    prior_counters = prior.counters if prior is not None else None

    increment = 1
    prior_time = None
    if prior is not None and prior_counters is not None:
        increment = compute_increment(prior.result, worst_result_for_increment)
        prior_time = _align(prior.timestamp, context.timestamp)
        if increment == 0:
            logger.debug(
                "Previous build result %s is worse than %s; not incrementing",
                prior.result.value if prior.result else None,
                worst_result_for_increment.value,
            )

    values: dict[str, int] = {}
    consumed: list[str] = []

    for window in WINDOWS:
        override = overrides.get(window.field) or OverrideSpec()
        override_value = override.resolve(context.environment)

        # Overrides win without reading the previous value at all
        if override_value is not None:
            values[window.field] = override_value
            if override.is_one_shot:
                consumed.append(window.field)
            logger.debug("Override applied to %s: %d", window.field, override_value)
            continue

        if not override.is_empty:
            logger.debug(
                "Override %r for %s did not resolve; using computed value",
                override.raw,
                window.field,
            )

        if prior_counters is None or prior_time is None:
            values[window.field] = 1
        elif window.same_window(context.timestamp, prior_time):
            values[window.field] = prior_counters.get(window.field) + increment
        else:
            values[window.field] = 1

    return Resolution(counters=BuildCounters(**values), consumed=tuple(consumed))
