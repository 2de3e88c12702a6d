"""Stamp a build with its counters and formatted version.

Glue between the host's build history, the counter resolver and the template
expander. The caller persists the returned record data and clears the consumed
overrides from its configuration.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime

from ..config import BuildstampConfig
from ..models import BuildContext, BuildCounters
from .expander import expand
from .resolver import B, BuildChain, find_previous_build, resolve

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StampResult:
    """Everything the host needs to record and publish for one build.

    Attributes:
        counters: Counters to attach to the build record.
        version: Formatted version string.
        prefix: Version prefix in effect (None if not configured).
        consumed: One-shot override fields to clear in the configuration.
        display_name: Version to use as display name, if enabled.
    """

    counters: BuildCounters
    version: str
    prefix: str | None
    consumed: tuple[str, ...]
    display_name: str | None = None


def resolve_prefix(config: BuildstampConfig, environment: Mapping[str, str]) -> str | None:
    """Determine the version prefix from the environment or the literal setting.

    The environment variable named by ``prefix_variable`` takes precedence
    over ``version_prefix``. Empty values count as no prefix.
    """
    version = config.version
    if version.prefix_variable:
        value = environment.get(version.prefix_variable)
        if value:
            return value
    return version.version_prefix or None


def stamp_build(
    config: BuildstampConfig,
    chain: BuildChain[B],
    build: B,
    timestamp: datetime,
    environment: Mapping[str, str],
) -> StampResult:
    """Resolve counters for `build` and render its version string.

    Args:
        config: Loaded configuration.
        chain: History accessor used to walk back from `build`.
        build: The build being stamped (its ancestors are read via `chain`).
        timestamp: Start time of the build.
        environment: Build environment variables.

    Returns:
        StampResult for the build.
    """
    version_config = config.version
    prefix = resolve_prefix(config, environment)
    prior = find_previous_build(chain, build, prefix)
    if prior is None:
        logger.debug("No previous stamped build%s", f" with prefix {prefix!r}" if prefix else "")

    context = BuildContext(timestamp=timestamp, environment=environment, version_prefix=prefix)
    resolution = resolve(
        context,
        prior,
        config.overrides.specs(),
        version_config.worst_result_for_increment,
    )

    build_time = timestamp.astimezone(UTC) if version_config.use_utc else timestamp
    version = expand(
        version_config.format,
        resolution.counters,
        environment,
        build_time,
        version_config.start_date(),
    )
    if prefix and version_config.prepend_prefix:
        version = prefix + version

    logger.info("Version %s (%s)", version, resolution.counters.model_dump())
    return StampResult(
        counters=resolution.counters,
        version=version,
        prefix=prefix,
        consumed=resolution.consumed,
        display_name=version if version_config.use_as_display_name else None,
    )
