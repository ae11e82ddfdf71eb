"""Historical rate versions and date-based version resolution."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date

from aquametrics.errors import NoApplicableVersion, RateDataError
from aquametrics.models import ElectricityType, RateVersion, as_date
from aquametrics.rates import PackagedRateSource, RateDataSource
from aquametrics.tiers import validate_table

_LOGGER = logging.getLogger(__name__)


class RateVersionRegistry:
    """Read-only set of rate versions with non-overlapping effective ranges.

    The registry is immutable once built. Applications that reload rate data
    build a new registry and swap the reference rather than mutating this one.
    """

    def __init__(self, versions: Iterable[RateVersion]) -> None:
        ordered = sorted(versions, key=lambda v: v.effective_from)
        if not ordered:
            raise RateDataError("At least one rate version is required")

        seen_ids: set[str] = set()
        for version in ordered:
            _validate_version(version)
            if version.version_id in seen_ids:
                raise RateDataError(f"Duplicate rate version id: {version.version_id}")
            seen_ids.add(version.version_id)

        for previous, current in zip(ordered, ordered[1:]):
            if current.effective_from <= previous.effective_to:
                raise RateDataError(
                    f"Rate versions {previous.version_id} and {current.version_id} "
                    f"have overlapping effective ranges"
                )
            if (current.effective_from - previous.effective_to).days > 1:
                _LOGGER.warning(
                    "Rate history has a gap between %s and %s",
                    previous.version_id,
                    current.version_id,
                )

        self._versions: tuple[RateVersion, ...] = tuple(ordered)
        _LOGGER.debug(
            "Rate registry built with %d versions covering %s to %s",
            len(self._versions),
            self._versions[0].effective_from,
            self._versions[-1].effective_to,
        )

    @classmethod
    def from_source(cls, source: RateDataSource) -> RateVersionRegistry:
        return cls(source.load_all())

    @property
    def versions(self) -> tuple[RateVersion, ...]:
        return self._versions

    def __len__(self) -> int:
        return len(self._versions)

    def coverage(self) -> tuple[date, date]:
        return self._versions[0].effective_from, self._versions[-1].effective_to

    def resolve(self, period_end_date: object) -> RateVersion:
        """Return the version in force on the given (billing period end) date."""
        target = as_date(period_end_date)
        for version in self._versions:
            if version.contains(target):
                _LOGGER.debug(
                    "Resolved %s to rate version %s", target, version.version_id
                )
                return version
        min_effective, max_effective = self.coverage()
        raise NoApplicableVersion(target, min_effective, max_effective)

    def get(self, version_id: str) -> RateVersion:
        for version in self._versions:
            if version.version_id == version_id:
                return version
        raise KeyError(f"Rate version not found: {version_id}")

    def current_version(self) -> RateVersion:
        return self._versions[-1]

    def crosses_version(self, start_date: object, end_date: object) -> bool:
        """True when the two dates fall under different rate versions.

        Only a hint for callers; billing always uses the end-date version.
        Dates outside the known coverage never count as a crossing.
        """
        try:
            start_version = self.resolve(start_date)
            end_version = self.resolve(end_date)
        except NoApplicableVersion:
            return False
        return start_version.version_id != end_version.version_id


def load_registry(
    electricity_type: ElectricityType = ElectricityType.NON_BUSINESS,
    source: RateDataSource | None = None,
) -> RateVersionRegistry:
    """Build a registry from the given source, or from the bundled rate history."""
    return RateVersionRegistry.from_source(
        source or PackagedRateSource(electricity_type)
    )


def _validate_version(version: RateVersion) -> None:
    if version.effective_to < version.effective_from:
        raise RateDataError(f"Rate version {version.version_id} ends before it starts")
    validate_table(version.summer, f"{version.version_id}/summer")
    validate_table(version.non_summer, f"{version.version_id}/non_summer")
    if len(version.summer) != len(version.non_summer):
        _LOGGER.debug(
            "Rate version %s has %d summer tiers and %d non-summer tiers",
            version.version_id,
            len(version.summer),
            len(version.non_summer),
        )


__all__ = ["RateVersionRegistry", "load_registry"]
