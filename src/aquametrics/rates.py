"""Rate history loaders.

A rate history is a list of version records, each valid over an inclusive
date range and carrying summer / non-summer monthly tier tables::

    {
        "version_id": "2024-04-01",
        "effective_from": "2024-04-01",
        "effective_to": "2025-09-30",
        "tariffs": {
            "non_business": {
                "summer": [{"upper_bound_kwh": 120, "unit_price": 1.78}, ...],
                "non_summer": [...]
            }
        }
    }

The two tables may also sit directly on the record (``"summer"`` and
``"non_summer"``) when a file describes a single electricity type.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Iterable, Mapping
from importlib import resources
from pathlib import Path
from typing import IO, Any, Protocol

from platformdirs import user_data_path

from aquametrics.errors import InvalidInputError, RateDataError
from aquametrics.models import (
    OPEN_ENDED_DATE,
    ElectricityType,
    RateVersion,
    SeasonTierTable,
    Tier,
    as_date,
)

_LOGGER = logging.getLogger(__name__)


class RateDataSource(Protocol):
    def load_all(self) -> list[RateVersion]: ...


class PackagedRateSource:
    """Rate history bundled with the package as JSON."""

    def __init__(
        self,
        electricity_type: ElectricityType = ElectricityType.NON_BUSINESS,
        filename: str = "rates.json",
        package: str = "aquametrics.data",
    ) -> None:
        self._electricity_type = electricity_type
        self._filename = filename
        self._package = package

    def _open_resource(self) -> IO[str]:
        try:
            resource = resources.files(self._package).joinpath(self._filename)
            return resource.open("r", encoding="utf-8")
        except FileNotFoundError as exc:
            raise RateDataError(
                f"Rate file not found in package: {self._package}/{self._filename}"
            ) from exc
        except ModuleNotFoundError as exc:
            raise RateDataError(f"Rate package not found: {self._package}") from exc

    def load_raw(self) -> dict[str, Any]:
        with self._open_resource() as f:
            return json.load(f)

    def load_all(self) -> list[RateVersion]:
        data = self.load_raw()
        if not isinstance(data, Mapping):
            raise RateDataError(f"Rate file {self._filename} must hold an object")
        return parse_rate_versions(data.get("versions", []), self._electricity_type)


class DirectoryRateSource:
    """One JSON file per rate version, e.g. ``rates/2024-04-01.json``."""

    def __init__(
        self,
        electricity_type: ElectricityType = ElectricityType.NON_BUSINESS,
        directory: Path | None = None,
    ) -> None:
        self._electricity_type = electricity_type
        self._directory = (
            Path(directory) if directory else user_data_path("aquametrics") / "rates"
        )

    @property
    def directory(self) -> Path:
        return self._directory

    def load_all(self) -> list[RateVersion]:
        if not self._directory.is_dir():
            raise RateDataError(f"Rate directory not found: {self._directory}")
        records = []
        for path in sorted(self._directory.glob("*.json")):
            with open(path, encoding="utf-8") as f:
                try:
                    records.append(json.load(f))
                except json.JSONDecodeError as exc:
                    raise RateDataError(f"Invalid rate file {path.name}") from exc
        return parse_rate_versions(records, self._electricity_type)


class StaticRateSource:
    """In-memory rate history, either raw records or ready RateVersions."""

    def __init__(
        self,
        records: Iterable[Mapping[str, Any] | RateVersion],
        electricity_type: ElectricityType = ElectricityType.NON_BUSINESS,
    ) -> None:
        self._records = list(records)
        self._electricity_type = electricity_type

    def load_all(self) -> list[RateVersion]:
        versions = []
        for record in self._records:
            if isinstance(record, RateVersion):
                versions.append(record)
            else:
                versions.append(parse_rate_version(record, self._electricity_type))
        return versions


def parse_rate_versions(
    records: Iterable[Mapping[str, Any]],
    electricity_type: ElectricityType = ElectricityType.NON_BUSINESS,
) -> list[RateVersion]:
    return [parse_rate_version(record, electricity_type) for record in records]


def parse_rate_version(
    record: Mapping[str, Any],
    electricity_type: ElectricityType = ElectricityType.NON_BUSINESS,
) -> RateVersion:
    if not isinstance(record, Mapping):
        raise RateDataError(
            f"Rate record must be an object, got {type(record).__name__}"
        )
    try:
        effective_from = as_date(record["effective_from"])
        raw_to = record.get("effective_to")
        effective_to = OPEN_ENDED_DATE if raw_to is None else as_date(raw_to)
    except KeyError as exc:
        raise RateDataError(f"Rate record is missing {exc.args[0]!r}") from exc
    except InvalidInputError as exc:
        raise RateDataError(f"Rate record has an invalid date: {exc}") from exc

    version_id = str(record.get("version_id") or effective_from.isoformat())
    tables = _season_tables(record, electricity_type, version_id)
    return RateVersion(
        version_id=version_id,
        effective_from=effective_from,
        effective_to=effective_to,
        summer=parse_tier_table(tables["summer"], f"{version_id}/summer"),
        non_summer=parse_tier_table(tables["non_summer"], f"{version_id}/non_summer"),
    )


def _season_tables(
    record: Mapping[str, Any],
    electricity_type: ElectricityType,
    version_id: str,
) -> Mapping[str, Any]:
    tariffs = record.get("tariffs")
    if tariffs is not None:
        if not isinstance(tariffs, Mapping):
            raise RateDataError(f"Rate version {version_id} has malformed tariffs")
        tables = tariffs.get(electricity_type.value)
        if tables is None:
            raise RateDataError(
                f"Rate version {version_id} has no tables for "
                f"{electricity_type.value}"
            )
    else:
        tables = record
    if not isinstance(tables, Mapping):
        raise RateDataError(
            f"Rate version {version_id} has malformed {electricity_type.value} tables"
        )
    if "summer" not in tables or "non_summer" not in tables:
        raise RateDataError(
            f"Rate version {version_id} needs both summer and non_summer tables"
        )
    for season in ("summer", "non_summer"):
        if not isinstance(tables[season], list):
            raise RateDataError(
                f"Rate version {version_id} {season} table must be a list"
            )
    return tables


def parse_tier_table(
    items: Iterable[Mapping[str, Any]], name: str = "tier table"
) -> SeasonTierTable:
    """Build a tier table, skipping malformed entries with a warning."""
    tiers: list[Tier] = []
    previous_bound = 0.0
    for position, item in enumerate(items):
        try:
            price = float(item["unit_price"])
            raw_bound = item.get("upper_bound_kwh")
            bound = None if raw_bound is None else float(raw_bound)
        except (KeyError, TypeError, ValueError) as exc:
            _LOGGER.warning("Skipping malformed tier %s in %s: %s", position, name, exc)
            continue

        if not math.isfinite(price) or price <= 0:
            _LOGGER.warning(
                "Skipping tier %s in %s: invalid unit price %r", position, name, price
            )
            continue
        if bound is not None and (not math.isfinite(bound) or bound <= previous_bound):
            _LOGGER.warning(
                "Skipping tier %s in %s: boundary %r does not exceed %r",
                position,
                name,
                bound,
                previous_bound,
            )
            continue
        if tiers and tiers[-1].upper_bound_kwh is None:
            _LOGGER.warning(
                "Skipping tier %s in %s: follows the open-ended tier", position, name
            )
            continue

        tiers.append(Tier(upper_bound_kwh=bound, unit_price=price))
        if bound is not None:
            previous_bound = bound
    return SeasonTierTable(tuple(tiers))


__all__ = [
    "DirectoryRateSource",
    "PackagedRateSource",
    "RateDataSource",
    "StaticRateSource",
    "parse_rate_version",
    "parse_rate_versions",
    "parse_tier_table",
]
