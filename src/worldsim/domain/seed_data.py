"""Seed data for new sessions.

Two sources are supported: the hand-authored prototype world used by default,
and cities generated from an externally supplied ``id,name,description`` CSV.
"""

from __future__ import annotations

import csv
import io
from collections.abc import Sequence
from pathlib import Path

from worldsim.domain.enums import ResourceType, TerrainType
from worldsim.domain.models import (
    CityID,
    CityRecord,
    CityState,
    LocationID,
    ResourceDeposit,
    StrategicLocation,
)
from worldsim.domain.terrain import TerrainProfileTable, roll_city_multipliers
from worldsim.utils.rng import RandomSource

CITY_ID_PREFIX = "city"


def prototype_cities(terrain: TerrainProfileTable) -> list[CityState]:
    """Return the two-city prototype world with unowned cities."""

    karadag = _city_from_profile(terrain, "city-karadag", "Karadag", TerrainType.MOUNTAIN)
    karadag.deposits.extend(
        [
            ResourceDeposit(ResourceType.IRON, 0.9),
            ResourceDeposit(ResourceType.GOLD, 0.4),
        ]
    )

    ovakent = _city_from_profile(terrain, "city-ovakent", "Ovakent", TerrainType.PLAINS)
    ovakent.deposits.extend(
        [
            ResourceDeposit(ResourceType.GRAIN, 0.95),
            ResourceDeposit(ResourceType.STONE, 0.25),
        ]
    )
    return [karadag, ovakent]


def prototype_locations() -> list[StrategicLocation]:
    return [
        StrategicLocation(
            id=LocationID("bridge-northpass"),
            name="Northpass Bridge",
            is_bridge_crossing=True,
            transit_tax=6,
        )
    ]


def _city_from_profile(
    terrain: TerrainProfileTable,
    city_id: str,
    name: str,
    terrain_type: TerrainType,
) -> CityState:
    city = CityState(id=CityID(city_id), name=name, terrain=terrain_type)
    profile = terrain.get_profile(terrain_type)
    if profile is not None:
        city.defense_multiplier = profile.defense_multiplier
        city.farming_multiplier = profile.farming_multiplier
        city.mining_multiplier = profile.mining_multiplier
    return city


# --- Tabular city records -------------------------------------------------------


def parse_city_records(text: str) -> list[CityRecord]:
    """Parse ``id,name,description`` rows; the first row is a header.

    Rows with fewer than three fields are skipped and every field is trimmed.
    """

    records: list[CityRecord] = []
    rows = [row for row in csv.reader(io.StringIO(text)) if row]
    for row in rows[1:]:
        if len(row) < 3:
            continue
        records.append(
            CityRecord(id=row[0].strip(), name=row[1].strip(), description=row[2].strip())
        )
    return records


def load_city_records(path: Path | str) -> list[CityRecord]:
    """Read city records from a CSV file."""

    return parse_city_records(Path(path).read_text(encoding="utf-8"))


def resolve_record(records: Sequence[CityRecord], index: int) -> CityRecord:
    """Return the record for the ``index``-th city, cycling and filling blanks."""

    fallback_id = f"{CITY_ID_PREFIX}-{index + 1}"
    if not records:
        return CityRecord(
            id=fallback_id,
            name=f"City {index + 1}",
            description="Procedurally generated city.",
        )

    record = records[index % len(records)]
    return CityRecord(
        id=record.id or fallback_id,
        name=record.name or f"City {index + 1}",
        description=record.description or "Generated city data.",
    )


def generate_cities(
    records: Sequence[CityRecord],
    count: int,
    rng: RandomSource,
) -> list[CityState]:
    """Create ``count`` unowned cities with a random terrain and rolled multipliers.

    Records are reused cyclically when ``count`` exceeds their number; a
    recycled record keeps its id, so callers registering the result should
    expect later duplicates to be refused.
    """

    terrains = list(TerrainType)
    cities: list[CityState] = []
    for index in range(max(0, count)):
        record = resolve_record(records, index)
        terrain = terrains[min(int(rng.random() * len(terrains)), len(terrains) - 1)]
        defense, farming, mining = roll_city_multipliers(terrain, rng)
        cities.append(
            CityState(
                id=CityID(record.id),
                name=record.name,
                description=record.description,
                terrain=terrain,
                defense_multiplier=defense,
                farming_multiplier=farming,
                mining_multiplier=mining,
            )
        )
    return cities
