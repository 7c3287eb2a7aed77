#!/usr/bin/env python
"""Seed a roster from a JSON fixture through the roster services.

Records go through the same services as the API, so employment dates,
tag team partners and stable memberships obey the booking rules.  Records
reference each other by name: tag teams list wrestler names, stables list
wrestler, tag team and manager names (managers as "First Last") and events
name their venue.

Usage:
    python -m ringside.scripts.seed_roster [path_to_json]
    python -m ringside.scripts.seed_roster ./data/fixtures/roster.json --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from ringside.db.connection import get_async_session_context, get_database_type
from ringside.schemas.event import EventCreate
from ringside.schemas.person import ManagerCreate, RefereeCreate
from ringside.schemas.stable import StableCreate
from ringside.schemas.tag_team import TagTeamCreate
from ringside.schemas.title import TitleCreate
from ringside.schemas.venue import VenueCreate
from ringside.schemas.wrestler import WrestlerCreate
from ringside.services.event_service import EventService
from ringside.services.manager_service import ManagerService
from ringside.services.referee_service import RefereeService
from ringside.services.stable_service import StableService
from ringside.services.tag_team_service import TagTeamService
from ringside.services.title_service import TitleService
from ringside.services.venue_service import VenueService
from ringside.services.wrestler_service import WrestlerService
from ringside.settings import get_settings

logger = logging.getLogger(__name__)

DEFAULT_FIXTURE = Path("./data/fixtures/roster.json")

# Creation order: every section only references sections above it.
SECTIONS = (
    "venues",
    "wrestlers",
    "managers",
    "referees",
    "tag_teams",
    "stables",
    "titles",
    "events",
)


class FixtureError(ValueError):
    """The fixture references a record it does not define."""


def load_fixture(path: Path) -> dict[str, list[dict[str, Any]]]:
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise FixtureError(f"{path} must contain a JSON object keyed by section")
    unknown = sorted(set(data) - set(SECTIONS))
    if unknown:
        raise FixtureError(f"Unknown fixture sections: {', '.join(unknown)}")
    return {section: list(data.get(section) or []) for section in SECTIONS}


def _resolve(ids: Mapping[str, int], names: list[str], section: str) -> list[int]:
    missing = [name for name in names if name not in ids]
    if missing:
        raise FixtureError(f"Unknown {section}: {', '.join(missing)}")
    return [ids[name] for name in names]


def _validated(schema: type[BaseModel], record: Mapping[str, Any]) -> dict[str, Any]:
    return schema.model_validate(record).model_dump()


async def seed_roster(
    session: AsyncSession, fixture: Mapping[str, list[Mapping[str, Any]]]
) -> dict[str, int]:
    """Create every fixture record and return the number created per section.

    The caller owns the transaction; nothing is committed here.
    """

    ids: dict[str, dict[str, int]] = {section: {} for section in SECTIONS}
    counts = dict.fromkeys(SECTIONS, 0)

    async def create(section: str, service: Any, values: dict[str, Any], key: str) -> None:
        entity = await service.create(values)
        ids[section][key] = entity.id
        counts[section] += 1
        logger.debug("Seeded %s %s as %s", section, key, entity.id)

    for record in fixture.get("venues", []):
        values = _validated(VenueCreate, record)
        await create("venues", VenueService(session), values, values["name"])

    for record in fixture.get("wrestlers", []):
        values = _validated(WrestlerCreate, record)
        await create("wrestlers", WrestlerService(session), values, values["name"])

    for section, schema, service in (
        ("managers", ManagerCreate, ManagerService(session)),
        ("referees", RefereeCreate, RefereeService(session)),
    ):
        for record in fixture.get(section, []):
            values = _validated(schema, record)
            await create(
                section, service, values, f"{values['first_name']} {values['last_name']}"
            )

    for record in fixture.get("tag_teams", []):
        record = dict(record)
        record["wrestler_ids"] = _resolve(
            ids["wrestlers"], record.pop("wrestlers", []), "wrestlers"
        )
        values = _validated(TagTeamCreate, record)
        await create("tag_teams", TagTeamService(session), values, values["name"])

    for record in fixture.get("stables", []):
        record = dict(record)
        for section in ("wrestlers", "tag_teams", "managers"):
            record[f"{section[:-1]}_ids"] = _resolve(
                ids[section], record.pop(section, []), section
            )
        values = _validated(StableCreate, record)
        await create("stables", StableService(session), values, values["name"])

    for record in fixture.get("titles", []):
        values = _validated(TitleCreate, record)
        await create("titles", TitleService(session), values, values["name"])

    for record in fixture.get("events", []):
        record = dict(record)
        venue = record.pop("venue", None)
        if venue is not None:
            record["venue_id"] = _resolve(ids["venues"], [venue], "venues")[0]
        values = _validated(EventCreate, record)
        await create("events", EventService(session), values, values["name"])

    return counts


async def main() -> int:
    """CLI entry point."""
    logging.basicConfig(
        level=get_settings().log_level_numeric,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Seed a wrestling roster from JSON")
    parser.add_argument(
        "json_path",
        nargs="?",
        type=Path,
        default=DEFAULT_FIXTURE,
        help=f"Path to the JSON fixture (default: {DEFAULT_FIXTURE})",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Run every service call, then roll back instead of committing",
    )
    args = parser.parse_args()

    if not args.json_path.exists():
        print(f"File not found: {args.json_path}", file=sys.stderr)
        return 1

    print(f"Database type detected: {get_database_type().upper()}")
    print(f"Seed source: {args.json_path}")
    print("Reminder: run `alembic upgrade head` before seeding.")
    print()

    fixture = load_fixture(args.json_path)
    async with get_async_session_context() as session:
        counts = await seed_roster(session, fixture)
        if args.dry_run:
            await session.rollback()
        else:
            await session.commit()

    print("=" * 50)
    for section, count in counts.items():
        print(f"{'Validated' if args.dry_run else 'Loaded'} {count} {section.replace('_', ' ')}")
    print("=" * 50)
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
