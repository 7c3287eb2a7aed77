"""initial roster schema: roster members, groups, titles, events and periods."""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5b1d7e3a9c20"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None

STATUS_LENGTH = 32

_EMPLOYABLE_PERIODS = {
    "wrestlers": ("employments", "injuries", "suspensions", "retirements"),
    "tag_teams": ("employments", "suspensions", "retirements"),
    "managers": ("employments", "injuries", "suspensions", "retirements"),
    "referees": ("employments", "injuries", "suspensions", "retirements"),
}
_ACTIVATABLE_PERIODS = {
    "stables": ("activations", "retirements"),
    "titles": ("activations", "retirements"),
}
# (table, owner table, owner column, other table, other column)
_MEMBERSHIPS = (
    ("tag_teams_wrestlers", "wrestlers", "wrestler_id", "tag_teams", "tag_team_id"),
    ("wrestlers_managers", "wrestlers", "wrestler_id", "managers", "manager_id"),
    ("tag_teams_managers", "tag_teams", "tag_team_id", "managers", "manager_id"),
    ("stables_wrestlers", "wrestlers", "wrestler_id", "stables", "stable_id"),
    ("stables_tag_teams", "tag_teams", "tag_team_id", "stables", "stable_id"),
    ("stables_managers", "managers", "manager_id", "stables", "stable_id"),
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def _soft_delete() -> sa.Column:
    return sa.Column("deleted_at", sa.DateTime(), nullable=True)


def _status() -> sa.Column:
    return sa.Column("status", sa.String(length=STATUS_LENGTH), nullable=False)


def _owner(column: str, table: str) -> sa.Column:
    return sa.Column(
        column,
        sa.Integer(),
        sa.ForeignKey(f"{table}.id", ondelete="CASCADE"),
        nullable=False,
    )


def _period_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("started_at", sa.DateTime(), nullable=False),
        sa.Column("ended_at", sa.DateTime(), nullable=True),
        *_timestamps(),
    ]


def _create_period_table(name: str, *owners: tuple[str, str]) -> None:
    op.create_table(
        name,
        *_period_columns(),
        *(_owner(column, table) for column, table in owners),
    )
    op.create_index(f"ix_{name}_ended_at", name, ["ended_at"])
    for column, _ in owners:
        op.create_index(f"ix_{name}_{column}", name, [column])


def _create_roster_table(name: str, *columns: sa.Column, status: bool = True) -> None:
    op.create_table(
        name,
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        *columns,
        *([_status()] if status else []),
        *_timestamps(),
        _soft_delete(),
    )
    op.create_index(f"ix_{name}_deleted_at", name, ["deleted_at"])
    if status:
        op.create_index(f"ix_{name}_status", name, ["status"])


def upgrade() -> None:
    """Create every table of the roster schema."""

    _create_roster_table(
        "venues",
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("street_address", sa.String(length=255), nullable=False),
        sa.Column("city", sa.String(length=255), nullable=False),
        sa.Column("state", sa.String(length=255), nullable=False),
        sa.Column("zipcode", sa.String(length=16), nullable=False),
        status=False,
    )
    op.create_index("ix_venues_name", "venues", ["name"])

    _create_roster_table(
        "wrestlers",
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("height", sa.Integer(), nullable=False),
        sa.Column("weight", sa.Integer(), nullable=False),
        sa.Column("hometown", sa.String(length=255), nullable=False),
        sa.Column("signature_move", sa.String(length=255), nullable=True),
    )
    op.create_index("ix_wrestlers_name", "wrestlers", ["name"])

    _create_roster_table(
        "tag_teams",
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("signature_move", sa.String(length=255), nullable=True),
    )
    op.create_index("ix_tag_teams_name", "tag_teams", ["name"])

    for people in ("managers", "referees"):
        _create_roster_table(
            people,
            sa.Column("first_name", sa.String(length=255), nullable=False),
            sa.Column("last_name", sa.String(length=255), nullable=False),
        )
        op.create_index(f"ix_{people}_last_name", people, ["last_name"])

    _create_roster_table(
        "stables",
        sa.Column("name", sa.String(length=255), nullable=False),
    )
    op.create_index("ix_stables_name", "stables", ["name"])

    _create_roster_table(
        "titles",
        sa.Column("name", sa.String(length=255), nullable=False, unique=True),
        sa.Column("type", sa.String(length=STATUS_LENGTH), nullable=False),
    )

    _create_roster_table(
        "events",
        sa.Column("name", sa.String(length=255), nullable=False, unique=True),
        sa.Column("date", sa.DateTime(), nullable=True),
        sa.Column(
            "venue_id",
            sa.Integer(),
            sa.ForeignKey("venues.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("preview", sa.Text(), nullable=True),
        status=False,
    )
    op.create_index("ix_events_date", "events", ["date"])
    op.create_index("ix_events_venue_id", "events", ["venue_id"])

    op.create_table(
        "events_matches",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _owner("event_id", "events"),
        sa.Column("match_number", sa.Integer(), nullable=False),
        sa.Column("match_type", sa.String(length=STATUS_LENGTH), nullable=False),
        sa.Column("preview", sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("event_id", "match_number", name="uq_events_matches_number"),
    )
    op.create_index("ix_events_matches_event_id", "events_matches", ["event_id"])

    op.create_table(
        "events_matches_competitors",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        _owner("event_match_id", "events_matches"),
        sa.Column("competitor_type", sa.String(length=STATUS_LENGTH), nullable=False),
        sa.Column("competitor_id", sa.Integer(), nullable=False),
        sa.Column("side_number", sa.Integer(), nullable=False),
    )
    op.create_index(
        "ix_events_matches_competitors_event_match_id",
        "events_matches_competitors",
        ["event_match_id"],
    )
    op.create_index(
        "ix_events_matches_competitors_competitor_id",
        "events_matches_competitors",
        ["competitor_id"],
    )

    for name, column, table in (
        ("events_matches_referees", "referee_id", "referees"),
        ("events_matches_titles", "title_id", "titles"),
    ):
        op.create_table(
            name,
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            _owner("event_match_id", "events_matches"),
            _owner(column, table),
        )
        op.create_index(f"ix_{name}_event_match_id", name, ["event_match_id"])
        op.create_index(f"ix_{name}_{column}", name, [column])

    op.create_table(
        "events_matches_results",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "event_match_id",
            sa.Integer(),
            sa.ForeignKey("events_matches.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("winning_side", sa.Integer(), nullable=True),
        sa.Column("decision", sa.String(length=STATUS_LENGTH), nullable=False),
        *_timestamps(),
    )

    for periods in (_EMPLOYABLE_PERIODS, _ACTIVATABLE_PERIODS):
        for owner, families in periods.items():
            for family in families:
                _create_period_table(f"{owner}_{family}", (f"{owner[:-1]}_id", owner))

    for name, owner_table, owner_column, other_table, other_column in _MEMBERSHIPS:
        _create_period_table(name, (owner_column, owner_table), (other_column, other_table))

    op.create_table(
        "titles_championships",
        *_period_columns(),
        _owner("title_id", "titles"),
        sa.Column("champion_type", sa.String(length=STATUS_LENGTH), nullable=False),
        sa.Column("champion_id", sa.Integer(), nullable=False),
        sa.Column(
            "won_event_match_id",
            sa.Integer(),
            sa.ForeignKey("events_matches.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "lost_event_match_id",
            sa.Integer(),
            sa.ForeignKey("events_matches.id", ondelete="SET NULL"),
            nullable=True,
        ),
    )
    op.create_index("ix_titles_championships_ended_at", "titles_championships", ["ended_at"])
    op.create_index("ix_titles_championships_title_id", "titles_championships", ["title_id"])
    op.create_index(
        "ix_titles_championships_champion",
        "titles_championships",
        ["champion_type", "champion_id"],
    )


def downgrade() -> None:
    """Drop the roster schema in reverse dependency order."""

    op.drop_table("titles_championships")
    for name, *_ in reversed(_MEMBERSHIPS):
        op.drop_table(name)
    for periods in (_ACTIVATABLE_PERIODS, _EMPLOYABLE_PERIODS):
        for owner, families in periods.items():
            for family in families:
                op.drop_table(f"{owner}_{family}")
    for name in (
        "events_matches_results",
        "events_matches_titles",
        "events_matches_referees",
        "events_matches_competitors",
        "events_matches",
        "events",
        "titles",
        "stables",
        "referees",
        "managers",
        "tag_teams",
        "wrestlers",
        "venues",
    ):
        op.drop_table(name)
