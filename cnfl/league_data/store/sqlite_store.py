"""SQLite export of a league snapshot through SQLAlchemy Core."""

from __future__ import annotations

import os
from typing import Any, Iterable, Mapping

from sqlalchemy import create_engine
from sqlalchemy.engine import Connection

from ..leaderboard import rank_event
from ..schema.tables import metadata
from .state import LeagueState


def create_tables(conn: Connection) -> None:
    metadata.create_all(conn)


def _normalize_row(row: Any) -> Mapping[str, Any]:
    if hasattr(row, "to_row"):
        return row.to_row()
    if isinstance(row, Mapping):
        return row
    raise TypeError("Row must be a Mapping or expose to_row().")


def bulk_insert(conn: Connection, table: str, rows: Iterable[Any]) -> int:
    normalized = [dict(_normalize_row(row)) for row in rows]
    if not normalized:
        return 0
    conn.execute(metadata.tables[table].insert(), normalized)
    return len(normalized)


def _standings_rows(state: LeagueState) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    for event in state.events:
        for entry in rank_event(state, event.id):
            rows.append(
                {
                    "participant_team_id": entry.participant_team_id,
                    "event_id": event.id,
                    "rank": entry.rank,
                    "total_points": entry.total_points,
                }
            )
    return rows


def export_state(conn: Connection, state: LeagueState) -> dict[str, int]:
    """Write every collection of ``state`` into already-created tables.

    Returns the number of rows written per table.
    """
    collections = {
        "users": state.users,
        "events": state.events,
        "cricket_teams": state.teams,
        "players": state.players,
        "participant_teams": state.participant_teams,
        "replacement_requests": state.replacement_requests,
        "announcements": state.announcements,
        "chat_messages": state.chat_messages,
        "cnfl_history": state.cnfl_history,
        "site_settings": [state.site_settings],
        "team_standings": _standings_rows(state),
    }
    return {table: bulk_insert(conn, table, rows) for table, rows in collections.items()}


def save_to_file(state: LeagueState, output_path: str) -> str:
    output_dir = os.path.dirname(output_path)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)
    if os.path.exists(output_path):
        os.remove(output_path)

    engine = create_engine(f"sqlite:///{output_path}")
    try:
        with engine.begin() as conn:
            create_tables(conn)
            export_state(conn, state)
    finally:
        engine.dispose()

    return output_path
