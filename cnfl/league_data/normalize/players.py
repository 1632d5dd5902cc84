"""Normalization helpers for bulk player imports."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from ..schema.models import CricketTeam, Player, PlayerCategory, PlayerType

EXPECTED_FORMAT = "Name,Category,Type,Team Name"


@dataclass(frozen=True)
class BulkImportResult:
    players: tuple[Player, ...]
    errors: tuple[str, ...]

    @property
    def success_count(self) -> int:
        return len(self.players)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def summary(self) -> str:
        lines = [
            "Bulk add complete.",
            f"Success: {self.success_count}",
            f"Failed: {self.error_count}",
        ]
        if self.errors:
            lines.extend(["", "Errors:", *self.errors])
        return "\n".join(lines)


def _match_enum(enum_cls, raw: str):
    wanted = raw.lower()
    for member in enum_cls:
        if member.value.lower() == wanted:
            return member
    return None


def _default_player_id(line_number: int) -> str:
    return f"player-{uuid.uuid4().hex[:12]}-{line_number}"


def parse_player_line(
    line: str, teams_by_name: dict[str, CricketTeam]
) -> tuple[Optional[tuple[str, PlayerCategory, PlayerType, CricketTeam]], Optional[str]]:
    """Parse one ``Name,Category,Type,TeamName`` record.

    Returns ``(fields, None)`` on success or ``(None, reason)``.
    """
    parts = [part.strip() for part in line.split(",")]
    if len(parts) != 4 or not all(parts):
        return None, f"Invalid format. Expected: {EXPECTED_FORMAT}"
    name, category_raw, type_raw, team_name = parts

    team = teams_by_name.get(team_name.lower())
    if team is None:
        return None, f'Team "{team_name}" not found in this event.'

    category = _match_enum(PlayerCategory, category_raw)
    if category is None:
        allowed = ", ".join(member.value for member in PlayerCategory)
        return None, f'Invalid category "{category_raw}". Must be one of: {allowed}'

    player_type = _match_enum(PlayerType, type_raw)
    if player_type is None:
        return None, f"Invalid type \"{type_raw}\". Must be 'Local' or 'Foreign'."

    return (name, category, player_type, team), None


def normalize_bulk_players(
    raw_text: str,
    event_id: str,
    teams: Iterable[CricketTeam],
    *,
    id_factory: Callable[[int], str] = _default_player_id,
) -> BulkImportResult:
    """Turn newline-delimited player records into ``Player`` rows.

    Blank lines are skipped and do not count towards line numbers. Bad lines
    are reported as ``Line N: reason`` and left out; they never abort the batch.
    """
    teams_by_name: dict[str, CricketTeam] = {}
    for team in teams:
        if team.event_id == event_id:
            teams_by_name.setdefault(team.name.lower(), team)

    lines = [line for line in raw_text.splitlines() if line.strip()]
    players: list[Player] = []
    errors: list[str] = []
    for line_number, line in enumerate(lines, start=1):
        fields, reason = parse_player_line(line, teams_by_name)
        if fields is None:
            errors.append(f"Line {line_number}: {reason}")
            continue
        name, category, player_type, team = fields
        players.append(
            Player(
                id=id_factory(line_number),
                name=name,
                category=category,
                player_type=player_type,
                team_id=team.id,
                team_name=team.name,
                event_id=event_id,
                points=(),
            )
        )

    return BulkImportResult(players=tuple(players), errors=tuple(errors))
