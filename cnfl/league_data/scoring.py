"""Fantasy point calculation for participant teams.

Every view that shows a team total (admin participant details, the
leaderboard, a participant's own XI) goes through ``team_total`` so the
numbers always agree.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .schema.models import ParticipantTeam, Player, PlayerCategory, RosterSlot

VIP_MULTIPLIER = 2


def player_total(player: Optional[Player]) -> float:
    """Sum of a player's match points; unset matches count as zero."""
    if player is None:
        return 0
    return sum(value or 0 for value in player.points)


def join_baseline(team: ParticipantTeam, player_id: str) -> float:
    return team.join_history.get(player_id, 0) or 0


def points_since_joining(team: ParticipantTeam, player: Player) -> float:
    return player_total(player) - join_baseline(team, player.id)


def slot_contribution(
    team: ParticipantTeam, slot: RosterSlot, players: Mapping[str, Player]
) -> float:
    """Points a roster slot adds to the team total, VIP doubling included."""
    player = players.get(slot.player_id)
    if player is None:
        return 0
    earned = points_since_joining(team, player)
    return earned * VIP_MULTIPLIER if slot.is_vip else earned


def team_total(team: ParticipantTeam, players: Mapping[str, Player]) -> float:
    current = sum(slot_contribution(team, slot, players) for slot in team.players)
    return (team.archived_points or 0) + current


@dataclass(frozen=True)
class PlayerBreakdown:
    player_id: str
    name: str
    team_name: str
    category: Optional[PlayerCategory]
    is_vip: bool
    total_points: float
    baseline: float
    points_since_joining: float
    contribution: float


def team_breakdown(
    team: ParticipantTeam, players: Mapping[str, Player]
) -> list[PlayerBreakdown]:
    """Per-slot scoring detail in roster order."""
    rows: list[PlayerBreakdown] = []
    for slot in team.players:
        player = players.get(slot.player_id)
        baseline = join_baseline(team, slot.player_id)
        total = player_total(player)
        rows.append(
            PlayerBreakdown(
                player_id=slot.player_id,
                name=player.name if player else "Unknown Player",
                team_name=player.team_name if player else "",
                category=player.category if player else None,
                is_vip=slot.is_vip,
                total_points=total,
                baseline=baseline,
                points_since_joining=total - baseline if player else 0,
                contribution=slot_contribution(team, slot, players),
            )
        )
    return rows
