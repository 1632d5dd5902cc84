"""Leaderboard ranking over participant teams."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Iterable, Mapping, Optional

from .schema.models import ParticipantTeam, Player
from .scoring import team_total
from .store.state import LeagueState


@dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    participant_team_id: str
    participant_id: str
    participant_name: str
    team_name: str
    event_id: str
    total_points: float
    replacements_left: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def rank_teams(
    teams: Iterable[ParticipantTeam], players: Mapping[str, Player]
) -> list[LeaderboardEntry]:
    """Order teams by total points, highest first, and number them 1..N.

    Equal totals are ordered by team id so the ranking is reproducible; ranks
    follow sorted position, so ties still get distinct consecutive ranks.
    """
    scored = [(team, team_total(team, players)) for team in teams]
    scored.sort(key=lambda item: (-item[1], item[0].id))
    return [
        LeaderboardEntry(
            rank=index,
            participant_team_id=team.id,
            participant_id=team.participant_id,
            participant_name=team.participant_name,
            team_name=team.team_name,
            event_id=team.event_id,
            total_points=total,
            replacements_left=team.replacements_left,
        )
        for index, (team, total) in enumerate(scored, start=1)
    ]


def rank_event(state: LeagueState, event_id: str) -> list[LeaderboardEntry]:
    """Leaderboard for one event; teams of a deleted event are not ranked."""
    if state.get_event(event_id) is None:
        return []
    return rank_teams(state.participant_teams_for_event(event_id), state.players_by_id())


def team_standing(state: LeagueState, participant_team_id: str) -> Optional[LeaderboardEntry]:
    team = state.get_participant_team(participant_team_id)
    if team is None:
        return None
    for entry in rank_event(state, team.event_id):
        if entry.participant_team_id == participant_team_id:
            return entry
    return None
