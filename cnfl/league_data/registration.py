"""Event configuration checks and fantasy team registration."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional

from .errors import CONFLICT, INVALID, NOT_FOUND, OperationResult
from .rules.roster import distinct_slots, validate_roster
from .schema.models import Event, ParticipantTeam, RosterSlot
from .status import is_registration_open
from .store import actions
from .store.reducer import apply
from .store.state import LeagueState

logger = logging.getLogger(__name__)


def validate_event(event: Event) -> Optional[str]:
    """Return why ``event`` is not a usable configuration, or None."""
    if not event.name.strip():
        return "Event name is required."
    if event.registration_deadline >= event.tournament_end_time:
        return "Registration deadline must be before the tournament end time."
    limits = (
        event.total_matches,
        event.max_matches_per_team,
        event.max_players_from_single_team,
        event.max_vip_players,
        event.max_replacements,
    )
    if any(limit < 0 for limit in limits):
        return "Event limits cannot be negative."
    if event.max_foreign_players is not None and event.max_foreign_players < 0:
        return "Max foreign players cannot be negative."
    return None


def register_team(
    state: LeagueState,
    *,
    team_id: str,
    user_id: str,
    event_id: str,
    team_name: str,
    selections: Iterable[Optional[RosterSlot]],
    now: datetime,
) -> OperationResult:
    """Create a participant's XI for an event after checking every roster rule."""
    user = state.get_user(user_id)
    if user is None:
        return OperationResult.failure(state, NOT_FOUND, "Not logged in")
    if not team_name.strip():
        return OperationResult.failure(state, INVALID, "Team name is required.")

    event = state.get_event(event_id)
    if event is None:
        return OperationResult.failure(state, NOT_FOUND, f"Event {event_id} not found.")
    if not is_registration_open(event, now):
        return OperationResult.failure(
            state, INVALID, "Registration for this event has closed."
        )
    if any(
        pt.participant_id == user_id and pt.event_id == event_id
        for pt in state.participant_teams
    ):
        return OperationResult.failure(
            state, CONFLICT, "You have already created a team for this event."
        )

    selections = list(selections)
    players = state.players_by_id()
    foreign = [
        slot.player_id for slot in distinct_slots(selections)
        if slot.player_id not in players or players[slot.player_id].event_id != event_id
    ]
    if foreign:
        return OperationResult.failure(
            state, INVALID, "Selected players must belong to this event."
        )

    report = validate_roster(event, selections, players)
    if not report.passed:
        return OperationResult.failure(state, INVALID, report.first_error or "Invalid team.")

    team = ParticipantTeam(
        id=team_id,
        participant_id=user.id,
        participant_name=user.full_name,
        team_name=team_name.strip(),
        event_id=event.id,
        players=tuple(distinct_slots(selections)),
        replacements_left=event.max_replacements,
        archived_points=0,
        join_history={},
    )
    logger.info("Team %s registered by %s for event %s", team.id, user.id, event.id)
    return OperationResult(state=apply(state, actions.AddParticipantTeam(team)), value=team)
