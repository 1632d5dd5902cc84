"""Replacement request workflow.

A request is created ``pending`` by a participant and decided exactly once by
an admin. Accepting it freezes the outgoing player's points into the team's
archive, swaps the incoming player in without VIP status and records the
incoming player's current total as their join baseline.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional

from .errors import CONFLICT, INVALID, NOT_FOUND, OperationResult
from .rules.roster import validate_swap
from .schema.models import ReplacementRequest, RequestStatus, RosterSlot
from .scoring import player_total, slot_contribution
from .status import EventStatus, event_status
from .store import actions
from .store.reducer import apply
from .store.state import LeagueState

logger = logging.getLogger(__name__)

DEFAULT_REJECTION_REASON = "No reason provided."


def submit_replacement(
    state: LeagueState,
    *,
    request_id: str,
    participant_team_id: str,
    outgoing_id: str,
    incoming_id: str,
    note: str = "",
    now: datetime,
) -> OperationResult:
    team = state.get_participant_team(participant_team_id)
    if team is None:
        return OperationResult.failure(state, NOT_FOUND, "Participant team not found.")
    if not outgoing_id or not incoming_id:
        return OperationResult.failure(
            state, INVALID, "You must select a current and a new player."
        )

    event = state.get_event(team.event_id)
    if event is None:
        return OperationResult.failure(state, NOT_FOUND, "Event not found for this team.")
    if team.replacements_left <= 0:
        return OperationResult.failure(state, INVALID, "You have no replacements left.")
    if event_status(event, now) != EventStatus.RUNNING:
        return OperationResult.failure(
            state, INVALID, "Replacements are only allowed while the tournament is running."
        )
    if team.slot_for(outgoing_id) is None:
        return OperationResult.failure(
            state, INVALID, "The player to replace is not in your team."
        )

    incoming = state.get_player(incoming_id)
    if incoming is None or incoming.event_id != event.id:
        return OperationResult.failure(
            state, INVALID, "The new player is not part of this event."
        )
    if incoming_id in team.player_ids:
        return OperationResult.failure(state, INVALID, "The new player is already in your team.")

    report = validate_swap(event, team, outgoing_id, incoming_id, state.players_by_id())
    if not report.passed:
        return OperationResult.failure(state, INVALID, report.first_error or "Invalid request.")

    request = ReplacementRequest(
        id=request_id,
        participant_team_id=team.id,
        participant_name=team.participant_name,
        current_player_id=outgoing_id,
        new_player_id=incoming_id,
        note=note,
        status=RequestStatus.PENDING,
        created_at=now,
    )
    logger.info(
        "Replacement %s submitted for team %s: %s -> %s",
        request.id, team.id, outgoing_id, incoming_id,
    )
    return OperationResult(
        state=apply(state, actions.AddReplacementRequest(request)), value=request
    )


def _pending_request(
    state: LeagueState, request_id: str
) -> tuple[Optional[ReplacementRequest], Optional[OperationResult]]:
    request = state.get_replacement_request(request_id)
    if request is None:
        return None, OperationResult.failure(
            state, NOT_FOUND, f"Replacement request {request_id} not found."
        )
    if not request.is_pending:
        return None, OperationResult.failure(
            state,
            CONFLICT,
            f"Replacement request {request_id} has already been {request.status.value}.",
        )
    return request, None


def accept_replacement(state: LeagueState, request_id: str) -> OperationResult:
    request, failure = _pending_request(state, request_id)
    if failure is not None:
        return failure

    accepted = replace(request, status=RequestStatus.ACCEPTED, reason=None)
    team = state.get_participant_team(request.participant_team_id)
    if team is None:
        logger.warning(
            "Accepting replacement %s for missing team %s; roster left untouched",
            request.id, request.participant_team_id,
        )
        return OperationResult(
            state=apply(state, actions.UpdateReplacementRequest(accepted)), value=accepted
        )

    outgoing_slot = team.slot_for(request.current_player_id)
    if outgoing_slot is None or request.new_player_id in team.player_ids:
        return OperationResult.failure(
            state, CONFLICT, "This request no longer matches the team's current roster."
        )
    if team.replacements_left <= 0:
        return OperationResult.failure(
            state, CONFLICT, "This team has no replacements left."
        )

    players = state.players_by_id()
    archived = slot_contribution(team, outgoing_slot, players)
    incoming_slot = RosterSlot(player_id=request.new_player_id, is_vip=False)
    updated_team = replace(
        team,
        players=tuple(
            incoming_slot if slot.player_id == request.current_player_id else slot
            for slot in team.players
        ),
        replacements_left=team.replacements_left - 1,
        archived_points=(team.archived_points or 0) + archived,
        join_history={
            **team.join_history,
            request.new_player_id: player_total(players.get(request.new_player_id)),
        },
    )

    new_state = apply(state, actions.UpdateReplacementRequest(accepted))
    new_state = apply(new_state, actions.UpdateParticipantTeam(updated_team))
    logger.info(
        "Replacement %s accepted: archived %s points, %s replacements left",
        request.id, archived, updated_team.replacements_left,
    )
    return OperationResult(state=new_state, value=accepted)


def reject_replacement(
    state: LeagueState, request_id: str, reason: Optional[str] = None
) -> OperationResult:
    request, failure = _pending_request(state, request_id)
    if failure is not None:
        return failure

    rejected = replace(
        request,
        status=RequestStatus.REJECTED,
        reason=(reason or "").strip() or DEFAULT_REJECTION_REASON,
    )
    logger.info("Replacement %s rejected: %s", request.id, rejected.reason)
    return OperationResult(
        state=apply(state, actions.UpdateReplacementRequest(rejected)), value=rejected
    )


def pending_requests(state: LeagueState) -> list[ReplacementRequest]:
    return [r for r in state.replacement_requests if r.is_pending]


def decided_requests(state: LeagueState) -> list[ReplacementRequest]:
    return [r for r in state.replacement_requests if not r.is_pending]


def requests_for_team(
    state: LeagueState, participant_team_id: str, *, decided_only: bool = False
) -> list[ReplacementRequest]:
    return [
        r for r in state.replacement_requests
        if r.participant_team_id == participant_team_id
        and (not decided_only or not r.is_pending)
    ]
