from dataclasses import replace
from datetime import datetime, timezone

import pytest

from cnfl.league_data.errors import CONFLICT, INVALID, NOT_FOUND
from cnfl.league_data.replacements import (
    DEFAULT_REJECTION_REASON,
    accept_replacement,
    decided_requests,
    pending_requests,
    reject_replacement,
    requests_for_team,
    submit_replacement,
)
from cnfl.league_data.schema.models import ReplacementRequest, RequestStatus
from cnfl.league_data.scoring import team_total
from cnfl.league_data.store import actions
from cnfl.league_data.store.reducer import apply


def _submit(state, now, outgoing="bowl1", incoming="bowl3", request_id="req-1"):
    return submit_replacement(
        state,
        request_id=request_id,
        participant_team_id="pt-1",
        outgoing_id=outgoing,
        incoming_id=incoming,
        note="injury",
        now=now,
    )


def test_submit_creates_pending_request_newest_first(league_state, now):
    first = _submit(league_state, now)
    second = _submit(first.state, now, outgoing="bat1", incoming="bat6", request_id="req-2")

    assert second.ok
    assert [r.id for r in second.state.replacement_requests] == ["req-2", "req-1"]
    assert all(r.status == RequestStatus.PENDING for r in second.state.replacement_requests)
    assert [r.id for r in pending_requests(second.state)] == ["req-2", "req-1"]


def test_accept_swaps_player_and_archives_points(league_state, now):
    state = _submit(league_state, now).state

    result = accept_replacement(state, "req-1")

    assert result.ok
    team = result.state.get_participant_team("pt-1")
    assert team.replacements_left == 1
    assert team.archived_points == 40
    assert team.players[4].player_id == "bowl3"
    assert team.players[4].is_vip is False
    assert team.join_history["bowl3"] == 12
    assert team_total(team, result.state.players_by_id()) == 62
    assert result.state.get_replacement_request("req-1").status == RequestStatus.ACCEPTED
    assert decided_requests(result.state) == [result.value]


def test_vip_points_are_not_doubled_twice(league_state, now):
    state = accept_replacement(_submit(league_state, now).state, "req-1").state
    state = apply(state, actions.UpdatePlayerPoints("bowl3", (12, 6)))
    state = _submit(state, now, outgoing="bowl3", incoming="bowl1", request_id="req-2").state

    result = accept_replacement(state, "req-2")

    team = result.state.get_participant_team("pt-1")
    assert team.archived_points == 46
    assert team.join_history["bowl1"] == 20
    assert team.replacements_left == 0


def test_deciding_twice_is_a_conflict(league_state, now):
    accepted = accept_replacement(_submit(league_state, now).state, "req-1").state

    again = reject_replacement(accepted, "req-1", "too late")

    assert not again.ok
    assert again.error.code == CONFLICT
    assert again.state is accepted


def test_reject_uses_default_reason(league_state, now):
    state = _submit(league_state, now).state

    result = reject_replacement(state, "req-1", "   ")

    assert result.value.status == RequestStatus.REJECTED
    assert result.value.reason == DEFAULT_REJECTION_REASON
    assert result.state.get_participant_team("pt-1") == league_state.get_participant_team("pt-1")


def test_unknown_request_is_not_found(league_state):
    assert accept_replacement(league_state, "nope").error.code == NOT_FOUND


def test_accept_conflicts_when_roster_moved_on(league_state, now):
    state = _submit(league_state, now).state
    state = _submit(state, now, outgoing="bowl1", incoming="bowl3", request_id="req-2").state
    state = accept_replacement(state, "req-1").state

    result = accept_replacement(state, "req-2")

    assert result.error.code == CONFLICT
    assert result.state.get_replacement_request("req-2").is_pending


def test_accept_for_missing_team_only_marks_request(league_state, now):
    orphan = ReplacementRequest(
        id="req-x",
        participant_team_id="pt-gone",
        participant_name="Ghost",
        current_player_id="bat1",
        new_player_id="bat6",
        created_at=now,
    )
    state = apply(league_state, actions.AddReplacementRequest(orphan))

    result = accept_replacement(state, "req-x")

    assert result.ok
    assert result.value.status == RequestStatus.ACCEPTED
    assert result.state.participant_teams == league_state.participant_teams


@pytest.mark.parametrize(
    "outgoing,incoming,message",
    [
        ("bat6", "bat1", "The player to replace is not in your team."),
        ("bat1", "bat2", "The new player is already in your team."),
        ("bat1", "nobody", "The new player is not part of this event."),
        ("wk1", "bat6", "Invalid request: Team must have at least one Wicketkeeper."),
    ],
)
def test_submit_rejects_invalid_swaps(league_state, now, outgoing, incoming, message):
    result = _submit(league_state, now, outgoing=outgoing, incoming=incoming)

    assert result.error.code == INVALID
    assert result.error.message == message
    assert result.state is league_state


def test_submit_requires_running_event(league_state):
    before_start = datetime(2026, 1, 1, tzinfo=timezone.utc)

    result = _submit(league_state, before_start)

    assert result.error.message == "Replacements are only allowed while the tournament is running."


def test_submit_requires_replacements_left(league_state, participant_team, now):
    spent = replace(participant_team, replacements_left=0)
    state = apply(league_state, actions.UpdateParticipantTeam(spent))

    assert _submit(state, now).error.message == "You have no replacements left."


def test_requests_for_team_filters_decided(league_state, now):
    state = _submit(league_state, now).state
    state = _submit(state, now, outgoing="bat1", incoming="bat6", request_id="req-2").state
    state = reject_replacement(state, "req-2").state

    assert [r.id for r in requests_for_team(state, "pt-1")] == ["req-2", "req-1"]
    assert [r.id for r in requests_for_team(state, "pt-1", decided_only=True)] == ["req-2"]
