from dataclasses import replace
from datetime import datetime, timezone

from cnfl.league_data.errors import CONFLICT, INVALID, NOT_FOUND
from cnfl.league_data.registration import register_team, validate_event

BEFORE_DEADLINE = datetime(2026, 1, 15, tzinfo=timezone.utc)


def _register(state, selections, user_id="user-2", now=BEFORE_DEADLINE, name="Eagles"):
    return register_team(
        state,
        team_id="pt-new",
        user_id=user_id,
        event_id="event-1",
        team_name=name,
        selections=selections,
        now=now,
    )


def _with_second_user(league_state, participant):
    return replace(
        league_state,
        users=league_state.users + (replace(participant, id="user-2", email="b@example.com"),),
    )


def test_register_team_sets_initial_counters(league_state, participant, roster_ids, make_slots, event):
    state = _with_second_user(league_state, participant)

    result = _register(state, make_slots(roster_ids, vip={"wk1"}))

    assert result.ok
    team = result.state.get_participant_team("pt-new")
    assert team.replacements_left == event.max_replacements
    assert team.archived_points == 0
    assert team.join_history == {}
    assert team.slot_for("wk1").is_vip


def test_register_team_reports_first_failing_rule(league_state, participant, roster_ids, make_slots):
    state = _with_second_user(league_state, participant)

    result = _register(state, make_slots(roster_ids[:10]))

    assert result.error.code == INVALID
    assert result.error.message == "You must select exactly 11 players."


def test_one_team_per_participant(league_state, roster_ids, make_slots):
    result = _register(league_state, make_slots(roster_ids), user_id="user-1")

    assert result.error.code == CONFLICT


def test_registration_closed_after_deadline(league_state, participant, roster_ids, make_slots, now):
    state = _with_second_user(league_state, participant)

    result = _register(state, make_slots(roster_ids), now=now)

    assert result.error.message == "Registration for this event has closed."


def test_unknown_user_and_blank_name(league_state, roster_ids, make_slots):
    assert _register(league_state, make_slots(roster_ids), user_id="ghost").error.code == NOT_FOUND
    blank = _register(league_state, make_slots(roster_ids), user_id="user-1", name="  ")
    assert blank.error.code == INVALID
    assert blank.error.message == "Team name is required."


def test_validate_event(event):
    assert validate_event(event) is None
    assert validate_event(replace(event, name=" ")) == "Event name is required."
    assert validate_event(
        replace(event, tournament_end_time=event.registration_deadline)
    ) == "Registration deadline must be before the tournament end time."
    assert validate_event(replace(event, max_vip_players=-1)) == "Event limits cannot be negative."
