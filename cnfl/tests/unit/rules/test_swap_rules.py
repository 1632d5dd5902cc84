from dataclasses import replace

from cnfl.league_data.rules.roster import validate_swap
from cnfl.league_data.schema.models import LeagueType


def test_like_for_like_swap_passes(event, participant_team, players_map):
    report = validate_swap(event, participant_team, "bat1", "bat6", players_map)

    assert report.passed


def test_swap_cannot_remove_last_wicketkeeper(event, participant_team, players_map):
    report = validate_swap(event, participant_team, "wk1", "bat6", players_map)

    assert report.first_error == "Invalid request: Team must have at least one Wicketkeeper."


def test_swap_checks_bowling_before_team_cap(event, participant_team, players_map):
    report = validate_swap(event, participant_team, "bowl1", "bat6", players_map)

    assert [check.rule for check in report.failures] == ["bowlers", "bowl_capable"]
    assert report.first_error == "Invalid request: Team must have at least two dedicated Bowlers."


def test_swap_over_single_team_cap_names_team(event, participant_team, players_map):
    report = validate_swap(event, participant_team, "bat4", "wk2", players_map)

    assert report.first_error == (
        "Invalid request: This would result in more than 6 players from Lions."
    )


def test_swap_foreign_cap_on_domestic_event(event, participant_team, players_map):
    domestic = replace(event, league_type=LeagueType.DOMESTIC, max_foreign_players=0)

    report = validate_swap(domestic, participant_team, "ar3", "ar4", players_map)

    assert report.first_error == (
        "Invalid request: This would result in more than 0 foreign players in your team."
    )
