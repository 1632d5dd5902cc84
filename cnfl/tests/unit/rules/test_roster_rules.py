from dataclasses import replace

import pytest

from cnfl.league_data.rules.roster import validate_roster
from cnfl.league_data.schema.models import LeagueType


def _swap(ids, outgoing, incoming):
    return [incoming if pid == outgoing else pid for pid in ids]


def test_valid_roster_passes_every_rule(event, roster_ids, players_map, make_slots):
    report = validate_roster(event, make_slots(roster_ids, vip={"wk1", "bat1"}), players_map)

    assert report.passed
    assert report.first_error is None
    assert [check.rule for check in report.checks] == [
        "player_count",
        "vip_count",
        "single_team",
        "wicketkeepers",
        "bowlers",
        "bowl_capable",
    ]
    assert report.get("single_team").display() == "6/6"


def test_player_count_must_be_exact(event, roster_ids, players_map, make_slots):
    report = validate_roster(event, make_slots(roster_ids[:10]), players_map)

    assert not report.passed
    assert report.get("player_count").display() == "10/11"
    assert report.first_error == "You must select exactly 11 players."


def test_duplicate_and_empty_slots_do_not_count(event, roster_ids, players_map, make_slots):
    selections = make_slots(roster_ids[:10] + [roster_ids[0]]) + [None]

    report = validate_roster(event, selections, players_map)

    assert report.get("player_count").count == 10


@pytest.mark.parametrize("vips,passed", [({"wk1", "bat1"}, True), ({"wk1", "bat1", "bat2"}, False)])
def test_vip_cap_boundary(event, roster_ids, players_map, make_slots, vips, passed):
    report = validate_roster(event, make_slots(roster_ids, vip=vips), players_map)

    assert report.get("vip_count").passed is passed
    if not passed:
        assert report.first_error == "You can select a maximum of 2 VIP players."


def test_single_team_cap_plus_one_fails(event, roster_ids, players_map, make_slots):
    ids = _swap(roster_ids, "bat4", "wk2")

    report = validate_roster(event, make_slots(ids), players_map)

    assert report.failures == [report.get("single_team")]
    assert report.get("single_team").display() == "7/6"


def test_wicketkeeper_required(event, roster_ids, players_map, make_slots):
    report = validate_roster(event, make_slots(_swap(roster_ids, "wk1", "bat6")), players_map)

    assert [check.rule for check in report.failures] == ["wicketkeepers"]
    assert report.first_error == "You must have at least one Wicketkeeper."


def test_two_dedicated_bowlers_required(event, roster_ids, players_map, make_slots):
    report = validate_roster(event, make_slots(_swap(roster_ids, "bowl2", "ar4")), players_map)

    assert [check.rule for check in report.failures] == ["bowlers"]
    assert report.get("bowl_capable").display() == "5/5"


def test_five_bowl_capable_required(event, roster_ids, players_map, make_slots):
    report = validate_roster(event, make_slots(_swap(roster_ids, "ar3", "bat6")), players_map)

    assert [check.rule for check in report.failures] == ["bowl_capable"]
    assert report.get("bowl_capable").display() == "4/5"


@pytest.mark.parametrize("cap,passed", [(1, True), (0, False)])
def test_foreign_cap_only_on_domestic_events(
    event, roster_ids, players_map, make_slots, cap, passed
):
    ids = _swap(roster_ids, "ar3", "ar4")
    domestic = replace(event, league_type=LeagueType.DOMESTIC, max_foreign_players=cap)

    international_report = validate_roster(event, make_slots(ids), players_map)
    domestic_report = validate_roster(domestic, make_slots(ids), players_map)

    assert international_report.get("foreign_count") is None
    assert domestic_report.get("foreign_count").passed is passed


def test_domestic_without_foreign_cap_is_unlimited(event, roster_ids, players_map, make_slots):
    domestic = replace(event, league_type=LeagueType.DOMESTIC, max_foreign_players=None)

    report = validate_roster(domestic, make_slots(_swap(roster_ids, "ar3", "ar4")), players_map)

    assert report.get("foreign_count").passed
    assert report.get("foreign_count").display() == "1/-"


def test_first_error_follows_check_order(event, roster_ids, players_map, make_slots):
    ids = [pid for pid in roster_ids if pid != "wk1"]

    report = validate_roster(event, make_slots(ids), players_map)

    assert {"player_count", "wicketkeepers"} <= {check.rule for check in report.failures}
    assert report.first_error == "You must select exactly 11 players."
