from cnfl.league_data.normalize.players import normalize_bulk_players, parse_player_line
from cnfl.league_data.schema.models import CricketTeam, PlayerCategory, PlayerType

TEAMS = [
    CricketTeam(id="t1", name="TeamX", event_id="e1"),
    CricketTeam(id="t2", name="TeamY", event_id="other"),
]


def _ids(line_number):
    return f"p{line_number}"


def test_bad_line_is_reported_and_skipped():
    result = normalize_bulk_players(
        "A,Batsman,Local,TeamX\nB,BadCat,Local,TeamX", "e1", TEAMS, id_factory=_ids
    )

    assert result.success_count == 1
    assert result.players[0].name == "A"
    assert result.players[0].team_name == "TeamX"
    assert result.error_count == 1
    assert result.errors[0].startswith("Line 2:")
    assert "BadCat" in result.errors[0]


def test_matching_ignores_case_and_whitespace():
    result = normalize_bulk_players(
        "  Ravi , all-rounder , FOREIGN , teamx  ", "e1", TEAMS, id_factory=_ids
    )

    player = result.players[0]
    assert player.name == "Ravi"
    assert player.category is PlayerCategory.ALL_ROUNDER
    assert player.player_type is PlayerType.FOREIGN
    assert player.team_id == "t1"
    assert player.points == ()


def test_blank_lines_are_not_numbered():
    result = normalize_bulk_players(
        "\nA,Batsman,Local,TeamX\n\n  \nB,Bowler,Local,Nowhere\n", "e1", TEAMS, id_factory=_ids
    )

    assert [p.id for p in result.players] == ["p1"]
    assert result.errors == ('Line 2: Team "Nowhere" not found in this event.',)


def test_teams_from_other_events_do_not_resolve():
    fields, reason = parse_player_line("A,Batsman,Local,TeamY", {"teamx": TEAMS[0]})

    assert fields is None
    assert reason == 'Team "TeamY" not found in this event.'


def test_wrong_field_count():
    fields, reason = parse_player_line("A,Batsman,Local", {"teamx": TEAMS[0]})

    assert fields is None
    assert reason.startswith("Invalid format.")


def test_summary_lists_errors():
    result = normalize_bulk_players("X,Batsman,Alien,TeamX", "e1", TEAMS, id_factory=_ids)

    summary = result.summary()
    assert "Success: 0" in summary
    assert "Failed: 1" in summary
    assert "Line 1: Invalid type" in summary
