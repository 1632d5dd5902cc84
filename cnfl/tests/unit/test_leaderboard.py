from dataclasses import replace

from cnfl.league_data.leaderboard import rank_event, rank_teams, team_standing


def test_ranks_are_dense_and_descending(participant_team, players_map):
    low = replace(participant_team, id="pt-2", archived_points=0, players=())
    high = replace(participant_team, id="pt-3", archived_points=500)

    board = rank_teams([low, participant_team, high], players_map)

    assert [entry.participant_team_id for entry in board] == ["pt-3", "pt-1", "pt-2"]
    assert [entry.rank for entry in board] == [1, 2, 3]
    assert [entry.total_points for entry in board] == [562, 62, 0]


def test_ties_are_broken_by_team_id(participant_team, players_map):
    twin_b = replace(participant_team, id="pt-b")
    twin_a = replace(participant_team, id="pt-a")

    board = rank_teams([twin_b, twin_a], players_map)

    assert [(entry.participant_team_id, entry.rank) for entry in board] == [
        ("pt-a", 1),
        ("pt-b", 2),
    ]


def test_rank_event_ignores_other_events_and_missing_events(league_state, participant_team):
    other = replace(participant_team, id="pt-9", event_id="event-2")
    state = replace(league_state, participant_teams=league_state.participant_teams + (other,))

    assert [entry.participant_team_id for entry in rank_event(state, "event-1")] == ["pt-1"]
    assert rank_event(state, "event-2") == []


def test_team_standing(league_state):
    standing = team_standing(league_state, "pt-1")

    assert standing.rank == 1
    assert standing.to_dict()["team_name"] == "Night Owls"
    assert team_standing(league_state, "missing") is None
