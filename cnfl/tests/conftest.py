import itertools
from datetime import datetime, timezone

import pytest
from sqlalchemy import create_engine

from cnfl.league_data import CricketLeague, LeagueConfig
from cnfl.league_data.schema.models import (
    CricketTeam,
    Event,
    ParticipantTeam,
    Player,
    PlayerCategory,
    PlayerType,
    RosterSlot,
    User,
    UserRole,
)
from cnfl.league_data.store.state import DEFAULT_SITE_SETTINGS, LeagueState

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

BAT = PlayerCategory.BATSMAN
WK = PlayerCategory.WICKETKEEPER
AR = PlayerCategory.ALL_ROUNDER
BOWL = PlayerCategory.BOWLER


def make_player(player_id, category, team, player_type=PlayerType.LOCAL, points=()):
    return Player(
        id=player_id,
        name=player_id.upper(),
        category=category,
        player_type=player_type,
        team_id=team.id,
        team_name=team.name,
        event_id=team.event_id,
        points=tuple(points),
    )


def slots(player_ids, vip=()):
    return [RosterSlot(player_id=pid, is_vip=pid in vip) for pid in player_ids]


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def event() -> Event:
    return Event(
        id="event-1",
        name="Premier Cup",
        registration_deadline=datetime(2026, 2, 1, tzinfo=timezone.utc),
        tournament_end_time=datetime(2026, 4, 1, tzinfo=timezone.utc),
        total_matches=10,
        max_matches_per_team=5,
        max_players_from_single_team=6,
        max_vip_players=2,
        max_replacements=2,
    )


@pytest.fixture
def teams(event):
    return {
        "a": CricketTeam(id="team-a", name="Lions", event_id=event.id),
        "b": CricketTeam(id="team-b", name="Tigers", event_id=event.id),
    }


@pytest.fixture
def roster_players(teams):
    """A valid XI: 1 WK, 2 bowlers, 3 all-rounders, 5 batsmen, 6/5 split."""
    a, b = teams["a"], teams["b"]
    return [
        make_player("wk1", WK, a, points=(10,)),
        make_player("bat1", BAT, a, points=(5, None, 7)),
        make_player("bat2", BAT, a),
        make_player("bat3", BAT, a),
        make_player("bowl1", BOWL, a, points=(20,)),
        make_player("ar1", AR, a),
        make_player("bat4", BAT, b),
        make_player("bat5", BAT, b),
        make_player("bowl2", BOWL, b),
        make_player("ar2", AR, b),
        make_player("ar3", AR, b),
    ]


@pytest.fixture
def bench_players(teams):
    a, b = teams["a"], teams["b"]
    return [
        make_player("bat6", BAT, b, points=(4, 4)),
        make_player("bowl3", BOWL, b, points=(12,)),
        make_player("wk2", WK, a),
        make_player("ar4", AR, b, player_type=PlayerType.FOREIGN),
    ]


@pytest.fixture
def players_map(roster_players, bench_players):
    return {p.id: p for p in roster_players + bench_players}


@pytest.fixture
def roster_ids(roster_players):
    return [p.id for p in roster_players]


@pytest.fixture
def participant_team(event, roster_ids) -> ParticipantTeam:
    return ParticipantTeam(
        id="pt-1",
        participant_id="user-1",
        participant_name="Asha",
        team_name="Night Owls",
        event_id=event.id,
        players=tuple(slots(roster_ids, vip={"bowl1"})),
        replacements_left=2,
    )


@pytest.fixture
def admin() -> User:
    return User(
        id="admin-1",
        full_name="Admin User",
        email="admin@cnfl.com",
        password="password",
        role=UserRole.ADMIN,
    )


@pytest.fixture
def participant() -> User:
    return User(
        id="user-1", full_name="Asha", email="asha@example.com", password="secret"
    )


@pytest.fixture
def league_state(admin, participant, event, teams, players_map, participant_team):
    return LeagueState(
        users=(admin, participant),
        events=(event,),
        teams=tuple(teams.values()),
        players=tuple(players_map.values()),
        participant_teams=(participant_team,),
        site_settings=DEFAULT_SITE_SETTINGS,
    )


@pytest.fixture
def league_config() -> LeagueConfig:
    return LeagueConfig()


@pytest.fixture
def sequential_ids():
    counter = itertools.count(1)
    return lambda prefix: f"{prefix}-new-{next(counter)}"


@pytest.fixture
def league(league_state, league_config, now, sequential_ids) -> CricketLeague:
    return CricketLeague(
        league_state, config=league_config, clock=lambda: now, id_factory=sequential_ids
    )


@pytest.fixture
def sa_conn():
    engine = create_engine("sqlite://")
    with engine.begin() as conn:
        yield conn
    engine.dispose()


@pytest.fixture
def player_factory():
    return make_player


@pytest.fixture
def make_slots():
    return slots
