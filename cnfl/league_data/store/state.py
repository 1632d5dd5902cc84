"""Immutable league snapshot and its bootstrap seed."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, TypeVar

from ..config import LeagueConfig
from ..schema.models import (
    Announcement,
    ChatMessage,
    CnflHistory,
    CricketTeam,
    Event,
    ParticipantTeam,
    Player,
    ReplacementRequest,
    SiteSettings,
    User,
    UserRole,
)

BOOTSTRAP_ADMIN_ID = "admin-1"

DEFAULT_SITE_SETTINGS = SiteSettings(
    site_logo=None,
    contact_info="For any queries, please contact the admin.",
    hero_title="Welcome to",
    hero_highlighted_text="Cricket Nagar Fantasy League",
    hero_subtitle=(
        "Build your dream team, compete with friends, and experience the thrill "
        "of fantasy cricket.\nPlay for fun, not for money!"
    ),
    hero_background_image=None,
    show_participant_teams=False,
)

T = TypeVar("T")


def _find(items: Iterable[T], entity_id: str) -> Optional[T]:
    for item in items:
        if getattr(item, "id", None) == entity_id:
            return item
    return None


@dataclass(frozen=True)
class LeagueState:
    users: tuple[User, ...] = ()
    events: tuple[Event, ...] = ()
    teams: tuple[CricketTeam, ...] = ()
    players: tuple[Player, ...] = ()
    participant_teams: tuple[ParticipantTeam, ...] = ()
    replacement_requests: tuple[ReplacementRequest, ...] = ()
    announcements: tuple[Announcement, ...] = ()
    chat_messages: tuple[ChatMessage, ...] = ()
    cnfl_history: tuple[CnflHistory, ...] = ()
    site_settings: SiteSettings = field(default_factory=SiteSettings)

    def get_user(self, user_id: str) -> Optional[User]:
        return _find(self.users, user_id)

    def get_event(self, event_id: str) -> Optional[Event]:
        return _find(self.events, event_id)

    def get_team(self, team_id: str) -> Optional[CricketTeam]:
        return _find(self.teams, team_id)

    def get_player(self, player_id: str) -> Optional[Player]:
        return _find(self.players, player_id)

    def get_participant_team(self, participant_team_id: str) -> Optional[ParticipantTeam]:
        return _find(self.participant_teams, participant_team_id)

    def get_replacement_request(self, request_id: str) -> Optional[ReplacementRequest]:
        return _find(self.replacement_requests, request_id)

    def players_by_id(self) -> dict[str, Player]:
        return {player.id: player for player in self.players}

    def players_for_event(self, event_id: str) -> list[Player]:
        return [player for player in self.players if player.event_id == event_id]

    def teams_for_event(self, event_id: str) -> list[CricketTeam]:
        return [team for team in self.teams if team.event_id == event_id]

    def participant_teams_for_event(self, event_id: str) -> list[ParticipantTeam]:
        return [pt for pt in self.participant_teams if pt.event_id == event_id]


def bootstrap_state(config: Optional[LeagueConfig] = None) -> LeagueState:
    """Fresh store holding only the bootstrap admin and default site settings."""
    config = config or LeagueConfig()
    admin = User(
        id=BOOTSTRAP_ADMIN_ID,
        full_name=config.admin_name,
        email=config.admin_email,
        password=config.admin_password,
        role=UserRole.ADMIN,
    )
    return LeagueState(users=(admin,), site_settings=DEFAULT_SITE_SETTINGS)
