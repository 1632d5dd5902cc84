"""Canonical schema models for the cricket league data layer."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    PARTICIPANT = "PARTICIPANT"


class PlayerCategory(str, Enum):
    BATSMAN = "Batsman"
    WICKETKEEPER = "Wicketkeeper"
    ALL_ROUNDER = "All-rounder"
    BOWLER = "Bowler"


class PlayerType(str, Enum):
    LOCAL = "Local"
    FOREIGN = "Foreign"


class LeagueType(str, Enum):
    DOMESTIC = "domestic"
    INTERNATIONAL = "international"


class RequestStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class AnnouncementScope(str, Enum):
    PUBLIC = "public"
    PARTICIPANT = "participant"


def _row_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    return value


class RowMixin:
    """Small helper to prepare values for sqlite inserts.

    Nested sequences and mappings are stored as JSON under a ``<name>_json``
    column.
    """

    table_name: ClassVar[str]

    def to_row(self) -> dict[str, Any]:
        row: dict[str, Any] = {}
        for key, value in asdict(self).items():
            if isinstance(value, (list, tuple, dict)):
                row[f"{key}_json"] = json.dumps(value, default=_row_value)
            else:
                row[key] = _row_value(value)
        return row


@dataclass(frozen=True)
class User(RowMixin):
    table_name: ClassVar[str] = "users"

    id: str
    full_name: str
    email: str
    password: str
    role: UserRole = UserRole.PARTICIPANT
    fb_link: Optional[str] = None


@dataclass(frozen=True)
class Event(RowMixin):
    table_name: ClassVar[str] = "events"

    id: str
    name: str
    registration_deadline: datetime
    tournament_end_time: datetime
    description: str = ""
    duration: str = ""
    league_type: LeagueType = LeagueType.INTERNATIONAL
    max_foreign_players: Optional[int] = None
    total_matches: int = 0
    max_matches_per_team: int = 0
    max_players_from_single_team: int = 0
    max_vip_players: int = 0
    max_replacements: int = 0

    @property
    def is_domestic(self) -> bool:
        return self.league_type == LeagueType.DOMESTIC


@dataclass(frozen=True)
class CricketTeam(RowMixin):
    table_name: ClassVar[str] = "cricket_teams"

    id: str
    name: str
    event_id: str


@dataclass(frozen=True)
class Player(RowMixin):
    table_name: ClassVar[str] = "players"

    id: str
    name: str
    category: PlayerCategory
    player_type: PlayerType
    team_id: str
    team_name: str
    event_id: str
    points: tuple[Optional[float], ...] = ()

    @property
    def is_bowl_capable(self) -> bool:
        return self.category in (PlayerCategory.BOWLER, PlayerCategory.ALL_ROUNDER)


@dataclass(frozen=True)
class RosterSlot:
    player_id: str
    is_vip: bool = False


@dataclass(frozen=True)
class ParticipantTeam(RowMixin):
    table_name: ClassVar[str] = "participant_teams"

    id: str
    participant_id: str
    participant_name: str
    team_name: str
    event_id: str
    players: tuple[RosterSlot, ...] = ()
    replacements_left: int = 0
    archived_points: float = 0
    join_history: dict[str, float] = field(default_factory=dict)

    def slot_for(self, player_id: str) -> Optional[RosterSlot]:
        for slot in self.players:
            if slot.player_id == player_id:
                return slot
        return None

    @property
    def player_ids(self) -> list[str]:
        return [slot.player_id for slot in self.players]


@dataclass(frozen=True)
class ReplacementRequest(RowMixin):
    table_name: ClassVar[str] = "replacement_requests"

    id: str
    participant_team_id: str
    participant_name: str
    current_player_id: str
    new_player_id: str
    created_at: datetime
    note: str = ""
    status: RequestStatus = RequestStatus.PENDING
    reason: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING


@dataclass(frozen=True)
class Announcement(RowMixin):
    table_name: ClassVar[str] = "announcements"

    id: str
    message: str
    created_at: datetime
    scope: AnnouncementScope = AnnouncementScope.PUBLIC


@dataclass(frozen=True)
class ChatMessage(RowMixin):
    table_name: ClassVar[str] = "chat_messages"

    id: str
    sender_id: str
    sender_name: str
    receiver_id: str
    message: str
    created_at: datetime
    is_read: bool = False


@dataclass(frozen=True)
class CnflHistory(RowMixin):
    table_name: ClassVar[str] = "cnfl_history"

    id: str
    season_number: str
    tournament_name: str
    winner: str
    runners_up: str
    participant_count: str


class SiteSettings(BaseModel):
    """Process-wide presentation settings, merged shallowly on update."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    table_name: ClassVar[str] = "site_settings"

    site_logo: Optional[str] = None
    contact_info: Optional[str] = None
    hero_title: Optional[str] = None
    hero_highlighted_text: Optional[str] = None
    hero_subtitle: Optional[str] = None
    hero_background_image: Optional[str] = None
    show_participant_teams: bool = False

    def merged(self, changes: SiteSettings) -> SiteSettings:
        """Return a copy with only the fields explicitly set on ``changes`` applied."""
        return self.model_copy(update=changes.model_dump(exclude_unset=True))

    def to_row(self) -> dict[str, Any]:
        return self.model_dump()
