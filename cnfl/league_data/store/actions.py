"""Closed action vocabulary accepted by the league store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

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
)


@dataclass(frozen=True)
class CreateEvent:
    event: Event


@dataclass(frozen=True)
class UpdateEvent:
    event: Event


@dataclass(frozen=True)
class DeleteEvent:
    event_id: str


@dataclass(frozen=True)
class AddTeam:
    team: CricketTeam


@dataclass(frozen=True)
class UpdateTeam:
    team: CricketTeam


@dataclass(frozen=True)
class DeleteTeam:
    team_id: str


@dataclass(frozen=True)
class AddPlayer:
    player: Player


@dataclass(frozen=True)
class AddBulkPlayers:
    players: tuple[Player, ...]


@dataclass(frozen=True)
class UpdatePlayer:
    player: Player


@dataclass(frozen=True)
class DeletePlayer:
    player_id: str


@dataclass(frozen=True)
class UpdatePlayerPoints:
    player_id: str
    points: tuple[Optional[float], ...]


@dataclass(frozen=True)
class AddReplacementRequest:
    request: ReplacementRequest


@dataclass(frozen=True)
class UpdateReplacementRequest:
    request: ReplacementRequest


@dataclass(frozen=True)
class AddAnnouncement:
    announcement: Announcement


@dataclass(frozen=True)
class DeleteAnnouncement:
    announcement_id: str


@dataclass(frozen=True)
class AddChatMessage:
    message: ChatMessage


@dataclass(frozen=True)
class UpdateSiteSettings:
    settings: SiteSettings


@dataclass(frozen=True)
class AddHistory:
    entry: CnflHistory


@dataclass(frozen=True)
class UpdateHistory:
    entry: CnflHistory


@dataclass(frozen=True)
class DeleteHistory:
    entry_id: str


@dataclass(frozen=True)
class AddParticipantTeam:
    team: ParticipantTeam


@dataclass(frozen=True)
class UpdateParticipantTeam:
    team: ParticipantTeam


@dataclass(frozen=True)
class AddUser:
    user: User


@dataclass(frozen=True)
class UpdateUser:
    user: User


Action = Union[
    CreateEvent,
    UpdateEvent,
    DeleteEvent,
    AddTeam,
    UpdateTeam,
    DeleteTeam,
    AddPlayer,
    AddBulkPlayers,
    UpdatePlayer,
    DeletePlayer,
    UpdatePlayerPoints,
    AddReplacementRequest,
    UpdateReplacementRequest,
    AddAnnouncement,
    DeleteAnnouncement,
    AddChatMessage,
    UpdateSiteSettings,
    AddHistory,
    UpdateHistory,
    DeleteHistory,
    AddParticipantTeam,
    UpdateParticipantTeam,
    AddUser,
    UpdateUser,
]
