"""Schema models and table definitions."""

from .models import (
    Announcement,
    AnnouncementScope,
    ChatMessage,
    CnflHistory,
    CricketTeam,
    Event,
    LeagueType,
    ParticipantTeam,
    Player,
    PlayerCategory,
    PlayerType,
    ReplacementRequest,
    RequestStatus,
    RosterSlot,
    SiteSettings,
    User,
    UserRole,
)
from .tables import metadata

__all__ = [
    "Announcement",
    "AnnouncementScope",
    "ChatMessage",
    "CnflHistory",
    "CricketTeam",
    "Event",
    "LeagueType",
    "ParticipantTeam",
    "Player",
    "PlayerCategory",
    "PlayerType",
    "ReplacementRequest",
    "RequestStatus",
    "RosterSlot",
    "SiteSettings",
    "User",
    "UserRole",
    "metadata",
]
