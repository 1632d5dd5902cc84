"""SQLAlchemy Core table definitions for the cricket league data layer."""

from sqlalchemy import (
    Boolean,
    Column,
    Float,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
)

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Text, primary_key=True),
    Column("full_name", Text, nullable=False),
    Column("email", Text, nullable=False, unique=True),
    Column("password", Text, nullable=False),
    Column("role", Text, nullable=False),
    Column("fb_link", Text),
)

events = Table(
    "events",
    metadata,
    Column("id", Text, primary_key=True),
    Column("name", Text, nullable=False),
    Column("registration_deadline", Text, nullable=False),
    Column("tournament_end_time", Text, nullable=False),
    Column("description", Text),
    Column("duration", Text),
    Column("league_type", Text, nullable=False),
    Column("max_foreign_players", Integer),
    Column("total_matches", Integer, nullable=False),
    Column("max_matches_per_team", Integer, nullable=False),
    Column("max_players_from_single_team", Integer, nullable=False),
    Column("max_vip_players", Integer, nullable=False),
    Column("max_replacements", Integer, nullable=False),
)

cricket_teams = Table(
    "cricket_teams",
    metadata,
    Column("id", Text, primary_key=True),
    Column("name", Text, nullable=False),
    Column("event_id", Text, nullable=False),
    Index("idx_cricket_teams_event", "event_id"),
)

players = Table(
    "players",
    metadata,
    Column("id", Text, primary_key=True),
    Column("name", Text, nullable=False),
    Column("category", Text, nullable=False),
    Column("player_type", Text, nullable=False),
    Column("team_id", Text, nullable=False),
    Column("team_name", Text),
    Column("event_id", Text, nullable=False),
    Column("points_json", Text),
    Index("idx_players_event_team", "event_id", "team_id"),
)

participant_teams = Table(
    "participant_teams",
    metadata,
    Column("id", Text, primary_key=True),
    Column("participant_id", Text, nullable=False),
    Column("participant_name", Text),
    Column("team_name", Text, nullable=False),
    Column("event_id", Text, nullable=False),
    Column("players_json", Text),
    Column("replacements_left", Integer, nullable=False),
    Column("archived_points", Float, nullable=False),
    Column("join_history_json", Text),
    Index("idx_participant_teams_event", "event_id"),
    Index("idx_participant_teams_participant", "participant_id"),
)

# Denormalized per-team totals written alongside the snapshot.
team_standings = Table(
    "team_standings",
    metadata,
    Column("participant_team_id", Text, primary_key=True),
    Column("event_id", Text, nullable=False),
    Column("rank", Integer, nullable=False),
    Column("total_points", Float, nullable=False),
)

replacement_requests = Table(
    "replacement_requests",
    metadata,
    Column("id", Text, primary_key=True),
    Column("participant_team_id", Text, nullable=False),
    Column("participant_name", Text),
    Column("current_player_id", Text, nullable=False),
    Column("new_player_id", Text, nullable=False),
    Column("created_at", Text, nullable=False),
    Column("note", Text),
    Column("status", Text, nullable=False),
    Column("reason", Text),
    Index("idx_replacement_requests_team_status", "participant_team_id", "status"),
)

announcements = Table(
    "announcements",
    metadata,
    Column("id", Text, primary_key=True),
    Column("message", Text, nullable=False),
    Column("created_at", Text, nullable=False),
    Column("scope", Text, nullable=False),
)

chat_messages = Table(
    "chat_messages",
    metadata,
    Column("id", Text, primary_key=True),
    Column("sender_id", Text, nullable=False),
    Column("sender_name", Text),
    Column("receiver_id", Text, nullable=False),
    Column("message", Text, nullable=False),
    Column("created_at", Text, nullable=False),
    Column("is_read", Boolean, nullable=False),
    Index("idx_chat_messages_pair", "sender_id", "receiver_id"),
)

cnfl_history = Table(
    "cnfl_history",
    metadata,
    Column("id", Text, primary_key=True),
    Column("season_number", Text, nullable=False),
    Column("tournament_name", Text, nullable=False),
    Column("winner", Text),
    Column("runners_up", Text),
    Column("participant_count", Text),
)

site_settings = Table(
    "site_settings",
    metadata,
    Column("site_logo", Text),
    Column("contact_info", Text),
    Column("hero_title", Text),
    Column("hero_highlighted_text", Text),
    Column("hero_subtitle", Text),
    Column("hero_background_image", Text),
    Column("show_participant_teams", Boolean, nullable=False),
)
