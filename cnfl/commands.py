"""Command definitions for the cricket league data layer.

Each command maps to a method on ``CricketLeague`` and is described in the
JSON-schema function-calling format, so the same table drives the interactive
CLI shell and any external caller that wants a machine-readable surface.

Usage:
    from cnfl.commands import LEAGUE_COMMANDS, create_command_handlers

    league = CricketLeague.from_snapshot("league.json")
    handlers = create_command_handlers(league)
    result = handlers["leaderboard"](event_id="event-1")
"""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional

from pydantic import BaseModel

from cnfl.league_data.cricket_league import parse_selections
from cnfl.league_data.errors import OperationResult

if TYPE_CHECKING:
    from cnfl.league_data import CricketLeague


def _string(description: str) -> dict[str, str]:
    return {"type": "string", "description": description}


def _integer(description: str) -> dict[str, str]:
    return {"type": "integer", "description": description}


def _number(description: str) -> dict[str, str]:
    return {"type": "number", "description": description}


def _command(
    name: str,
    description: str,
    properties: Optional[dict[str, dict[str, str]]] = None,
    required: Optional[list[str]] = None,
) -> dict[str, Any]:
    return {
        "type": "function",
        "function": {
            "name": name,
            "description": description,
            "parameters": {
                "type": "object",
                "properties": properties or {},
                "required": required or [],
            },
        },
    }


_SELECTIONS = _string(
    "Comma-separated player ids; suffix an id with '*' to make that player a VIP "
    "(e.g. 'p1*,p2,p3')."
)

LEAGUE_COMMANDS = [
    # Accounts
    _command(
        "login",
        "Check credentials and return the matching user. Email matching ignores case.",
        {"email": _string("Account email."), "password": _string("Account password.")},
        ["email", "password"],
    ),
    _command(
        "register_user",
        "Create a participant account. Fails if the email is already registered.",
        {
            "full_name": _string("Display name."),
            "email": _string("Account email."),
            "password": _string("Account password."),
            "fb_link": _string("Optional profile link."),
        },
        ["full_name", "email", "password"],
    ),
    _command(
        "update_password",
        "Change a user's password.",
        {"user_id": _string("User id."), "password": _string("New password.")},
        ["user_id", "password"],
    ),
    _command(
        "change_role",
        "Change a user's role. Only admins may do this and they cannot demote themselves.",
        {
            "actor_id": _string("Id of the admin performing the change."),
            "user_id": _string("User whose role changes."),
            "role": _string("ADMIN or PARTICIPANT."),
        },
        ["actor_id", "user_id", "role"],
    ),
    # Events
    _command(
        "create_event",
        "Create a tournament. Dates are ISO-8601; naive values are read as UTC.",
        {
            "name": _string("Event name."),
            "registration_deadline": _string("Registration closes and the tournament starts."),
            "tournament_end_time": _string("Tournament end."),
            "description": _string("Free-form description."),
            "duration": _string("Free-form duration label."),
            "league_type": _string("'domestic' or 'international'."),
            "max_foreign_players": _integer("Foreign player cap for domestic leagues."),
            "total_matches": _integer("Number of matches in the tournament."),
            "max_matches_per_team": _integer("Matches each real team plays."),
            "max_players_from_single_team": _integer("Per-real-team roster cap."),
            "max_vip_players": _integer("Maximum VIP slots per roster."),
            "max_replacements": _integer("Replacements granted to each fantasy team."),
        },
        ["name", "registration_deadline", "tournament_end_time"],
    ),
    _command(
        "delete_event",
        "Delete an event along with its real-life teams and players.",
        {"event_id": _string("Event id.")},
        ["event_id"],
    ),
    _command(
        "event_status",
        "Classify an event as UPCOMING, RUNNING or FINISHED at the current time.",
        {"event_id": _string("Event id.")},
        ["event_id"],
    ),
    # Real-life teams and players
    _command(
        "add_team",
        "Add a real-life team to an event.",
        {"event_id": _string("Event id."), "name": _string("Team name.")},
        ["event_id", "name"],
    ),
    _command(
        "update_team",
        "Rename a real-life team. Its players pick up the new name.",
        {"team_id": _string("Team id."), "name": _string("New team name.")},
        ["team_id", "name"],
    ),
    _command(
        "delete_team",
        "Delete a real-life team.",
        {"team_id": _string("Team id.")},
        ["team_id"],
    ),
    _command(
        "add_player",
        "Add a player to a real-life team of an event.",
        {
            "event_id": _string("Event id."),
            "team_id": _string("Team id within the event."),
            "name": _string("Player name."),
            "category": _string("Batsman, Wicketkeeper, All-rounder or Bowler."),
            "player_type": _string("Local or Foreign. Default Local."),
        },
        ["event_id", "team_id", "name", "category"],
    ),
    _command(
        "delete_player",
        "Delete a player.",
        {"player_id": _string("Player id.")},
        ["player_id"],
    ),
    _command(
        "import_players",
        "Bulk import players from lines of 'Name, Category, Type, Team Name'. "
        "Returns the created players and one error per rejected line.",
        {"event_id": _string("Event id."), "raw_text": _string("Newline-separated rows.")},
        ["event_id", "raw_text"],
    ),
    _command(
        "set_match_points",
        "Record a player's fantasy points for one match (zero-based index).",
        {
            "player_id": _string("Player id."),
            "match_index": _integer("Zero-based match index."),
            "points": _number("Points scored in that match."),
        },
        ["player_id", "match_index", "points"],
    ),
    # Fantasy teams
    _command(
        "check_roster",
        "Run every roster rule for a draft XI and report each rule's count and bound.",
        {"event_id": _string("Event id."), "selections": _SELECTIONS},
        ["event_id", "selections"],
    ),
    _command(
        "register_team",
        "Register a participant's XI for an event while registration is open.",
        {
            "user_id": _string("Participant user id."),
            "event_id": _string("Event id."),
            "team_name": _string("Fantasy team name."),
            "selections": _SELECTIONS,
        },
        ["user_id", "event_id", "team_name", "selections"],
    ),
    _command(
        "team_total",
        "Total points of a fantasy team: archived points plus current slot contributions.",
        {"participant_team_id": _string("Fantasy team id.")},
        ["participant_team_id"],
    ),
    _command(
        "team_breakdown",
        "Per-player scoring detail of a fantasy team in roster order.",
        {"participant_team_id": _string("Fantasy team id.")},
        ["participant_team_id"],
    ),
    _command(
        "team_standing",
        "A fantasy team's leaderboard row within its event.",
        {"participant_team_id": _string("Fantasy team id.")},
        ["participant_team_id"],
    ),
    _command(
        "my_xi",
        "A fantasy team with its rank, total and per-player breakdown.",
        {"participant_team_id": _string("Fantasy team id.")},
        ["participant_team_id"],
    ),
    _command(
        "leaderboard",
        "Rank an event's fantasy teams by total points; ties go to the lower team id.",
        {"event_id": _string("Event id.")},
        ["event_id"],
    ),
    _command(
        "participant_teams",
        "List the fantasy teams registered for an event.",
        {"event_id": _string("Event id.")},
        ["event_id"],
    ),
    _command(
        "participant_details",
        "Admin view of an event's fantasy teams with rosters and totals.",
        {"event_id": _string("Event id.")},
        ["event_id"],
    ),
    # Replacements
    _command(
        "submit_replacement",
        "Ask to swap one rostered player for another while the tournament is running.",
        {
            "participant_team_id": _string("Fantasy team id."),
            "outgoing_id": _string("Player leaving the XI."),
            "incoming_id": _string("Player joining the XI."),
            "note": _string("Optional note for the admin."),
        },
        ["participant_team_id", "outgoing_id", "incoming_id"],
    ),
    _command(
        "accept_replacement",
        "Accept a pending replacement: archive the outgoing player's points and swap.",
        {"request_id": _string("Replacement request id.")},
        ["request_id"],
    ),
    _command(
        "reject_replacement",
        "Reject a pending replacement with an optional reason.",
        {"request_id": _string("Replacement request id."), "reason": _string("Reason shown to the participant.")},
        ["request_id"],
    ),
    _command("pending_requests", "List replacement requests awaiting a decision, newest first."),
    _command(
        "team_requests",
        "List every replacement request of one fantasy team, newest first.",
        {"participant_team_id": _string("Fantasy team id.")},
        ["participant_team_id"],
    ),
    # Dashboard and home
    _command(
        "dashboard",
        "Resolve which event a participant's dashboard shows and which menu entries are enabled.",
        {"user_id": _string("Participant user id.")},
        ["user_id"],
    ),
    _command("home", "Running and upcoming events plus public announcements."),
    # Announcements and chat
    _command(
        "post_announcement",
        "Post an announcement.",
        {"message": _string("Announcement text."), "scope": _string("'public' or 'participant'. Default public.")},
        ["message"],
    ),
    _command(
        "delete_announcement",
        "Delete an announcement.",
        {"announcement_id": _string("Announcement id.")},
        ["announcement_id"],
    ),
    _command(
        "announcements",
        "List announcements of one scope, newest first.",
        {"scope": _string("'public' or 'participant'.")},
        ["scope"],
    ),
    _command(
        "send_message",
        "Send a chat message between two users.",
        {
            "sender_id": _string("Sending user id."),
            "receiver_id": _string("Receiving user id."),
            "message": _string("Message text."),
        },
        ["sender_id", "receiver_id", "message"],
    ),
    _command(
        "conversation",
        "Messages exchanged between two users, oldest first.",
        {"user_id": _string("One user id."), "other_id": _string("The other user id.")},
        ["user_id", "other_id"],
    ),
    # History
    _command(
        "add_history",
        "Add a past season to the league history. All fields are required.",
        {
            "season_number": _string("Season number."),
            "tournament_name": _string("Tournament name."),
            "winner": _string("Winner."),
            "runners_up": _string("Runners-up."),
            "participant_count": _string("Number of participants."),
        },
        ["season_number", "tournament_name", "winner", "runners_up", "participant_count"],
    ),
    _command(
        "delete_history",
        "Delete a league history entry.",
        {"entry_id": _string("History entry id.")},
        ["entry_id"],
    ),
]


def to_payload(value: Any) -> Any:
    """Convert league values into JSON-ready structures."""
    if isinstance(value, OperationResult):
        return {
            "ok": value.ok,
            "error": asdict(value.error) if value.error else None,
            "value": to_payload(value.value),
        }
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if is_dataclass(value) and not isinstance(value, type):
        return to_payload(asdict(value))
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(key): to_payload(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_payload(item) for item in value]
    return value


def create_command_handlers(league: "CricketLeague") -> dict[str, Callable[..., Any]]:
    """Map command names to callables returning JSON-ready payloads.

    Example:
        handlers = create_command_handlers(league)
        handlers["accept_replacement"](request_id="req-1")
    """

    def dashboard(user_id):
        context, menu = league.get_dashboard(user_id)
        return {"context": to_payload(context), "menu": to_payload(menu)}

    handlers: dict[str, Callable[..., Any]] = {
        "login": lambda email, password: league.login(email, password),
        "register_user": lambda full_name, email, password, fb_link=None: league.register_user(full_name, email, password, fb_link),
        "update_password": lambda user_id, password: league.update_password(user_id, password),
        "change_role": lambda actor_id, user_id, role: league.change_role(actor_id, user_id, role),
        "create_event": lambda **fields: league.create_event(**fields),
        "delete_event": lambda event_id: league.delete_event(event_id),
        "event_status": lambda event_id: league.get_event_status(event_id),
        "add_team": lambda event_id, name: league.add_team(event_id, name),
        "update_team": lambda team_id, name: league.update_team(team_id, name),
        "delete_team": lambda team_id: league.delete_team(team_id),
        "add_player": lambda event_id, team_id, name, category, player_type="Local": league.add_player(event_id, team_id, name, category, player_type),
        "delete_player": lambda player_id: league.delete_player(player_id),
        "import_players": lambda event_id, raw_text: league.import_players(event_id, raw_text),
        "set_match_points": lambda player_id, match_index, points: league.set_match_points(player_id, match_index, points),
        "check_roster": lambda event_id, selections: league.check_roster(event_id, parse_selections(selections)),
        "register_team": lambda user_id, event_id, team_name, selections: league.register_team(user_id, event_id, team_name, parse_selections(selections)),
        "team_total": lambda participant_team_id: league.get_team_total(participant_team_id),
        "team_breakdown": lambda participant_team_id: league.get_team_breakdown(participant_team_id),
        "team_standing": lambda participant_team_id: league.get_team_standing(participant_team_id),
        "my_xi": lambda participant_team_id: league.get_my_xi(participant_team_id),
        "leaderboard": lambda event_id: league.get_leaderboard(event_id),
        "participant_teams": lambda event_id: league.get_participant_teams(event_id),
        "participant_details": lambda event_id: league.get_participant_details(event_id),
        "submit_replacement": lambda participant_team_id, outgoing_id, incoming_id, note="": league.submit_replacement(participant_team_id, outgoing_id, incoming_id, note),
        "accept_replacement": lambda request_id: league.accept_replacement(request_id),
        "reject_replacement": lambda request_id, reason=None: league.reject_replacement(request_id, reason),
        "pending_requests": lambda: league.get_pending_requests(),
        "team_requests": lambda participant_team_id: league.get_team_requests(participant_team_id),
        "dashboard": dashboard,
        "home": lambda: league.get_home(),
        "post_announcement": lambda message, scope="public": league.post_announcement(message, scope),
        "delete_announcement": lambda announcement_id: league.delete_announcement(announcement_id),
        "announcements": lambda scope: league.get_announcements(scope),
        "send_message": lambda sender_id, receiver_id, message: league.send_message(sender_id, receiver_id, message),
        "conversation": lambda user_id, other_id: league.get_conversation(user_id, other_id),
        "add_history": lambda season_number, tournament_name, winner, runners_up, participant_count: league.add_history(season_number, tournament_name, winner, runners_up, participant_count),
        "delete_history": lambda entry_id: league.delete_history(entry_id),
    }

    def _wrap(handler: Callable[..., Any]) -> Callable[..., Any]:
        return lambda **kwargs: to_payload(handler(**kwargs))

    return {name: _wrap(handler) for name, handler in handlers.items()}
