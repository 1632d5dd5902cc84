"""Facade holding one league snapshot and serializing every change to it."""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Optional, Union

from pydantic import ValidationError

from . import accounts, replacements
from .config import LeagueConfig, load_config
from .errors import INVALID, NOT_FOUND, OperationResult
from .leaderboard import LeaderboardEntry, rank_event, team_standing
from .logger import setup_logger
from .normalize.players import BulkImportResult, normalize_bulk_players
from .registration import register_team, validate_event
from .rules.roster import RosterReport, validate_roster
from .schema.models import (
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
    RosterSlot,
    SiteSettings,
    UserRole,
)
from .scoring import PlayerBreakdown, team_breakdown, team_total
from .status import (
    DashboardContext,
    EventStatus,
    HomeOverview,
    MenuAvailability,
    announcements_for_scope,
    event_status,
    home_overview,
    menu_availability,
    resolve_dashboard,
)
from .store import actions
from .store.reducer import apply
from .store.snapshot import load_snapshot, write_snapshot
from .store.sqlite_store import save_to_file
from .store.state import LeagueState, bootstrap_state

logger = logging.getLogger(__name__)

DateLike = Union[datetime, str]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


def _as_datetime(value: DateLike) -> datetime:
    parsed = value if isinstance(value, datetime) else datetime.fromisoformat(str(value))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _event_teams(state: LeagueState, event_id: str) -> list[ParticipantTeam]:
    if state.get_event(event_id) is None:
        return []
    return state.participant_teams_for_event(event_id)


def parse_selections(raw: str) -> list[RosterSlot]:
    """Parse ``"p1,p2*,p3"`` into roster slots; a trailing ``*`` marks a VIP."""
    slots: list[RosterSlot] = []
    for part in raw.split(","):
        token = part.strip()
        if not token:
            continue
        is_vip = token.endswith("*")
        slots.append(RosterSlot(player_id=token.rstrip("*").strip(), is_vip=is_vip))
    return slots


class CricketLeague:
    def __init__(
        self,
        state: Optional[LeagueState] = None,
        *,
        config: Optional[LeagueConfig] = None,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[str], str]] = None,
    ) -> None:
        self.config = config or load_config()
        setup_logger(self.config)
        self._state = state if state is not None else bootstrap_state(self.config)
        self._clock = clock or _utc_now
        self._new_id = id_factory or _new_id
        self._lock = threading.RLock()
        self._version = 0

    @classmethod
    def from_snapshot(cls, path: str, **kwargs: Any) -> CricketLeague:
        return cls(load_snapshot(path), **kwargs)

    @property
    def state(self) -> LeagueState:
        return self._state

    @property
    def version(self) -> int:
        """Bumped every time the held snapshot changes; usable as a cache key."""
        return self._version

    def now(self) -> datetime:
        return self._clock()

    def dispatch(self, action: actions.Action) -> LeagueState:
        with self._lock:
            return self._commit(apply(self._state, action))

    def _commit(self, new_state: LeagueState) -> LeagueState:
        if new_state is not self._state:
            self._state = new_state
            self._version += 1
        return self._state

    def _run(self, operation: Callable[[LeagueState], OperationResult]) -> OperationResult:
        with self._lock:
            result = operation(self._state)
            if result.ok:
                self._commit(result.state)
            else:
                logger.debug("Operation rejected: %s", result.error)
            return result

    def save_snapshot(self, output_path: str) -> str:
        return write_snapshot(self._state, output_path)

    def save_to_file(self, output_path: str) -> str:
        return save_to_file(self._state, output_path)

    # Accounts

    def login(self, email: str, password: str) -> OperationResult:
        return accounts.login(self._state, email, password)

    def register_user(
        self, full_name: str, email: str, password: str, fb_link: Optional[str] = None
    ) -> OperationResult:
        user_id = self._new_id("user")
        return self._run(
            lambda s: accounts.register(
                s, user_id=user_id, full_name=full_name, email=email,
                password=password, fb_link=fb_link,
            )
        )

    def update_password(self, user_id: str, password: str) -> OperationResult:
        return self._run(lambda s: accounts.update_password(s, user_id, password))

    def change_role(self, actor_id: str, user_id: str, role: Union[UserRole, str]) -> OperationResult:
        def operation(state: LeagueState) -> OperationResult:
            try:
                new_role = UserRole(role)
            except ValueError:
                return OperationResult.failure(state, INVALID, f"Unknown role: {role}")
            return accounts.change_role(state, actor_id, user_id, new_role)

        return self._run(operation)

    # Events

    def create_event(
        self,
        name: str,
        registration_deadline: DateLike,
        tournament_end_time: DateLike,
        *,
        description: str = "",
        duration: str = "",
        league_type: Union[LeagueType, str] = LeagueType.INTERNATIONAL,
        max_foreign_players: Optional[int] = None,
        total_matches: int = 0,
        max_matches_per_team: int = 0,
        max_players_from_single_team: int = 0,
        max_vip_players: int = 0,
        max_replacements: int = 0,
    ) -> OperationResult:
        event_id = self._new_id("event")

        def build(state: LeagueState) -> Event:
            return Event(
                id=event_id,
                name=name,
                registration_deadline=_as_datetime(registration_deadline),
                tournament_end_time=_as_datetime(tournament_end_time),
                description=description,
                duration=duration,
                league_type=LeagueType(league_type),
                max_foreign_players=max_foreign_players,
                total_matches=total_matches,
                max_matches_per_team=max_matches_per_team,
                max_players_from_single_team=max_players_from_single_team,
                max_vip_players=max_vip_players,
                max_replacements=max_replacements,
            )

        return self._save_event(build, actions.CreateEvent)

    def update_event(self, event_id: str, **changes: Any) -> OperationResult:
        def build(state: LeagueState) -> Event:
            current = state.get_event(event_id)
            if current is None:
                raise LookupError(f"Event {event_id} not found.")
            converted = dict(changes)
            for key in ("registration_deadline", "tournament_end_time"):
                if key in converted:
                    converted[key] = _as_datetime(converted[key])
            if "league_type" in converted:
                converted["league_type"] = LeagueType(converted["league_type"])
            return replace(current, **converted)

        return self._save_event(build, actions.UpdateEvent)

    def _save_event(
        self,
        build: Callable[[LeagueState], Event],
        action_type: Callable[[Event], actions.Action],
    ) -> OperationResult:
        # build runs under the lock so it always sees the latest event
        def operation(state: LeagueState) -> OperationResult:
            try:
                event = build(state)
            except LookupError as exc:
                return OperationResult.failure(state, NOT_FOUND, str(exc))
            except (TypeError, ValueError) as exc:
                return OperationResult.failure(state, INVALID, str(exc))
            problem = validate_event(event)
            if problem:
                return OperationResult.failure(state, INVALID, problem)
            return OperationResult(state=apply(state, action_type(event)), value=event)

        return self._run(operation)

    def delete_event(self, event_id: str) -> OperationResult:
        """Delete an event together with its real-life teams and players.

        Participant teams are kept but no longer surface anywhere once their
        event is gone.
        """

        def operation(state: LeagueState) -> OperationResult:
            if state.get_event(event_id) is None:
                return OperationResult.failure(state, NOT_FOUND, f"Event {event_id} not found.")
            new_state = apply(state, actions.DeleteEvent(event_id))
            for player in state.players_for_event(event_id):
                new_state = apply(new_state, actions.DeletePlayer(player.id))
            for team in state.teams_for_event(event_id):
                new_state = apply(new_state, actions.DeleteTeam(team.id))
            logger.info("Deleted event %s", event_id)
            return OperationResult(state=new_state, value=event_id)

        return self._run(operation)

    def get_event_status(self, event_id: str) -> Optional[EventStatus]:
        event = self._state.get_event(event_id)
        if event is None:
            return None
        return event_status(event, self.now())

    # Real-life teams and players

    def add_team(self, event_id: str, name: str) -> OperationResult:
        def operation(state: LeagueState) -> OperationResult:
            if state.get_event(event_id) is None:
                return OperationResult.failure(state, NOT_FOUND, f"Event {event_id} not found.")
            if not name.strip():
                return OperationResult.failure(state, INVALID, "Team name is required.")
            team = CricketTeam(id=self._new_id("team"), name=name.strip(), event_id=event_id)
            return OperationResult(state=apply(state, actions.AddTeam(team)), value=team)

        return self._run(operation)

    def update_team(self, team_id: str, name: str) -> OperationResult:
        def operation(state: LeagueState) -> OperationResult:
            team = state.get_team(team_id)
            if team is None:
                return OperationResult.failure(state, NOT_FOUND, f"Team {team_id} not found.")
            if not name.strip():
                return OperationResult.failure(state, INVALID, "Team name is required.")
            renamed = replace(team, name=name.strip())
            new_state = apply(state, actions.UpdateTeam(renamed))
            for player in state.players:
                if player.team_id == team_id:
                    new_state = apply(
                        new_state, actions.UpdatePlayer(replace(player, team_name=renamed.name))
                    )
            return OperationResult(state=new_state, value=renamed)

        return self._run(operation)

    def delete_team(self, team_id: str) -> OperationResult:
        def operation(state: LeagueState) -> OperationResult:
            if state.get_team(team_id) is None:
                return OperationResult.failure(state, NOT_FOUND, f"Team {team_id} not found.")
            return OperationResult(state=apply(state, actions.DeleteTeam(team_id)), value=team_id)

        return self._run(operation)

    def _team_in_event(
        self, state: LeagueState, team_id: str, event_id: str
    ) -> Optional[CricketTeam]:
        team = state.get_team(team_id)
        if team is None or team.event_id != event_id:
            return None
        return team

    def add_player(
        self,
        event_id: str,
        team_id: str,
        name: str,
        category: Union[PlayerCategory, str],
        player_type: Union[PlayerType, str] = PlayerType.LOCAL,
    ) -> OperationResult:
        def operation(state: LeagueState) -> OperationResult:
            if not name.strip():
                return OperationResult.failure(state, INVALID, "Player name is required.")
            team = self._team_in_event(state, team_id, event_id)
            if team is None:
                return OperationResult.failure(
                    state, NOT_FOUND, f"Team {team_id} not found in this event."
                )
            try:
                player = Player(
                    id=self._new_id("player"),
                    name=name.strip(),
                    category=PlayerCategory(category),
                    player_type=PlayerType(player_type),
                    team_id=team.id,
                    team_name=team.name,
                    event_id=event_id,
                    points=(),
                )
            except ValueError as exc:
                return OperationResult.failure(state, INVALID, str(exc))
            return OperationResult(state=apply(state, actions.AddPlayer(player)), value=player)

        return self._run(operation)

    def update_player(self, player_id: str, **changes: Any) -> OperationResult:
        def operation(state: LeagueState) -> OperationResult:
            player = state.get_player(player_id)
            if player is None:
                return OperationResult.failure(state, NOT_FOUND, f"Player {player_id} not found.")
            try:
                if "category" in changes:
                    changes["category"] = PlayerCategory(changes["category"])
                if "player_type" in changes:
                    changes["player_type"] = PlayerType(changes["player_type"])
                if "team_id" in changes:
                    team = self._team_in_event(state, changes["team_id"], player.event_id)
                    if team is None:
                        return OperationResult.failure(
                            state, NOT_FOUND, "Team not found in this event."
                        )
                    changes["team_name"] = team.name
                updated = replace(player, **changes)
            except (TypeError, ValueError) as exc:
                return OperationResult.failure(state, INVALID, str(exc))
            return OperationResult(state=apply(state, actions.UpdatePlayer(updated)), value=updated)

        return self._run(operation)

    def delete_player(self, player_id: str) -> OperationResult:
        def operation(state: LeagueState) -> OperationResult:
            if state.get_player(player_id) is None:
                return OperationResult.failure(state, NOT_FOUND, f"Player {player_id} not found.")
            return OperationResult(
                state=apply(state, actions.DeletePlayer(player_id)), value=player_id
            )

        return self._run(operation)

    def import_players(self, event_id: str, raw_text: str) -> OperationResult:
        def operation(state: LeagueState) -> OperationResult:
            if state.get_event(event_id) is None:
                return OperationResult.failure(state, NOT_FOUND, "Please select an event first.")
            batch = self._new_id("player")
            result: BulkImportResult = normalize_bulk_players(
                raw_text,
                event_id,
                state.teams_for_event(event_id),
                id_factory=lambda line_number: f"{batch}-{line_number}",
            )
            new_state = state
            if result.players:
                new_state = apply(state, actions.AddBulkPlayers(result.players))
            logger.info(
                "Bulk import into %s: %s added, %s failed",
                event_id, result.success_count, result.error_count,
            )
            return OperationResult(state=new_state, value=result)

        return self._run(operation)

    def set_match_points(self, player_id: str, match_index: int, points: float) -> OperationResult:
        def operation(state: LeagueState) -> OperationResult:
            player = state.get_player(player_id)
            if player is None:
                return OperationResult.failure(state, NOT_FOUND, f"Player {player_id} not found.")
            event = state.get_event(player.event_id)
            limit = event.total_matches if event is not None else 0
            if match_index < 0 or (limit and match_index >= limit):
                return OperationResult.failure(
                    state, INVALID, f"Match index must be between 0 and {max(limit - 1, 0)}."
                )
            values = list(player.points)
            if len(values) <= match_index:
                values.extend([None] * (match_index + 1 - len(values)))
            values[match_index] = points
            return OperationResult(
                state=apply(state, actions.UpdatePlayerPoints(player_id, tuple(values))),
                value=tuple(values),
            )

        return self._run(operation)

    def set_player_points(
        self, player_id: str, points: Iterable[Optional[float]]
    ) -> OperationResult:
        values = tuple(points)

        def operation(state: LeagueState) -> OperationResult:
            if state.get_player(player_id) is None:
                return OperationResult.failure(state, NOT_FOUND, f"Player {player_id} not found.")
            return OperationResult(
                state=apply(state, actions.UpdatePlayerPoints(player_id, values)), value=values
            )

        return self._run(operation)

    # Fantasy teams

    def check_roster(
        self, event_id: str, selections: Iterable[Optional[RosterSlot]]
    ) -> Optional[RosterReport]:
        state = self._state
        event = state.get_event(event_id)
        if event is None:
            return None
        return validate_roster(event, selections, state.players_by_id())

    def register_team(
        self,
        user_id: str,
        event_id: str,
        team_name: str,
        selections: Iterable[Optional[RosterSlot]],
    ) -> OperationResult:
        team_id = self._new_id("pteam")
        selections = list(selections)
        return self._run(
            lambda s: register_team(
                s, team_id=team_id, user_id=user_id, event_id=event_id,
                team_name=team_name, selections=selections, now=self.now(),
            )
        )

    def get_team_total(self, participant_team_id: str) -> Optional[float]:
        state = self._state
        team = state.get_participant_team(participant_team_id)
        if team is None:
            return None
        return team_total(team, state.players_by_id())

    def get_team_breakdown(self, participant_team_id: str) -> list[PlayerBreakdown]:
        state = self._state
        team = state.get_participant_team(participant_team_id)
        if team is None:
            return []
        return team_breakdown(team, state.players_by_id())

    def get_team_standing(self, participant_team_id: str) -> Optional[LeaderboardEntry]:
        return team_standing(self._state, participant_team_id)

    def get_leaderboard(self, event_id: str) -> list[LeaderboardEntry]:
        return rank_event(self._state, event_id)

    def get_participant_teams(self, event_id: str) -> list[ParticipantTeam]:
        return _event_teams(self._state, event_id)

    def get_participant_details(self, event_id: str) -> list[dict[str, Any]]:
        """Admin listing of an event's fantasy teams with their rosters and totals."""
        state = self._state
        players = state.players_by_id()
        details = []
        for team in _event_teams(state, event_id):
            details.append(
                {
                    "participant_team_id": team.id,
                    "participant_name": team.participant_name,
                    "team_name": team.team_name,
                    "replacements_left": team.replacements_left,
                    "total_points": team_total(team, players),
                    "players": team_breakdown(team, players),
                }
            )
        return details

    def get_my_xi(self, participant_team_id: str) -> Optional[dict[str, Any]]:
        state = self._state
        team = state.get_participant_team(participant_team_id)
        if team is None:
            return None
        standing = team_standing(state, participant_team_id)
        players = state.players_by_id()
        return {
            "participant_team_id": team.id,
            "team_name": team.team_name,
            "rank": standing.rank if standing else None,
            "total_points": team_total(team, players),
            "archived_points": team.archived_points,
            "replacements_left": team.replacements_left,
            "players": team_breakdown(team, players),
        }

    # Replacements

    def submit_replacement(
        self, participant_team_id: str, outgoing_id: str, incoming_id: str, note: str = ""
    ) -> OperationResult:
        request_id = self._new_id("req")
        return self._run(
            lambda s: replacements.submit_replacement(
                s, request_id=request_id, participant_team_id=participant_team_id,
                outgoing_id=outgoing_id, incoming_id=incoming_id, note=note, now=self.now(),
            )
        )

    def accept_replacement(self, request_id: str) -> OperationResult:
        return self._run(lambda s: replacements.accept_replacement(s, request_id))

    def reject_replacement(self, request_id: str, reason: Optional[str] = None) -> OperationResult:
        return self._run(lambda s: replacements.reject_replacement(s, request_id, reason))

    def get_pending_requests(self) -> list:
        return replacements.pending_requests(self._state)

    def get_team_requests(self, participant_team_id: str) -> list:
        return replacements.requests_for_team(self._state, participant_team_id)

    # Dashboard

    def get_dashboard(self, user_id: str) -> tuple[DashboardContext, MenuAvailability]:
        state = self._state
        context = resolve_dashboard(state, user_id, self.now())
        menu = menu_availability(context, state.site_settings.show_participant_teams)
        return context, menu

    def get_home(self) -> HomeOverview:
        return home_overview(self._state, self.now())

    # Announcements, chat, history, settings

    def post_announcement(
        self, message: str, scope: Union[AnnouncementScope, str] = AnnouncementScope.PUBLIC
    ) -> OperationResult:
        def operation(state: LeagueState) -> OperationResult:
            if not message.strip():
                return OperationResult.failure(state, INVALID, "Announcement cannot be empty.")
            try:
                announcement = Announcement(
                    id=self._new_id("anno"),
                    message=message.strip(),
                    created_at=self.now(),
                    scope=AnnouncementScope(scope),
                )
            except ValueError as exc:
                return OperationResult.failure(state, INVALID, str(exc))
            return OperationResult(
                state=apply(state, actions.AddAnnouncement(announcement)), value=announcement
            )

        return self._run(operation)

    def delete_announcement(self, announcement_id: str) -> OperationResult:
        return self._run(
            lambda s: OperationResult(
                state=apply(s, actions.DeleteAnnouncement(announcement_id)), value=announcement_id
            )
        )

    def get_announcements(self, scope: Union[AnnouncementScope, str]) -> tuple[Announcement, ...]:
        return announcements_for_scope(self._state, AnnouncementScope(scope))

    def send_message(self, sender_id: str, receiver_id: str, message: str) -> OperationResult:
        def operation(state: LeagueState) -> OperationResult:
            sender = state.get_user(sender_id)
            if sender is None:
                return OperationResult.failure(state, NOT_FOUND, "Not logged in")
            if state.get_user(receiver_id) is None:
                return OperationResult.failure(state, NOT_FOUND, f"User {receiver_id} not found.")
            if not message.strip():
                return OperationResult.failure(state, INVALID, "Message cannot be empty.")
            chat = ChatMessage(
                id=self._new_id("msg"),
                sender_id=sender.id,
                sender_name=sender.full_name,
                receiver_id=receiver_id,
                message=message,
                created_at=self.now(),
                is_read=False,
            )
            return OperationResult(state=apply(state, actions.AddChatMessage(chat)), value=chat)

        return self._run(operation)

    def get_conversation(self, user_id: str, other_id: str) -> list[ChatMessage]:
        pair = {(user_id, other_id), (other_id, user_id)}
        messages = [
            m for m in self._state.chat_messages if (m.sender_id, m.receiver_id) in pair
        ]
        return sorted(messages, key=lambda m: m.created_at)

    def add_history(
        self,
        season_number: str,
        tournament_name: str,
        winner: str,
        runners_up: str,
        participant_count: str,
    ) -> OperationResult:
        entry = CnflHistory(
            id=self._new_id("hist"),
            season_number=str(season_number).strip(),
            tournament_name=tournament_name.strip(),
            winner=winner.strip(),
            runners_up=runners_up.strip(),
            participant_count=str(participant_count).strip(),
        )
        return self._save_history(lambda state: entry, actions.AddHistory)

    def update_history(self, entry_id: str, **changes: Any) -> OperationResult:
        def build(state: LeagueState) -> CnflHistory:
            current = next((h for h in state.cnfl_history if h.id == entry_id), None)
            if current is None:
                raise LookupError(f"History {entry_id} not found.")
            return replace(current, **{k: str(v).strip() for k, v in changes.items()})

        return self._save_history(build, actions.UpdateHistory)

    def _save_history(
        self,
        build: Callable[[LeagueState], CnflHistory],
        action_type: Callable[[CnflHistory], actions.Action],
    ) -> OperationResult:
        def operation(state: LeagueState) -> OperationResult:
            try:
                entry = build(state)
            except LookupError as exc:
                return OperationResult.failure(state, NOT_FOUND, str(exc))
            except TypeError as exc:
                return OperationResult.failure(state, INVALID, str(exc))
            required = (
                entry.season_number, entry.tournament_name, entry.winner,
                entry.runners_up, entry.participant_count,
            )
            if not all(required):
                return OperationResult.failure(state, INVALID, "All fields are required.")
            return OperationResult(state=apply(state, action_type(entry)), value=entry)

        return self._run(operation)

    def delete_history(self, entry_id: str) -> OperationResult:
        return self._run(
            lambda s: OperationResult(state=apply(s, actions.DeleteHistory(entry_id)), value=entry_id)
        )

    def update_site_settings(self, **changes: Any) -> OperationResult:
        def operation(state: LeagueState) -> OperationResult:
            try:
                settings = SiteSettings(**changes)
            except ValidationError as exc:
                return OperationResult.failure(state, INVALID, str(exc))
            new_state = apply(state, actions.UpdateSiteSettings(settings))
            return OperationResult(state=new_state, value=new_state.site_settings)

        return self._run(operation)
