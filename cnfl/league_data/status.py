"""Event timeline classification and participant dashboard context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from .schema.models import Announcement, AnnouncementScope, Event, ParticipantTeam
from .store.state import LeagueState


class EventStatus(str, Enum):
    UPCOMING = "UPCOMING"
    RUNNING = "RUNNING"
    FINISHED = "FINISHED"
    NO_EVENT = "NO_EVENT"


def event_status(event: Event, now: datetime) -> EventStatus:
    if now < event.registration_deadline:
        return EventStatus.UPCOMING
    if now < event.tournament_end_time:
        return EventStatus.RUNNING
    return EventStatus.FINISHED


def is_registration_open(event: Event, now: datetime) -> bool:
    return event_status(event, now) == EventStatus.UPCOMING


@dataclass(frozen=True)
class DashboardContext:
    status: EventStatus
    event: Optional[Event] = None
    team: Optional[ParticipantTeam] = None


@dataclass(frozen=True)
class MenuAvailability:
    view_my_xi: bool
    leaderboard: bool
    replace_player: bool
    replacement_history: bool


def resolve_dashboard(state: LeagueState, user_id: str, now: datetime) -> DashboardContext:
    """Pick the event a participant's dashboard should focus on.

    Priority: a running event they play in, an upcoming event they registered
    for, their most recently finished event, then any event still open for
    registration.
    """
    my_teams = [pt for pt in state.participant_teams if pt.participant_id == user_id]
    entered: list[tuple[Event, ParticipantTeam]] = []
    for team in my_teams:
        event = state.get_event(team.event_id)
        if event is not None:
            entered.append((event, team))

    for wanted in (EventStatus.RUNNING, EventStatus.UPCOMING):
        for event, team in entered:
            if event_status(event, now) == wanted:
                return DashboardContext(status=wanted, event=event, team=team)

    finished = [
        (event, team) for event, team in entered
        if event_status(event, now) == EventStatus.FINISHED
    ]
    if finished:
        event, team = max(finished, key=lambda item: item[0].tournament_end_time)
        return DashboardContext(status=EventStatus.FINISHED, event=event, team=team)

    open_event = open_registration_event(state, now)
    if open_event is not None:
        return DashboardContext(status=EventStatus.UPCOMING, event=open_event)

    return DashboardContext(status=EventStatus.NO_EVENT)


def open_registration_event(state: LeagueState, now: datetime) -> Optional[Event]:
    for event in state.events:
        if is_registration_open(event, now):
            return event
    return None


def menu_availability(
    context: DashboardContext, show_participant_teams: bool
) -> MenuAvailability:
    team = context.team
    has_team = team is not None
    return MenuAvailability(
        view_my_xi=has_team,
        leaderboard=has_team
        and (context.status == EventStatus.FINISHED or show_participant_teams),
        replace_player=has_team
        and context.status == EventStatus.RUNNING
        and team.replacements_left > 0,
        replacement_history=has_team,
    )


@dataclass(frozen=True)
class HomeOverview:
    running_event: Optional[Event]
    upcoming_event: Optional[Event]
    announcements: tuple[Announcement, ...]


def home_overview(state: LeagueState, now: datetime) -> HomeOverview:
    running = [e for e in state.events if event_status(e, now) == EventStatus.RUNNING]
    upcoming = [e for e in state.events if event_status(e, now) == EventStatus.UPCOMING]
    return HomeOverview(
        running_event=min(running, key=lambda e: e.tournament_end_time, default=None),
        upcoming_event=min(upcoming, key=lambda e: e.registration_deadline, default=None),
        announcements=announcements_for_scope(state, AnnouncementScope.PUBLIC),
    )


def announcements_for_scope(
    state: LeagueState, scope: AnnouncementScope
) -> tuple[Announcement, ...]:
    return tuple(a for a in state.announcements if a.scope == scope)
