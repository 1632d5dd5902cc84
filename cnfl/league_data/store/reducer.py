"""Pure reducer applying one action to a league snapshot."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Iterable, TypeVar

from ..schema.models import CnflHistory
from . import actions as a
from .state import LeagueState

T = TypeVar("T")


def _replace_by_id(items: Iterable[T], updated: T) -> tuple[T, ...]:
    target = getattr(updated, "id")
    return tuple(updated if getattr(item, "id") == target else item for item in items)


def _remove_by_id(items: Iterable[T], entity_id: str) -> tuple[T, ...]:
    return tuple(item for item in items if getattr(item, "id") != entity_id)


def _season_sort_key(entry: CnflHistory) -> tuple[int, int]:
    # Non-numeric seasons go last, keeping their relative order.
    try:
        return (0, int(str(entry.season_number).strip()))
    except ValueError:
        return (1, 0)


def _sorted_history(entries: Iterable[CnflHistory]) -> tuple[CnflHistory, ...]:
    return tuple(sorted(entries, key=_season_sort_key))


def _update_player_points(state: LeagueState, action: a.UpdatePlayerPoints) -> LeagueState:
    players = tuple(
        replace(player, points=tuple(action.points))
        if player.id == action.player_id
        else player
        for player in state.players
    )
    return replace(state, players=players)


_HANDLERS: dict[type, Callable[[LeagueState, Any], LeagueState]] = {
    a.CreateEvent: lambda s, act: replace(s, events=s.events + (act.event,)),
    a.UpdateEvent: lambda s, act: replace(s, events=_replace_by_id(s.events, act.event)),
    a.DeleteEvent: lambda s, act: replace(s, events=_remove_by_id(s.events, act.event_id)),
    a.AddTeam: lambda s, act: replace(s, teams=s.teams + (act.team,)),
    a.UpdateTeam: lambda s, act: replace(s, teams=_replace_by_id(s.teams, act.team)),
    a.DeleteTeam: lambda s, act: replace(s, teams=_remove_by_id(s.teams, act.team_id)),
    a.AddPlayer: lambda s, act: replace(s, players=s.players + (act.player,)),
    a.AddBulkPlayers: lambda s, act: replace(s, players=s.players + tuple(act.players)),
    a.UpdatePlayer: lambda s, act: replace(s, players=_replace_by_id(s.players, act.player)),
    a.DeletePlayer: lambda s, act: replace(s, players=_remove_by_id(s.players, act.player_id)),
    a.UpdatePlayerPoints: _update_player_points,
    a.AddReplacementRequest: lambda s, act: replace(
        s, replacement_requests=(act.request,) + s.replacement_requests
    ),
    a.UpdateReplacementRequest: lambda s, act: replace(
        s, replacement_requests=_replace_by_id(s.replacement_requests, act.request)
    ),
    a.AddAnnouncement: lambda s, act: replace(
        s, announcements=(act.announcement,) + s.announcements
    ),
    a.DeleteAnnouncement: lambda s, act: replace(
        s, announcements=_remove_by_id(s.announcements, act.announcement_id)
    ),
    a.AddChatMessage: lambda s, act: replace(s, chat_messages=s.chat_messages + (act.message,)),
    a.UpdateSiteSettings: lambda s, act: replace(
        s, site_settings=s.site_settings.merged(act.settings)
    ),
    a.AddHistory: lambda s, act: replace(
        s, cnfl_history=_sorted_history(s.cnfl_history + (act.entry,))
    ),
    a.UpdateHistory: lambda s, act: replace(
        s, cnfl_history=_sorted_history(_replace_by_id(s.cnfl_history, act.entry))
    ),
    a.DeleteHistory: lambda s, act: replace(
        s, cnfl_history=_remove_by_id(s.cnfl_history, act.entry_id)
    ),
    a.AddParticipantTeam: lambda s, act: replace(
        s, participant_teams=s.participant_teams + (act.team,)
    ),
    a.UpdateParticipantTeam: lambda s, act: replace(
        s, participant_teams=_replace_by_id(s.participant_teams, act.team)
    ),
    a.AddUser: lambda s, act: replace(s, users=s.users + (act.user,)),
    a.UpdateUser: lambda s, act: replace(s, users=_replace_by_id(s.users, act.user)),
}


def apply(state: LeagueState, action: Any) -> LeagueState:
    """Return the snapshot that results from applying ``action`` to ``state``.

    The input is never mutated. Unrecognized actions return ``state`` itself.
    """
    handler = _HANDLERS.get(type(action))
    if handler is None:
        return state
    return handler(state, action)
