"""League store: snapshot, actions, reducer and snapshot files."""

from . import actions
from .reducer import apply
from .snapshot import load_snapshot, state_from_dict, state_to_dict, write_snapshot
from .state import BOOTSTRAP_ADMIN_ID, DEFAULT_SITE_SETTINGS, LeagueState, bootstrap_state

__all__ = [
    "actions",
    "apply",
    "load_snapshot",
    "state_from_dict",
    "state_to_dict",
    "write_snapshot",
    "BOOTSTRAP_ADMIN_ID",
    "DEFAULT_SITE_SETTINGS",
    "LeagueState",
    "bootstrap_state",
]
