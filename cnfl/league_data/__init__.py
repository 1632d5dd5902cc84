"""Public package exports for the cricket league data layer."""

from .config import LeagueConfig, load_config
from .cricket_league import CricketLeague, parse_selections
from .errors import LeagueDataError, OperationError, OperationResult
from .schema import models as schema_models
from .store.sqlite_store import bulk_insert, create_tables
from .store.state import LeagueState, bootstrap_state

__all__ = [
    "CricketLeague",
    "LeagueConfig",
    "LeagueDataError",
    "LeagueState",
    "OperationError",
    "OperationResult",
    "bootstrap_state",
    "load_config",
    "parse_selections",
    "schema_models",
    "bulk_insert",
    "create_tables",
]
