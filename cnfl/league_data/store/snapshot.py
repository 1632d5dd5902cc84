"""JSON snapshot helpers for moving a league state in and out of files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from pydantic import TypeAdapter, ValidationError

from ..errors import LeagueDataError
from .state import LeagueState

_STATE_ADAPTER = TypeAdapter(LeagueState)


def state_to_dict(state: LeagueState) -> dict[str, Any]:
    return _STATE_ADAPTER.dump_python(state, mode="json")


def state_from_dict(payload: Mapping[str, Any]) -> LeagueState:
    try:
        return _STATE_ADAPTER.validate_python(dict(payload))
    except ValidationError as exc:
        raise LeagueDataError(f"Invalid league snapshot: {exc}") from exc


def load_snapshot(path: str | Path) -> LeagueState:
    snapshot_path = Path(path)
    try:
        payload = json.loads(snapshot_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise LeagueDataError(f"Could not read snapshot {snapshot_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise LeagueDataError(f"Invalid JSON in snapshot {snapshot_path}") from exc
    if not isinstance(payload, dict):
        raise LeagueDataError(f"Snapshot {snapshot_path} must hold a JSON object.")
    return state_from_dict(payload)


def write_snapshot(state: LeagueState, path: str | Path) -> str:
    snapshot_path = Path(path)
    snapshot_path.parent.mkdir(parents=True, exist_ok=True)
    snapshot_path.write_text(
        json.dumps(state_to_dict(state), indent=2, sort_keys=True),
        encoding="utf-8",
    )
    return str(snapshot_path)
