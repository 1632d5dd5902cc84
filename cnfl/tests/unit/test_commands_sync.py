"""Tests that command definitions stay in sync with CricketLeague methods.

These tests catch drift between:
- CricketLeague public methods
- LEAGUE_COMMANDS definitions (function-calling format)
- create_command_handlers() handler map
"""

import inspect

import pytest

from cnfl.commands import LEAGUE_COMMANDS, create_command_handlers
from cnfl.league_data import CricketLeague

# Infrastructure methods, and field-wise editors taking **changes
NON_COMMAND_METHODS = {
    "dispatch",
    "now",
    "save_snapshot",
    "save_to_file",
    "set_player_points",
    "update_event",
    "update_history",
    "update_player",
    "update_site_settings",
}


def _get_league_methods() -> dict[str, inspect.Signature]:
    methods = {}
    for name, method in inspect.getmembers(CricketLeague, predicate=inspect.isfunction):
        if name.startswith("_") or name in NON_COMMAND_METHODS:
            continue
        methods[name] = inspect.signature(method)
    return methods


def _command_names() -> set[str]:
    return {command["function"]["name"] for command in LEAGUE_COMMANDS}


def _command_to_method_name(command_name: str) -> str:
    getter = f"get_{command_name}"
    return getter if hasattr(CricketLeague, getter) else command_name


class TestCommandsCoverAllMethods:
    def test_all_methods_have_command_definitions(self):
        covered = {_command_to_method_name(name) for name in _command_names()}

        missing = set(_get_league_methods()) - covered
        assert missing == set(), (
            f"CricketLeague methods missing from LEAGUE_COMMANDS: {sorted(missing)}."
        )

    def test_no_orphan_command_definitions(self):
        methods = _get_league_methods()

        orphans = {
            name for name in _command_names() if _command_to_method_name(name) not in methods
        }
        assert orphans == set(), f"LEAGUE_COMMANDS references missing methods: {sorted(orphans)}."

    def test_command_names_are_unique(self):
        assert len(_command_names()) == len(LEAGUE_COMMANDS)


class TestCommandParametersMatchSignatures:
    @pytest.fixture
    def league_methods(self):
        return _get_league_methods()

    def test_parameters_match_method_signatures(self, league_methods):
        mismatches = []
        for command in LEAGUE_COMMANDS:
            func_def = command["function"]
            name = func_def["name"]
            method_name = _command_to_method_name(name)
            if method_name not in league_methods:
                continue

            method_params = {
                pname: param
                for pname, param in league_methods[method_name].parameters.items()
                if pname != "self"
            }
            props = func_def["parameters"].get("properties", {})
            required = set(func_def["parameters"].get("required", []))

            extra = set(props) - set(method_params)
            if extra:
                mismatches.append(f"{name}: command has params not in method: {extra}")

            for pname in set(props) & set(method_params):
                has_default = method_params[pname].default is not inspect.Parameter.empty
                if pname in required and has_default:
                    mismatches.append(f"{name}.{pname}: required but method has default")
                if pname not in required and not has_default:
                    mismatches.append(f"{name}.{pname}: optional but method has no default")

        assert mismatches == [], "\n".join(mismatches)


class TestCommandHandlersCoverAllCommands:
    def test_handlers_cover_all_commands(self, league):
        handlers = create_command_handlers(league)

        assert set(handlers) == _command_names()
