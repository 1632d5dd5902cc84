"""CLI for the cricket league data layer.

Commands in the interactive shell mirror the definitions in cnfl.commands so
the shell and any programmatic caller share one surface.
"""

from __future__ import annotations

import argparse
import json
import os
import shlex
from typing import Any

from dotenv import load_dotenv

from cnfl.commands import LEAGUE_COMMANDS, create_command_handlers, to_payload
from cnfl.league_data import CricketLeague, LeagueDataError

_DEFAULT_SNAPSHOT = os.path.join(".cache", "cnfl", "league.json")


def _default_output_path(snapshot_path: str) -> str:
    stem = os.path.splitext(os.path.basename(snapshot_path))[0] or "league"
    return os.path.join(".cache", "cnfl", f"{stem}.sqlite")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cnfl")
    subparsers = parser.add_subparsers(dest="command", required=True)

    export = subparsers.add_parser(
        "export", help="Export a league snapshot to a SQLite file."
    )
    export.add_argument("--snapshot", required=True, help="Path to the JSON snapshot.")
    export.add_argument("--output", help="Output path for SQLite file.")

    leaderboard = subparsers.add_parser(
        "leaderboard", help="Print the ranked leaderboard of an event."
    )
    leaderboard.add_argument("--snapshot", required=True, help="Path to the JSON snapshot.")
    leaderboard.add_argument("--event-id", required=True, help="Event id.")

    import_players = subparsers.add_parser(
        "import-players", help="Bulk import players from a text file."
    )
    import_players.add_argument("--snapshot", required=True, help="Path to the JSON snapshot.")
    import_players.add_argument("--event-id", required=True, help="Event id.")
    import_players.add_argument(
        "--file", required=True, help="File with one 'Name, Category, Type, Team Name' row per line."
    )
    import_players.add_argument(
        "--write", action="store_true", help="Write the updated snapshot back."
    )

    app = subparsers.add_parser(
        "app", help="Load a snapshot and run interactive command shell."
    )
    app.add_argument(
        "--snapshot",
        help="Path to the JSON snapshot. A fresh league is started when omitted or missing.",
    )

    return parser


def _print_json(payload: object) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True, default=str))


def _find_command(name: str) -> dict[str, Any] | None:
    for command in LEAGUE_COMMANDS:
        if command["function"]["name"] == name:
            return command["function"]
    return None


def _build_command_help() -> str:
    lines = ["", "Available commands:"]
    for command in LEAGUE_COMMANDS:
        func = command["function"]
        desc = func["description"].split(".")[0]
        params = func["parameters"]["properties"]
        required = func["parameters"].get("required", [])

        param_parts = []
        for pname, pdef in params.items():
            ptype = pdef.get("type", "string")
            if pname in required:
                param_parts.append(f"<{pname}:{ptype}>")
            else:
                param_parts.append(f"[{pname}:{ptype}]")

        lines.append(f"  {func['name']} {' '.join(param_parts)}".rstrip())
        lines.append(f"      {desc}")

    lines.extend([
        "",
        "Other commands:",
        "  save [output_path]      - Export SQLite file",
        "  snapshot [output_path]  - Write the JSON snapshot",
        "  help | commands         - Show this help",
        "  exit | quit             - Exit the app",
        "",
        "Parameters can be passed positionally or as key=value pairs:",
        "  leaderboard event-1",
        '  register_team user_id=user-1 event_id=event-1 team_name="Night Owls" selections=p1*,p2,p3',
        "",
    ])
    return "\n".join(lines)


def _parse_command_args(
    args: list[str], command_name: str
) -> tuple[dict[str, Any], str | None]:
    """Parse positional or key=value arguments into command parameters.

    Returns:
        (params_dict, error_message)
    """
    definition = _find_command(command_name)
    if not definition:
        return {}, f"Unknown command: {command_name}"

    properties = definition["parameters"]["properties"]
    required = definition["parameters"].get("required", [])
    param_names = list(properties.keys())

    result: dict[str, Any] = {}
    positional_idx = 0

    for arg in args:
        if "=" in arg:
            key, value = arg.split("=", 1)
            if key not in properties:
                return {}, f"Unknown parameter: {key}"
            result[key] = value
        else:
            if positional_idx >= len(param_names):
                return {}, "Too many arguments"
            result[param_names[positional_idx]] = arg
            positional_idx += 1

    for key, value in result.items():
        ptype = properties[key].get("type")
        if ptype == "integer":
            try:
                result[key] = int(value)
            except ValueError:
                return {}, f"Parameter '{key}' must be an integer"
        elif ptype == "number":
            try:
                result[key] = float(value)
            except ValueError:
                return {}, f"Parameter '{key}' must be a number"

    for req in required:
        if req not in result:
            return {}, f"Missing required parameter: {req}"

    return result, None


def _usage(command_name: str) -> str:
    definition = _find_command(command_name)
    if not definition:
        return command_name
    required = definition["parameters"].get("required", [])
    parts = [command_name]
    for pname in definition["parameters"]["properties"]:
        parts.append(f"<{pname}>" if pname in required else f"[{pname}]")
    return " ".join(parts)


def _load_league(snapshot_path: str | None) -> CricketLeague:
    if snapshot_path and os.path.exists(snapshot_path):
        return CricketLeague.from_snapshot(snapshot_path)
    return CricketLeague()


def _confirm_overwrite(path: str) -> bool:
    if not os.path.exists(path):
        return True
    confirm = input(f"{path} exists. Overwrite? [y/N] ").strip().lower()
    return confirm in {"y", "yes"}


def _run_app(snapshot_path: str | None) -> int:
    league = _load_league(snapshot_path)
    snapshot_path = snapshot_path or _DEFAULT_SNAPSHOT
    print(f"Loaded league with {len(league.state.events)} event(s).")

    handlers = create_command_handlers(league)
    help_text = _build_command_help()
    print(help_text)

    while True:
        try:
            raw = input("cnfl> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("")
            return 0

        if not raw:
            continue
        if raw in {"exit", "quit"}:
            return 0
        if raw in {"help", "commands"}:
            print(help_text)
            continue

        try:
            parts = shlex.split(raw)
        except ValueError as e:
            print(f"Parse error: {e}")
            continue

        command = parts[0]
        args = parts[1:]

        if command in {"save", "snapshot"}:
            if command == "save":
                output_path = args[0] if args else _default_output_path(snapshot_path)
                writer = league.save_to_file
                label = "SQLite export"
            else:
                output_path = args[0] if args else snapshot_path
                writer = league.save_snapshot
                label = "JSON snapshot"
            if not _confirm_overwrite(output_path):
                print("Save cancelled.")
                continue
            try:
                saved_path = writer(output_path)
                print(f"Saved {label} to {saved_path}.")
            except (OSError, LeagueDataError) as exc:
                print(f"Error: {exc}")
            continue

        if command not in handlers:
            print(f"Unknown command: {command}")
            print("Type 'commands' to see available commands.")
            continue

        params, error = _parse_command_args(args, command)
        if error:
            print(f"Error: {error}")
            print(f"Usage: {_usage(command)}")
            continue

        try:
            _print_json(handlers[command](**params))
        except (TypeError, ValueError) as exc:
            print(f"Error: {exc}")

    return 0


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "export":
        league = CricketLeague.from_snapshot(args.snapshot)
        output_path = args.output or _default_output_path(args.snapshot)
        print(league.save_to_file(output_path))
        return 0
    if args.command == "leaderboard":
        league = CricketLeague.from_snapshot(args.snapshot)
        if league.state.get_event(args.event_id) is None:
            print(f"Event {args.event_id} not found.")
            return 1
        _print_json(to_payload(league.get_leaderboard(args.event_id)))
        return 0
    if args.command == "import-players":
        league = CricketLeague.from_snapshot(args.snapshot)
        with open(args.file, "r", encoding="utf-8") as handle:
            raw_text = handle.read()
        result = league.import_players(args.event_id, raw_text)
        if not result.ok:
            print(result.error.message)
            return 1
        print(result.value.summary())
        for line_error in result.value.errors:
            print(line_error)
        if args.write:
            league.save_snapshot(args.snapshot)
        return 0
    if args.command == "app":
        return _run_app(args.snapshot)

    parser.print_help()
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
