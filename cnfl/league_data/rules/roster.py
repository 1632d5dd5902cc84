"""Roster rules for drafting an XI and for single-player swaps.

Both validators are pure: they resolve selections against the player lookup,
count what they see and return a ``RosterReport`` with one ``RuleCheck`` per
rule. Nothing here raises for bad input; an incomplete or unknown selection
simply fails the relevant rule.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Literal, Mapping, Optional, Sequence

from pydantic import BaseModel, Field

from ..schema.models import Event, ParticipantTeam, Player, PlayerCategory, PlayerType, RosterSlot

ROSTER_SIZE = 11
MIN_WICKETKEEPERS = 1
MIN_BOWLERS = 2
MIN_BOWL_CAPABLE = 5

PLAYER_COUNT = "player_count"
VIP_COUNT = "vip_count"
SINGLE_TEAM = "single_team"
FOREIGN_COUNT = "foreign_count"
WICKETKEEPERS = "wicketkeepers"
BOWLERS = "bowlers"
BOWL_CAPABLE = "bowl_capable"


class RuleCheck(BaseModel):
    """Outcome of a single roster rule."""

    rule: str = Field(description="Stable rule key, e.g. 'wicketkeepers'")
    label: str = Field(description="Human-readable rule name")
    passed: bool
    count: int = Field(description="Observed value")
    bound: Optional[int] = Field(
        default=None, description="Limit the count is compared with; None means unlimited"
    )
    kind: Literal["exact", "min", "max"]
    message: str = Field(default="", description="Reason shown when the rule fails")

    def display(self) -> str:
        """Render as ``count/bound``, e.g. ``3/2``."""
        bound = "-" if self.bound is None else str(self.bound)
        return f"{self.count}/{bound}"


class RosterReport(BaseModel):
    checks: list[RuleCheck] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(check.passed for check in self.checks)

    @property
    def failures(self) -> list[RuleCheck]:
        return [check for check in self.checks if not check.passed]

    @property
    def first_error(self) -> Optional[str]:
        for check in self.checks:
            if not check.passed:
                return check.message
        return None

    def get(self, rule: str) -> Optional[RuleCheck]:
        for check in self.checks:
            if check.rule == rule:
                return check
        return None


def _min_check(rule: str, label: str, count: int, bound: int, message: str) -> RuleCheck:
    return RuleCheck(
        rule=rule, label=label, passed=count >= bound, count=count, bound=bound,
        kind="min", message=message,
    )


def _max_check(
    rule: str, label: str, count: int, bound: Optional[int], message: str
) -> RuleCheck:
    passed = bound is None or count <= bound
    return RuleCheck(
        rule=rule, label=label, passed=passed, count=count, bound=bound,
        kind="max", message=message,
    )


def _category_counts(details: Sequence[Player]) -> tuple[int, int, int]:
    wicketkeepers = sum(1 for p in details if p.category == PlayerCategory.WICKETKEEPER)
    bowlers = sum(1 for p in details if p.category == PlayerCategory.BOWLER)
    bowl_capable = sum(1 for p in details if p.is_bowl_capable)
    return wicketkeepers, bowlers, bowl_capable


def _max_from_single_team(details: Sequence[Player]) -> int:
    return max(Counter(p.team_id for p in details).values(), default=0)


def _foreign_count(details: Sequence[Player]) -> int:
    return sum(1 for p in details if p.player_type == PlayerType.FOREIGN)


def _resolve(
    player_ids: Iterable[str], players: Mapping[str, Player]
) -> list[Player]:
    return [players[pid] for pid in player_ids if pid in players]


def distinct_slots(selections: Iterable[Optional[RosterSlot]]) -> list[RosterSlot]:
    """Assigned slots with repeated player ids dropped (first occurrence wins)."""
    seen: set[str] = set()
    slots: list[RosterSlot] = []
    for slot in selections:
        if slot is None or not slot.player_id or slot.player_id in seen:
            continue
        seen.add(slot.player_id)
        slots.append(slot)
    return slots


def validate_roster(
    event: Event,
    selections: Iterable[Optional[RosterSlot]],
    players: Mapping[str, Player],
) -> RosterReport:
    """Check a drafted XI against every rule of ``event``.

    ``selections`` may hold ``None`` for slots not yet assigned. Checks are
    ordered the way a submission reports its first failure.
    """
    slots = distinct_slots(selections)
    details = _resolve((slot.player_id for slot in slots), players)
    vip_count = sum(1 for slot in slots if slot.is_vip)
    wicketkeepers, bowlers, bowl_capable = _category_counts(details)

    checks = [
        RuleCheck(
            rule=PLAYER_COUNT,
            label="Players Selected",
            passed=len(slots) == ROSTER_SIZE,
            count=len(slots),
            bound=ROSTER_SIZE,
            kind="exact",
            message=f"You must select exactly {ROSTER_SIZE} players.",
        ),
        _max_check(
            VIP_COUNT, "VIP Players", vip_count, event.max_vip_players,
            f"You can select a maximum of {event.max_vip_players} VIP players.",
        ),
        _max_check(
            SINGLE_TEAM, "Max from one team", _max_from_single_team(details),
            event.max_players_from_single_team,
            f"You can select a maximum of {event.max_players_from_single_team} "
            "players from a single real-life team.",
        ),
    ]
    if event.is_domestic:
        checks.append(
            _max_check(
                FOREIGN_COUNT, "Foreign Players", _foreign_count(details),
                event.max_foreign_players,
                f"You can select a maximum of {event.max_foreign_players} foreign players.",
            )
        )
    checks.extend(
        [
            _min_check(
                WICKETKEEPERS, "Wicketkeepers", wicketkeepers, MIN_WICKETKEEPERS,
                "You must have at least one Wicketkeeper.",
            ),
            _min_check(
                BOWLERS, "Bowlers", bowlers, MIN_BOWLERS,
                "You must have at least two dedicated Bowlers.",
            ),
            _min_check(
                BOWL_CAPABLE, "Bowl Capable", bowl_capable, MIN_BOWL_CAPABLE,
                "You must have at least 5 players who can bowl (Bowlers or All-rounders).",
            ),
        ]
    )
    return RosterReport(checks=checks)


def validate_swap(
    event: Event,
    team: ParticipantTeam,
    outgoing_id: str,
    incoming_id: str,
    players: Mapping[str, Player],
) -> RosterReport:
    """Check the roster that would result from swapping one player for another.

    Only the composition rules are evaluated; a one-for-one swap cannot change
    the roster size or the VIP count.
    """
    swapped_ids = [incoming_id if pid == outgoing_id else pid for pid in team.player_ids]
    details = _resolve(swapped_ids, players)
    wicketkeepers, bowlers, bowl_capable = _category_counts(details)

    incoming = players.get(incoming_id)
    team_label = incoming.team_name if incoming is not None else "a single team"

    checks = [
        _min_check(
            WICKETKEEPERS, "Wicketkeepers", wicketkeepers, MIN_WICKETKEEPERS,
            "Invalid request: Team must have at least one Wicketkeeper.",
        ),
        _min_check(
            BOWLERS, "Bowlers", bowlers, MIN_BOWLERS,
            "Invalid request: Team must have at least two dedicated Bowlers.",
        ),
        _min_check(
            BOWL_CAPABLE, "Bowl Capable", bowl_capable, MIN_BOWL_CAPABLE,
            "Invalid request: Team must have at least 5 bowl-capable players.",
        ),
        _max_check(
            SINGLE_TEAM, "Max from one team", _max_from_single_team(details),
            event.max_players_from_single_team,
            "Invalid request: This would result in more than "
            f"{event.max_players_from_single_team} players from {team_label}.",
        ),
    ]
    if event.is_domestic:
        checks.append(
            _max_check(
                FOREIGN_COUNT, "Foreign Players", _foreign_count(details),
                event.max_foreign_players,
                "Invalid request: This would result in more than "
                f"{event.max_foreign_players} foreign players in your team.",
            )
        )
    return RosterReport(checks=checks)
