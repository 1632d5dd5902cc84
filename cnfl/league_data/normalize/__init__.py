"""Normalization exports."""

from .players import BulkImportResult, normalize_bulk_players, parse_player_line

__all__ = [
    "BulkImportResult",
    "normalize_bulk_players",
    "parse_player_line",
]
