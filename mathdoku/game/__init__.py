"""Game module: edit history, text definitions and playing sessions."""

from .history import Edit, EditHistory
from .loader import parse_puzzle, load_puzzle_file, to_text
from .session import GameSession

__all__ = ["Edit", "EditHistory", "parse_puzzle", "load_puzzle_file", "to_text", "GameSession"]
