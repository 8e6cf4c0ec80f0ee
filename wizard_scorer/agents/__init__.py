# wizard_scorer/agents/__init__.py
from .base import InputSource, NameSource
from .random_agent import RandomScoreAgent, SeatNames
from .console_agent import ConsoleInputSource, ConsoleNameSource

__all__ = [
    "InputSource",
    "NameSource",
    "RandomScoreAgent",
    "SeatNames",
    "ConsoleInputSource",
    "ConsoleNameSource",
]
