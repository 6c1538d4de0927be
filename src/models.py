"""Data models for the terminal task tracker.

Exposes the Priority enum and the Task dataclass. Priority values are the
display/storage names ("High", "Medium", "Low") so the on-disk format stays
readable and compatible with older task files.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict


class Priority(Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def rank(self) -> int:
        """Sort rank used by listings: High=3, Medium=2, Low=1."""
        return _RANKS[self]

    @classmethod
    def parse(cls, text: str) -> "Priority":
        """Parse user or file input into a Priority.

        Accepts canonical names in any case plus single-letter aliases.
        Raises ValueError for anything else.
        """
        key = text.strip().lower()
        try:
            return PRIORITY_ALIASES[key]
        except KeyError:
            raise ValueError(f"unrecognised priority: {text!r}") from None

    def __str__(self) -> str:
        return self.value


_RANKS: Dict[Priority, int] = {Priority.HIGH: 3, Priority.MEDIUM: 2, Priority.LOW: 1}

PRIORITY_ALIASES: Dict[str, Priority] = {
    'h': Priority.HIGH,
    'high': Priority.HIGH,
    'm': Priority.MEDIUM,
    'medium': Priority.MEDIUM,
    'l': Priority.LOW,
    'low': Priority.LOW,
}


@dataclass
class Task:
    """A single task record.

    Fields:
        id: Positive integer, unique within the store and never reused.
        description: Non-empty text; only ever shortened for display.
        priority: One of the Priority members.
        completed: Set once by "mark completed"; there is no way back.
    """
    id: int
    description: str
    priority: Priority = Priority.MEDIUM
    completed: bool = False