"""
AnonBoard Data Models

Dataclasses representing stored entities. Privileged fields
(delete_password, reported) live here and only here; client-facing
shapes are produced by core.views.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Board:
    """Named container of threads."""
    id: Optional[int] = None
    name: str = ""
    created_on_us: int = 0
    thread_ids: list[str] = field(default_factory=list)  # insertion order


@dataclass
class Thread:
    """Top-level discussion post."""
    id: str = ""
    text: str = ""
    created_on_us: int = 0
    bumped_on_us: int = 0
    delete_password: str = ""
    reported: bool = False
    reply_ids: list[str] = field(default_factory=list)  # insertion order


@dataclass
class Reply:
    """Child post attached to a thread."""
    id: str = ""
    text: str = ""
    created_on_us: int = 0
    delete_password: str = ""
    reported: bool = False
