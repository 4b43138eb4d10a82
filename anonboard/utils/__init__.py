"""AnonBoard Utilities Module."""

from .formatting import format_timestamp, truncate

__all__ = ["format_timestamp", "truncate"]
