"""
AnonBoard View Projector

Shapes stored threads and replies into client-visible dicts. Fields are
copied through an allow-list, so delete_password and reported can never
leak, and the stored objects are only read.
"""

from typing import Sequence

from ..db.models import Thread, Reply
from ..utils.formatting import format_timestamp

DEFAULT_PREVIEW_REPLIES = 3


def reply_view(reply: Reply) -> dict:
    """Project a reply to {id, text, created_on}."""
    return {
        "id": reply.id,
        "text": reply.text,
        "created_on": format_timestamp(reply.created_on_us),
    }


def _thread_base(thread: Thread) -> dict:
    return {
        "id": thread.id,
        "text": thread.text,
        "created_on": format_timestamp(thread.created_on_us),
        "bumped_on": format_timestamp(thread.bumped_on_us),
    }


def thread_list_view(
    thread: Thread,
    replies: Sequence[Reply],
    preview: int = DEFAULT_PREVIEW_REPLIES
) -> dict:
    """
    Project a thread for board listings.

    Args:
        thread: Stored thread
        replies: All of the thread's replies in creation order
        preview: How many of the newest replies to include

    Returns:
        {id, text, created_on, bumped_on, replycount, replies} where
        replycount is the full count and replies the last ``preview``
    """
    view = _thread_base(thread)
    view["replycount"] = len(replies)
    shown = replies[max(len(replies) - preview, 0):] if preview > 0 else []
    view["replies"] = [reply_view(r) for r in shown]
    return view


def thread_detail_view(thread: Thread, replies: Sequence[Reply]) -> dict:
    """Project a thread with every reply, in creation order."""
    view = _thread_base(thread)
    view["replies"] = [reply_view(r) for r in replies]
    return view
