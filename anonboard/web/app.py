"""
AnonBoard HTTP Transport

Flask application exposing the board operations under /api/threads and
/api/replies. Form-encoded and JSON bodies are both accepted.
"""

import logging
from urllib.parse import quote

from flask import Blueprint, Flask, current_app, jsonify, redirect, request

from ..core.board import MessageBoard
from ..core.threads import check_string
from ..errors import (
    BoardError,
    IncorrectCredentialError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)

api = Blueprint("api", __name__, url_prefix="/api")

STATUS_CODES = {
    NotFoundError: 404,
    IncorrectCredentialError: 400,
    ValidationError: 400,
    StoreUnavailableError: 503,
}


def _board() -> MessageBoard:
    return current_app.extensions["anonboard"]


def _payload() -> dict:
    """Request body fields, from JSON or form data."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def _field(data: dict, name: str) -> str:
    """Optional string field; JSON numbers, lists and the like are rejected."""
    value = data.get(name, "")
    if value is None:
        return ""
    check_string(value, name)
    return value


def _require(data: dict, name: str) -> str:
    value = _field(data, name)
    if not value:
        raise ValidationError(f"{name} is required")
    return value


# === /api/threads/<board> ===

@api.post("/threads/<board>")
async def create_thread(board):
    data = _payload()
    await _board().create_thread(board, _field(data, "text"), _field(data, "delete_password"))
    return redirect(f"/b/{quote(board)}/", code=302)


@api.get("/threads/<board>")
async def list_threads(board):
    threads = await _board().list_threads(board)
    return jsonify(threads)


@api.delete("/threads/<board>")
async def delete_thread(board):
    data = _payload()
    thread_id = _require(data, "thread_id")
    await _board().delete_thread(thread_id, _field(data, "delete_password"))
    return "success"


@api.put("/threads/<board>")
async def report_thread(board):
    data = _payload()
    thread_id = _field(data, "thread_id") or _require(data, "report_id")
    await _board().report_thread(thread_id)
    return "success"


# === /api/replies/<board> ===

@api.post("/replies/<board>")
async def create_reply(board):
    data = _payload()
    thread_id = _require(data, "thread_id")
    await _board().create_reply(thread_id, _field(data, "text"), _field(data, "delete_password"))
    return redirect(f"/b/{quote(board)}/{quote(thread_id)}", code=302)


@api.get("/replies/<board>")
async def get_thread(board):
    thread_id = request.args.get("thread_id", "")
    if not thread_id:
        raise ValidationError("thread_id is required")
    thread = await _board().get_thread_with_replies(thread_id)
    return jsonify(thread)


@api.delete("/replies/<board>")
async def redact_reply(board):
    data = _payload()
    thread_id = _require(data, "thread_id")
    reply_id = _require(data, "reply_id")
    await _board().redact_reply(thread_id, reply_id, _field(data, "delete_password"))
    return "success"


@api.put("/replies/<board>")
async def report_reply(board):
    data = _payload()
    reply_id = _require(data, "reply_id")
    await _board().report_reply(reply_id)
    return "success"


def handle_board_error(error: BoardError):
    """Map a board error to its response."""
    status = STATUS_CODES.get(type(error), 500)
    if status >= 500:
        logger.error(f"{request.method} {request.path} failed: {error.message}")

    body = error.message if isinstance(error, ValidationError) else error.outcome
    return body, status


def create_app(board: MessageBoard) -> Flask:
    """
    Build the Flask application around a set-up MessageBoard.

    Args:
        board: MessageBoard whose setup() has already run
    """
    app = Flask(__name__)
    app.extensions["anonboard"] = board
    app.register_blueprint(api)
    app.register_error_handler(BoardError, handle_board_error)
    return app
