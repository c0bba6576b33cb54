"""Simple admin session endpoints and the current-user loader."""

from __future__ import annotations

import logging

from flask import Blueprint, g, jsonify, request, session

from .. import config

auth_simple_bp = Blueprint("auth_simple", __name__)

logger = logging.getLogger(__name__)


@auth_simple_bp.before_app_request
def load_current_user() -> None:
    """Expose the logged-in user, if any, as ``g.current_user``."""

    user_id = session.get("user_id")
    if user_id is None:
        g.current_user = None
        return

    g.current_user = {
        "id": user_id,
        "username": session.get("username"),
        "role": "admin" if session.get("is_admin") else "user",
    }


@auth_simple_bp.post("/api/login")
def login():
    payload = request.get_json(silent=True) or {}
    username = str(payload.get("username", "")).strip()
    password = str(payload.get("password", ""))

    if username == config.ADMIN_USER and password == config.ADMIN_PASS:
        session.clear()
        session["is_admin"] = True
        session["user_id"] = config.ADMIN_ID
        session["username"] = config.ADMIN_USER
        session.permanent = False
        logger.info("Admin %s logged in", username)
        return (
            jsonify({
                "ok": True,
                "user": {
                    "id": config.ADMIN_ID,
                    "username": config.ADMIN_USER,
                    "role": "admin",
                },
            }),
            200,
        )

    session.clear()
    logger.info("Rejected login for %r", username)
    return jsonify({"message": "Invalid credentials"}), 401


@auth_simple_bp.post("/api/logout")
def logout():
    session.clear()
    return jsonify({"ok": True})


@auth_simple_bp.get("/api/me")
def me():
    user = g.get("current_user")
    return jsonify({"is_admin": bool(user and user["role"] == "admin"), "user": user})


__all__ = ["auth_simple_bp", "load_current_user"]
