"""CORS configuration helper for the token endpoints."""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS


def init_app(app: Flask) -> None:
    """Configure CORS for ``/api/*`` based on ``CORS_ORIGINS``.

    Parameters
    ----------
    app: flask.Flask
        Application whose ``CORS_ORIGINS`` and ``CORS_MAX_AGE`` settings are
        consulted.

    Notes
    -----
    Only ``POST`` (plus the implicit preflight) is exposed since login,
    refresh and logout are the whole surface. A blank or ``"*"`` origin list
    allows any origin without credentials.
    """
    raw_origins = app.config.get("CORS_ORIGINS") or ""
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
    wildcard = not origins or origins == ["*"]

    CORS(
        app,
        resources={r"/api/*": {"origins": "*" if wildcard else origins}},
        methods=["GET", "POST", "OPTIONS"],
        expose_headers=["X-Request-ID"],
        supports_credentials=not wildcard,
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
