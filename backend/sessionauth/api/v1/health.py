"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from sessionauth.api.deps import get_auth_facade, json_response, timing
from sessionauth.core.extensions import db

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """Report credential-store and ledger reachability."""

    db_status = "ok"
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        current_app.logger.exception("healthcheck.db_error")
        db_status = "fail"

    ledger_status = "ok"
    try:
        ledger = get_auth_facade().ledger
        # process-local ledgers have no probe and are always reachable
        ping = getattr(ledger, "ping", None)
        if ping is not None and not ping():
            ledger_status = "fail"
    except RuntimeError:
        current_app.logger.exception("healthcheck.ledger_error")
        ledger_status = "fail"

    healthy = db_status == "ok" and ledger_status == "ok"
    payload = {
        "status": "ok" if healthy else "degraded",
        "db": db_status,
        "ledger": ledger_status,
        "version": current_app.config.get("APP_VERSION", "dev"),
    }
    return json_response(payload, status=200 if healthy else 503)
