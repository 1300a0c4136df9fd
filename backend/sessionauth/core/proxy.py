"""WSGI proxy middleware configuration helper."""

from __future__ import annotations

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix


def init_app(app: Flask) -> None:
    """Trust ``X-Forwarded-*`` headers from ``PROXY_HOPS`` upstream proxies.

    ``PROXY_HOPS`` defaults to ``1``; ``0`` disables the middleware so a
    directly exposed process never trusts client-supplied forwarding headers.
    """
    hops = int(app.config.get("PROXY_HOPS", 1))
    if hops > 0:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=hops, x_proto=hops, x_host=hops)
