import os

# App
wsgi_app = "sessionauth:create_app()"

# Bind & workers; every worker shares the same Redis ledger
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
workers = int(os.getenv("GUNICORN_WORKERS", "2"))
threads = int(os.getenv("GUNICORN_THREADS", "4"))
timeout = 30
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr (collected by Docker)
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Proxy headers are handled by ProxyFix (PROXY_HOPS)
forwarded_allow_ips = "*"
proxy_protocol = False
