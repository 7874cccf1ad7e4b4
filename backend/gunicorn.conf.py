import os

# Bind & workers (wsgi entrypoint: "mediqueue:create_app()")
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
workers = int(os.getenv("GUNICORN_WORKERS", "2"))
threads = 1
timeout = 60
graceful_timeout = 30
keepalive = 5

# Logs to stdout/stderr; application records are already JSON
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Trust proxy headers (ProxyFix handles X-Forwarded-* in the app)
forwarded_allow_ips = "*"
proxy_protocol = False
