"""
Gunicorn configuration for the habit tracker API.

Tuned for single-instance containers.
Env vars that override defaults:
  PORT     : TCP port to bind
  WORKERS  : number of worker processes (default: 2)

Run with:  gunicorn habitlog.main:app -c gunicorn.conf.py
"""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# 2 workers fit a 512 MB container; SQLite deployments should use 1.
workers = int(os.environ.get("WORKERS", "2"))

# Uvicorn's ASGI event loop inside Gunicorn's process manager.
worker_class = "uvicorn.workers.UvicornWorker"

keepalive = 5

# Kill a worker that hasn't responded in 120 s.
timeout = 120

# stdout only; the app logs through the same stream (habitlog.core.logging).
loglevel = os.environ.get("LOG_LEVEL", "info").lower()
accesslog = "-"
errorlog = "-"
access_log_format = '%(h)s "%(r)s" %(s)s %(b)sB %(D)sµs'

graceful_timeout = 30
