"""
Gunicorn configuration for the store outreach API.

Env vars that override defaults:
  PORT     - TCP port to bind (default: 3000)
  WORKERS  - number of worker processes (default: 2)

Each worker holds its own response cache, so cached views are per process
until the TTL expires or the owner records an action on that worker.
"""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '3000')}"

workers = int(os.environ.get("WORKERS", "2"))

worker_class = "uvicorn.workers.UvicornWorker"

keepalive = 5

# Gateway reads are bounded by GATEWAY_TIMEOUT_SECONDS; leave headroom above it.
timeout = 90

loglevel = os.environ.get("LOG_LEVEL", "info").lower()
accesslog = "-"
errorlog = "-"
access_log_format = '%(h)s "%(r)s" %(s)s %(b)sB %(D)sµs'

graceful_timeout = 30
