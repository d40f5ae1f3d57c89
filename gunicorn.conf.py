"""Gunicorn config for serving the Forensic Reader API."""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Indexes live in process memory and are mutated by uploads, so every worker
# would hold a different store. Keep exactly one.
worker_class = "uvicorn.workers.UvicornWorker"
workers = 1

# Parsing and querying have no timeout of their own; large uploads need room
timeout = 300

graceful_timeout = 30
keepalive = 65

# Logging
accesslog = "-"
errorlog = "-"
loglevel = "info"
