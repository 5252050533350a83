"""Gunicorn config for container deployment."""
import os

# Bind to the platform's PORT or default 8000
bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# The dataset lives in process memory: a second worker would hold a different
# dataset and uploads would land on whichever worker took the request.
worker_class = "uvicorn.workers.UvicornWorker"
workers = 1

# Large spreadsheet uploads are decoded in the request
timeout = 120

# Graceful timeout for shutdown
graceful_timeout = 30

# Keep-alive must exceed the proxy keep-alive (commonly 60s)
keepalive = 65

# Logging
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("SALES_DASHBOARD_LOG_LEVEL", "info").lower()
