import multiprocessing
import os

# Gunicorn configuration file
# Run with: gunicorn -c gunicorn_conf.py todo_api.main:app

bind = os.environ.get("BIND", "0.0.0.0:8000")

# Worker configuration
# Standard formula: (2 x num_cores) + 1
workers = int(os.environ.get("WEB_CONCURRENCY", multiprocessing.cpu_count() * 2 + 1))
worker_class = "uvicorn.workers.UvicornWorker"

# Timeout and Keepalive
timeout = 120
keepalive = 5

# Logging
accesslog = "-" # Log to stdout
errorlog = "-"  # Log to stderr
loglevel = os.environ.get("LOG_LEVEL", "info").lower()

# Process management
name = "todo_api"
reload = False  # Set to True for development only
