"""
Gunicorn configuration for the Question Diary API.

    gunicorn -c gunicorn.conf.py question_diary.main:app

Env vars that override defaults:
  PORT      : TCP port to bind
  WORKERS   : number of worker processes (default: 2)
  LOG_LEVEL : gunicorn log level, shared with the application (default: info)
"""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Workers hold no state between requests; any of them can serve any user.
workers = int(os.environ.get("WORKERS", "2"))

# Each worker runs Uvicorn's ASGI event loop inside Gunicorn's process manager.
worker_class = "uvicorn.workers.UvicornWorker"

keepalive = 5

# Must exceed STORE_TIMEOUT_SECONDS so a slow store surfaces as STORE_TIMEOUT,
# not as a killed worker.
timeout = int(os.environ.get("WORKER_TIMEOUT", "30"))

# stdout only; application logs share the stream (see question_diary/core/logging_config.py).
loglevel = os.environ.get("LOG_LEVEL", "info").lower()
accesslog = "-"
errorlog = "-"
access_log_format = '%(h)s "%(r)s" %(s)s %(b)sB %(D)sµs'

graceful_timeout = 30
