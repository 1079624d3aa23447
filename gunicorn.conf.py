# gunicorn.conf.py
import os
import logging
import sys
import multiprocessing

wsgi_app = 'app:app'

accesslog = '-'
errorlog = '-'
loglevel = os.getenv('LOG_LEVEL', 'info').lower()

port = os.getenv('PORT', '8080')
bind = f"0.0.0.0:{port}"

# Each worker holds its own copy of every loaded translation, so keep the
# worker count low and let threads share the in-memory cache
cores = multiprocessing.cpu_count()
workers = int(os.getenv('WEB_CONCURRENCY', min(cores, 4)))
threads = int(os.getenv('GUNICORN_THREADS', 8))
worker_class = "gthread"

def on_starting(server):
    logger = logging.getLogger('gunicorn.error')
    logger.setLevel(logging.INFO)
    logger.addHandler(logging.StreamHandler(sys.stdout))
    logger.info(f"Starting gunicorn with {workers} workers x {threads} threads on port {port}")

timeout = 120  # first load of a large translation can be slow
keepalive = 5
graceful_timeout = 30

proc_name = "bible_passages"
