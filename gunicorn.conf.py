# gunicorn -c gunicorn.conf.py run:app
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '3000')}"

# Socket.IO requires single worker with eventlet; rooms and polls live in process memory
workers = 1
worker_class = 'eventlet'

worker_connections = 1000
timeout = 120
keepalive = 2
preload_app = True

# Logging
accesslog = '-'
errorlog = '-'
loglevel = 'info'
