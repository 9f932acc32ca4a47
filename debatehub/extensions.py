# debatehub/extensions.py
from flask_socketio import SocketIO

# SocketIO will be initialized with proper async_mode in create_app()
socketio = SocketIO(cors_allowed_origins="*")
