# run.py
import eventlet
eventlet.monkey_patch()
import logging
from debatehub import create_app, socketio

app = create_app()

# Configure logging to include line number
logging.basicConfig(
    format='%(asctime)s [%(levelname)s] %(filename)s:%(lineno)d - %(message)s',
    level=logging.INFO
)


if __name__ == "__main__":
    port = app.config.get("PORT", 3000)
    app.logger.info(f"Server running on port {port}")
    socketio.run(app, host="0.0.0.0", port=port)
