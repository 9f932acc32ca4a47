#!/usr/bin/env python3
"""
SSL-enabled server for deployments where browsers must reach the app over
HTTPS (microphone capture for voice clips is blocked on plain HTTP).
"""
import eventlet
eventlet.monkey_patch()
import logging
import os
import sys

from debatehub import create_app, socketio

logging.basicConfig(
    format='%(asctime)s [%(levelname)s] %(filename)s:%(lineno)d - %(message)s',
    level=logging.INFO
)
logger = logging.getLogger("ssl_run")

cert_path = os.environ.get('SSL_CERT_PATH', '/app/ssl/cert.pem')
key_path = os.environ.get('SSL_KEY_PATH', '/app/ssl/key.pem')

app = create_app()

if __name__ == '__main__':
    for label, path in (("certificate", cert_path), ("private key", key_path)):
        if not os.path.exists(path):
            logger.error("SSL %s not found at %s", label, path)
            sys.exit(1)
    port = app.config.get("PORT", 3000)
    logger.info("Starting with SSL on port %s: cert=%s, key=%s", port, cert_path, key_path)
    socketio.run(app, host="0.0.0.0", port=port, certfile=cert_path, keyfile=key_path)
