"""Run the numbuf server: python -m numbuf.server"""

import uvicorn

from numbuf.config import LOG_LEVEL, SERVER_HOST, SERVER_PORT
from numbuf.logging_config import setup_logging
from numbuf.server.app import app

setup_logging(LOG_LEVEL)
uvicorn.run(app, host=SERVER_HOST, port=SERVER_PORT)
