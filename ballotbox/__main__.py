# ballotbox/__main__.py
# Run the election service with Flask's built-in server: python -m ballotbox

import atexit
import logging

from ballotbox import create_app, shutdown_app
from ballotbox.config import Config

logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)
logger = logging.getLogger(__name__)

if __name__ == "__main__":
    app = create_app(Config)
    atexit.register(shutdown_app, app)
    logger.info("Server starting on %s:%d", Config.HOST, Config.PORT)
    logger.info("API endpoints available at: http://%s:%d/api/", Config.HOST, Config.PORT)
    app.run(host=Config.HOST, port=Config.PORT, threaded=True)
