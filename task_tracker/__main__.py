import logging
import sys

import uvicorn

from task_tracker.config import Settings, configure_logging
from task_tracker.main import create_app

logger = logging.getLogger("task_tracker")


def main():
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    app = create_app(settings)

    logger.info(f"Server starting on port {settings.port}...")
    # uvicorn exits non-zero on its own when lifespan startup fails.
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    if not app.state.clean_shutdown:
        sys.exit(1)


if __name__ == "__main__":
    main()
