"""Run the conversion server: ``python -m server``."""

import uvicorn

from lakebook2md.utils.logging_config import configure_logging, get_logger
from server.server_config import SERVER_HOST, SERVER_PORT, SERVER_RELOAD

logger = get_logger(__name__)


def main() -> None:
    configure_logging()
    logger.info(
        "Starting lakebook2md server",
        extra={"host": SERVER_HOST, "port": SERVER_PORT, "reload": SERVER_RELOAD},
    )
    # uvicorn keeps its own handlers off; records flow through ours.
    uvicorn.run(
        "server.main:app",
        host=SERVER_HOST,
        port=SERVER_PORT,
        reload=SERVER_RELOAD,
        log_config=None,
    )


if __name__ == "__main__":
    main()
