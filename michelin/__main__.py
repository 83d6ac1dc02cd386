import uvicorn

from .config import DEFAULT_SERVICE_CONFIG, setup_logging


def run_server() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    setup_logging(DEFAULT_SERVICE_CONFIG.log_level)
    uvicorn.run(
        "michelin.app:app",
        host=DEFAULT_SERVICE_CONFIG.host,
        port=DEFAULT_SERVICE_CONFIG.port,
        log_level=DEFAULT_SERVICE_CONFIG.log_level.lower(),
    )


if __name__ == "__main__":
    run_server()
