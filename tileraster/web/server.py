"""Server entry point for the tileraster web API."""

import uvicorn

from tileraster.config import get_config


def main():
    """Main entry point for web server."""
    server = get_config().server
    uvicorn.run(
        "tileraster.web.api:app",  # Import string so reload works
        host=server.host,
        port=server.port,
        reload=server.reload,
        log_level="info",
    )


if __name__ == "__main__":
    main()
