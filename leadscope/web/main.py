"""Web service launcher."""

import uvicorn

from leadscope.core.config import ConfigManager


def run_server(host: str = "127.0.0.1", port: int = 8000, reload: bool = False) -> None:
    uvicorn.run(
        "leadscope.web.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level="info",
    )


def leadscope_main() -> None:
    """Start the web service using ``LEADSCOPE_HOST``/``PORT``/``RELOAD``."""

    web = ConfigManager().get_config().web
    run_server(host=web.host, port=web.port, reload=web.reload)


if __name__ == "__main__":
    leadscope_main()
