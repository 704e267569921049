import uvicorn

from vidproxy.config.settings import config


def main() -> None:
    uvicorn.run(
        "vidproxy.main:app",
        host=config.server.host,
        port=config.server.port,
        log_level=config.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
