import uvicorn

from sheetbase.core.config import settings


def main() -> None:
    uvicorn.run("sheetbase.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
