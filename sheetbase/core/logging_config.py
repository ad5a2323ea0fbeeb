import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
HANDLER_NAME = "sheetbase"


def configure_logging(level: str = "INFO") -> None:
    """Настройка корневого логгера приложения"""
    root = logging.getLogger()
    root.setLevel(level.upper())

    # повторный вызов не должен дублировать обработчики
    if any(handler.get_name() == HANDLER_NAME for handler in root.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    # SQL-эхо управляется через DB_ECHO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
