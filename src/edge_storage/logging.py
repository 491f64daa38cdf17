import logging
import sys

from pythonjsonlogger import jsonlogger


def setup_logging(level: str | int = logging.INFO) -> logging.Logger:
    """
    Configures structured JSON logging for the storage services.

    Installs a single stdout handler with a JSON formatter that includes
    timestamp, level, logger name and message. Any ``extra`` fields passed by
    the services (key, prefix, service, duration_ms...) are emitted as JSON
    attributes. Existing root handlers are replaced, so calling this twice
    does not duplicate output.

    Args:
        level: Log level applied to the root logger.

    Returns:
        logging.Logger: The configured root logger instance.
    """
    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s"
    )
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = []
    root_logger.addHandler(stream_handler)

    return root_logger
