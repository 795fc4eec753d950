import logging
import sys

from pythonjsonlogger.json import JsonFormatter

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s"

# loggers of the SDK's http stack, which report every retried request
NOISY_LOGGERS = ("urllib3", "urllib3.connectionpool")


def setup_logging(level: int | str = logging.INFO) -> logging.Logger:
    """
    Configures structured JSON logging for the uploader command.

    Records carry timestamp, level, logger name, message and the Datadog
    trace_id/span_id. The root logger gets a single stdout handler, and the
    urllib3 loggers are limited to errors so a retried upload is reported
    once by the uploader rather than once per attempt.

    Args:
        level: Root logger level, as a number or a name such as "DEBUG".

    Returns:
        logging.Logger: The configured root logger instance.
    """
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(JsonFormatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = []
    root_logger.addHandler(stream_handler)

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.ERROR)

    return root_logger
