import os
import logging
from datetime import datetime
import structlog

# Module-level state so handlers and structlog are configured once per process
_logging_configured = False
_shared_log_file_path = None
_structlog_configured = False


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() not in ("0", "false", "no", "off", "")


class CustomLogger:
    def __init__(self, log_dir=None, level=None, to_file=None):
        self.log_dir = os.path.join(os.getcwd(), log_dir or os.getenv("LOG_DIR", "logs"))
        self.level = logging.getLevelName((level or os.getenv("LOG_LEVEL", "INFO")).upper())
        if not isinstance(self.level, int):
            self.level = logging.INFO
        self.to_file = _env_flag("LOG_TO_FILE", True) if to_file is None else to_file

        # One time-stamped file shared by every logger in the process
        global _shared_log_file_path
        if self.to_file and _shared_log_file_path is None:
            os.makedirs(self.log_dir, exist_ok=True)
            log_file = f"{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
            _shared_log_file_path = os.path.join(self.log_dir, log_file)

        self.log_file_path = _shared_log_file_path

    def get_logger(self, name=__file__):
        logger_name = os.path.basename(name)

        global _logging_configured, _structlog_configured

        if not _logging_configured:
            root_logger = logging.getLogger()
            root_logger.setLevel(self.level)

            if self.to_file and self.log_file_path:
                normalized_log_path = os.path.normpath(os.path.abspath(self.log_file_path))
                has_file_handler = any(
                    isinstance(h, logging.FileHandler)
                    and os.path.normpath(os.path.abspath(h.baseFilename)) == normalized_log_path
                    for h in root_logger.handlers
                )
                if not has_file_handler:
                    file_handler = logging.FileHandler(self.log_file_path, mode="a", encoding="utf-8")
                    file_handler.setLevel(self.level)
                    file_handler.setFormatter(logging.Formatter("%(message)s"))
                    root_logger.addHandler(file_handler)

            has_console_handler = any(
                isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
                for h in root_logger.handlers
            )
            if not has_console_handler:
                console_handler = logging.StreamHandler()
                console_handler.setLevel(self.level)
                console_handler.setFormatter(logging.Formatter("%(message)s"))
                root_logger.addHandler(console_handler)

            _logging_configured = True

        if not _structlog_configured:
            structlog.configure(
                processors=[
                    structlog.stdlib.filter_by_level,
                    structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
                    structlog.processors.add_log_level,
                    structlog.processors.EventRenamer(to="event"),
                    structlog.processors.JSONRenderer(),
                ],
                logger_factory=structlog.stdlib.LoggerFactory(),
                cache_logger_on_first_use=True,
            )
            _structlog_configured = True

        return structlog.get_logger(logger_name)


if __name__ == "__main__":
    logger = CustomLogger(to_file=False).get_logger(__file__)
    logger.info("Fastembed model loaded", model="BAAI/bge-small-en-v1.5", ndims=384)
    logger.error("Fastembed embed failed", error="ONNX runtime error", n_documents=3)
