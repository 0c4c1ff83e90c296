import logging
import os
from logging.handlers import RotatingFileHandler
from app.core.config import settings

class LoggerConfig:
    """
    Sets up the shared backend logger: a rotating file under LOG_DIRECTORY
    plus console output, both at the level given by settings.LOGGER.
    """
    def __init__(
        self, env=20, logger_name="FamilyPlaces", log_directory="logs", log_file="places.log"
    ):
        try:
            self.logger_name = logger_name
            self.log_directory = os.path.abspath(log_directory)
            self.log_file_path = os.path.join(self.log_directory, log_file)
            self.env = env
            self.log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

            self.logger = logging.getLogger(self.logger_name)
            self.setup_logger()
        except Exception as e:
            print(f"Failed to initialize logger: {str(e)}")

    def setup_logger(self):
        try:
            os.makedirs(self.log_directory, exist_ok=True)
            formatter = logging.Formatter(self.log_format)

            file_handler = RotatingFileHandler(
                self.log_file_path, backupCount=5, maxBytes=1024 * 1024 * 10, encoding="utf-8"
            )
            console_handler = logging.StreamHandler()

            # Only our own handlers count here; uvicorn/pytest attach theirs to the root logger
            if not self.logger.handlers:
                for handler in (file_handler, console_handler):
                    handler.setLevel(self.env)
                    handler.setFormatter(formatter)
                    self.logger.addHandler(handler)

            self.logger.setLevel(self.env)

        except Exception as e:
            print(f"Failed to setup logger handlers: {str(e)}")

    def log(self, level: int, message: str, extra: dict = None):
        """Log `message`, appending `extra` as ` | {...}` when given."""
        if extra:
            message = f"{message} | {extra}"
        self.logger.log(level, message)

    def upstream_failure(self, service: str, error: Exception, extra: dict = None):
        """Record a failed call to Overpass / OSRM with the exception type."""
        self.log(logging.ERROR, f"{service} request failed: {type(error).__name__}: {error}", extra)

# Initialize Logger
logs = LoggerConfig(
    env=settings.LOGGER,
    logger_name="PLACES-BE",
    log_directory=settings.LOG_DIRECTORY,
    log_file="places.log"
)
