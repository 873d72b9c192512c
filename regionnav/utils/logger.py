"""Logger utility module for logging messages with configurable logging levels and handlers."""
import logging
import os
from datetime import datetime

ROOT_LOGGER_NAME = 'RegionNav'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class Logger:
    """Singleton logger for the planners.

    All components log through children of the ``RegionNav`` logger, so a host
    application can silence or redirect the planners with a single switch.
    """
    _instance = None
    _initialized = False
    _logging_enabled = True
    _log_to_console = True
    _log_to_file = False

    @classmethod
    def configure(cls, logging_enabled=True, log_to_console=True, log_to_file=False):
        """Configure global logging settings.

        Must be called before the first ``get_logger`` call to take effect.

        Args:
            logging_enabled: Whether logging is enabled globally.
            log_to_console: Whether to output logs to console.
            log_to_file: Whether to output logs to a timestamped file under ``logs/``.
        """
        cls._logging_enabled = logging_enabled
        cls._log_to_console = log_to_console
        cls._log_to_file = log_to_file

    @classmethod
    def configure_from(cls, config):
        """Configure logging from the ``logging`` section of a Config."""
        cls.configure(
            logging_enabled=bool(config.get('logging.enabled', True)),
            log_to_console=bool(config.get('logging.to_console', True)),
            log_to_file=bool(config.get('logging.to_file', False)),
        )

    def __new__(cls):
        """Create or return the singleton instance of Logger."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Set up the root planner logger once, with handlers chosen by ``configure``."""
        if Logger._initialized:
            return

        self.logger = logging.getLogger(ROOT_LOGGER_NAME)
        if Logger._logging_enabled:
            self.logger.setLevel(logging.DEBUG)
            formatter = logging.Formatter(LOG_FORMAT)

            if Logger._log_to_file:
                if not os.path.exists('logs'):
                    os.makedirs('logs')
                current_time = datetime.now().strftime('%Y%m%d_%H%M%S')
                file_handler = logging.FileHandler(f'logs/regionnav_{current_time}.log')
                file_handler.setLevel(logging.DEBUG)
                file_handler.setFormatter(formatter)
                self.logger.addHandler(file_handler)

            if Logger._log_to_console:
                console_handler = logging.StreamHandler()
                console_handler.setLevel(logging.INFO)
                console_handler.setFormatter(formatter)
                self.logger.addHandler(console_handler)
        else:
            self.logger.addHandler(logging.NullHandler())
            self.logger.propagate = False

        Logger._initialized = True

    @staticmethod
    def get_logger(name=None):
        """Get the planner logger, optionally as a child logger with the specified name.

        Args:
            name: Optional name for child logger, e.g. ``'LocalPlanner'``.

        Returns:
            A configured logger instance.
        """
        logger_instance = Logger()
        if name:
            return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')
        return logger_instance.logger
