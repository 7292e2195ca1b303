"""Process bootstrap run once before the application object is created."""

from dotenv import load_dotenv

from src.core.config.settings import settings
from src.core.logging import configure_logging


def initialize_application() -> None:
    """Exports the ``.env`` file into the process environment and sets up structlog.

    Values already in the environment are kept, so container-provided
    configuration beats the file.
    """
    load_dotenv(override=False)
    configure_logging(log_level=settings.LOG_LEVEL, json_logs=settings.LOG_JSON)
