"""
WoW Guild Cache - Main Application
"""

from .core.config import get_settings
from .presentation.api import create_app
from .utils import setup_logging

settings = get_settings()

# Configure logging
setup_logging(settings.log_level)

app = create_app(settings)
