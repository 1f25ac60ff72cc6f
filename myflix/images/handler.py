import json
import logging

from ..core.config import get_settings
from ..core.logging_config import configure_logging
from .pipeline import handle_event
from .storage import ObjectStorage

logger = logging.getLogger(__name__)


def handler(event, context=None):
    """Entry point for the bucket's object-created notification"""
    settings = get_settings()
    configure_logging(settings)
    logger.info(f"Event received: {json.dumps(event, indent=2, default=str)}")
    return handle_event(event, ObjectStorage.from_settings(settings), settings)
