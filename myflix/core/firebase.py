import logging
from contextlib import contextmanager

import firebase_admin
from firebase_admin import credentials, firestore_async
from google.api_core.exceptions import GoogleAPICallError

from .config import Settings
from .exceptions import UpstreamFailure

logger = logging.getLogger(__name__)


def init_firestore(settings: Settings):
    """Initialize the Firebase app once and return an async Firestore client"""
    try:
        firebase_app = firebase_admin.get_app()
    except ValueError:
        creds_path = settings.FIREBASE_CREDS_PATH_ABSOLUTE
        if creds_path is not None:
            cred = credentials.Certificate(str(creds_path))
        else:
            cred = credentials.ApplicationDefault()
        options = {"projectId": settings.FIREBASE_PROJECT_ID} if settings.FIREBASE_PROJECT_ID else None
        firebase_app = firebase_admin.initialize_app(cred, options)
        logger.info("Firebase app initialized")
    return firestore_async.client(firebase_app)


@contextmanager
def store_errors(action: str):
    """Map Firestore call failures to UpstreamFailure"""
    try:
        yield
    except GoogleAPICallError as e:
        logger.exception(f"Firestore call failed while trying to {action}")
        raise UpstreamFailure(f"Failed to {action}") from e
