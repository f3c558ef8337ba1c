from typing import Optional
import logging

import firebase_admin
from firebase_admin import credentials, firestore

from ....core.config import Settings

logger = logging.getLogger(__name__)


def init_firebase_app(settings: Settings) -> Optional["firebase_admin.App"]:
    try:
        if firebase_admin._apps:  # type: ignore[attr-defined]
            return list(firebase_admin._apps.values())[0]
        if not settings.FIREBASE_CLIENT_EMAIL or not settings.FIREBASE_PRIVATE_KEY or not settings.FIREBASE_PROJECT_ID:
            logger.warning("Firebase credentials are not configured; skipping initialization")
            return None
        cred = credentials.Certificate({
            "type": "service_account",
            "project_id": settings.FIREBASE_PROJECT_ID,
            "private_key": settings.firebase_private_key,
            "client_email": settings.FIREBASE_CLIENT_EMAIL,
            "token_uri": "https://oauth2.googleapis.com/token",
        })
        app = firebase_admin.initialize_app(cred, {"projectId": settings.FIREBASE_PROJECT_ID})
        logger.info("Firebase app initialized")
        return app
    except Exception as e:
        logger.error(f"Failed to initialize Firebase app: {e}")
        return None


def firestore_client(settings: Settings):
    """Firestore client for the configured project, or None when Firebase is unavailable."""
    app = init_firebase_app(settings)
    if app is None:
        return None
    return firestore.client(app=app)
