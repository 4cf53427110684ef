"""
Firebase Admin SDK utilities for ID token verification.
"""
import os
import logging
from typing import Optional

from django.conf import settings

import firebase_admin
from firebase_admin import credentials, auth

logger = logging.getLogger(__name__)


_app = None


def initialize_firebase() -> Optional[firebase_admin.App]:
    """
    Initialize Firebase Admin SDK.

    Returns:
        Firebase app instance or None if initialization fails
    """
    global _app

    if _app is not None:
        return _app

    cred_path = getattr(settings, 'FIREBASE_CREDENTIALS', '') or os.environ.get('FIREBASE_CREDENTIALS')

    if not cred_path:
        logger.warning("FIREBASE_CREDENTIALS is not set")
        return None

    if not os.path.exists(cred_path):
        logger.error(f"Firebase credentials file not found at: {cred_path}")
        return None

    try:
        cred = credentials.Certificate(cred_path)
        _app = firebase_admin.initialize_app(cred)
        logger.info("Firebase Admin SDK initialized successfully")
        return _app
    except (ValueError, IOError) as e:
        logger.error(f"Failed to initialize Firebase: {e}")
        return None


def verify_firebase_token(id_token: str) -> Optional[dict]:
    """
    Verify a Firebase ID token.

    Args:
        id_token: Firebase ID token from client

    Returns:
        Decoded token claims or None if verification fails
    """
    if initialize_firebase() is None:
        return None

    try:
        return auth.verify_id_token(id_token)
    except (ValueError, auth.InvalidIdTokenError, auth.ExpiredIdTokenError,
            auth.RevokedIdTokenError, auth.CertificateFetchError) as e:
        logger.error(f"Token verification failed: {e}")
        return None
