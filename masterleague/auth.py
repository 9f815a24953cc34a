"""
Admin password check for the login endpoint
Glue only: one shared password from the environment, no sessions
"""

import hmac
import logging
import os
from typing import Optional

from dotenv import load_dotenv

# Load .env file
load_dotenv()

logger = logging.getLogger(__name__)

_DEV_PASSWORD = "dev-password-insecure"


def get_admin_password() -> Optional[str]:
    """Return the configured admin password, or None if login is disabled."""
    password = os.getenv("ADMIN_PASSWORD")
    if password:
        return password

    # Development fallback (never use in production)
    if os.getenv("ENVIRONMENT") == "development":
        return _DEV_PASSWORD

    return None


def check_admin_password(candidate: Optional[str]) -> bool:
    """Constant-time comparison against ADMIN_PASSWORD."""
    expected = get_admin_password()
    if expected is None:
        logger.warning("Admin login attempted but ADMIN_PASSWORD is not set")
        return False
    if not candidate:
        return False
    return hmac.compare_digest(candidate.encode("utf-8"), expected.encode("utf-8"))
