"""Verification of Google Identity Services ID tokens."""
import logging
from typing import Dict, Optional

import httpx

from scripture_api.config import get_settings
from scripture_api.utils.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


class GoogleAuthService:
    """Checks ID tokens against Google's tokeninfo endpoint."""

    TOKENINFO_URL = "https://oauth2.googleapis.com/tokeninfo"

    @staticmethod
    def is_configured() -> bool:
        return bool(get_settings().google_client_id)

    @staticmethod
    async def verify_id_token(credential: str) -> Optional[Dict[str, str]]:
        """
        Verify a Google ID token.

        Returns:
            {'sub', 'email', 'name', 'picture'} for a valid token issued to
            this app's client id, otherwise None.

        Raises:
            ExternalServiceError: Google could not be reached.
        """
        settings = get_settings()

        try:
            async with httpx.AsyncClient(timeout=settings.external_request_timeout) as client:
                response = await client.get(
                    GoogleAuthService.TOKENINFO_URL,
                    params={"id_token": credential},
                )
        except httpx.TimeoutException as exc:
            logger.warning("Google token verification timed out")
            raise ExternalServiceError("Google authentication unavailable") from exc
        except httpx.HTTPError as exc:
            logger.error(f"Error contacting Google token endpoint: {exc}")
            raise ExternalServiceError("Google authentication unavailable") from exc

        if response.status_code != 200:
            logger.warning(f"Google tokeninfo returned status {response.status_code}")
            return None

        payload = response.json()
        if payload.get("aud") != settings.google_client_id:
            logger.warning("Google token audience does not match the configured client id")
            return None

        if not payload.get("sub") or not payload.get("email"):
            logger.warning("Google token is missing the subject or email claim")
            return None

        return {
            "sub": payload["sub"],
            "email": payload["email"],
            "name": payload.get("name"),
            "picture": payload.get("picture"),
        }


def get_google_auth_service() -> GoogleAuthService:
    """Dependency injector for Google auth service."""
    return GoogleAuthService()
