import base64
import logging
from typing import Any, Dict

import requests

from ..config import SpotifyCredentials
from ..errors import UpstreamError

logger = logging.getLogger(__name__)

SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"


def _error_body(resp: requests.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text


class SpotifyTokenService:
    """Exchange the client credentials for an app access token."""

    def __init__(self, credentials: SpotifyCredentials, session: requests.Session, timeout: float):
        self.credentials = credentials
        self.session = session
        self.timeout = timeout

    def auth_header(self) -> Dict[str, str]:
        creds = f"{self.credentials.client_id}:{self.credentials.client_secret}".encode("utf-8")
        return {"Authorization": f"Basic {base64.b64encode(creds).decode('ascii')}"}

    def fetch_token(self) -> Dict[str, Any]:
        """Run the client-credentials grant and return Spotify's payload untouched."""
        headers = {
            **self.auth_header(),
            "Content-Type": "application/x-www-form-urlencoded",
        }
        try:
            resp = self.session.post(
                SPOTIFY_TOKEN_URL,
                data={"grant_type": "client_credentials"},
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("Spotify token request failed: %s", exc)
            raise UpstreamError(f"Spotify token request failed: {exc}") from exc

        if not 200 <= resp.status_code < 300:
            details = _error_body(resp)
            logger.error("Spotify API error: %s %s %s", resp.status_code, resp.reason, details)
            raise UpstreamError(
                f"Spotify API error: {resp.status_code} {resp.reason}",
                status=resp.status_code,
                details=details,
            )

        try:
            payload = resp.json()
        except ValueError as exc:
            logger.error("Spotify returned a non-JSON token body: %r", resp.text[:200])
            raise UpstreamError("Spotify returned a non-JSON token body", status=resp.status_code) from exc

        logger.info("Successfully fetched token from Spotify.")
        return payload
