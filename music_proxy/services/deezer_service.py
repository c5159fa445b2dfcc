import logging
from typing import Optional

import requests

from ..errors import UpstreamError

logger = logging.getLogger(__name__)

DEEZER_SEARCH_URL = "https://api.deezer.com/search"


def build_query(track: str, artist: str) -> str:
    return f'artist:"{artist}" track:"{track}"'


class DeezerPreviewService:
    """Look up a 30 second preview clip through Deezer's public search."""

    def __init__(self, session: requests.Session, timeout: float):
        self.session = session
        self.timeout = timeout

    def find_preview(self, track: str, artist: str) -> Optional[str]:
        """Return the first match's preview URL. An empty preview is reported as None."""
        params = {"q": build_query(track, artist), "limit": 1}
        try:
            resp = self.session.get(DEEZER_SEARCH_URL, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("Deezer fetch error: %s", exc)
            raise UpstreamError(f"Deezer request failed: {exc}") from exc

        if not 200 <= resp.status_code < 300:
            logger.error("Deezer API error: %s %s", resp.status_code, resp.text[:200])
            raise UpstreamError(f"Deezer API error: {resp.status_code}", status=resp.status_code)

        try:
            payload = resp.json()
        except ValueError as exc:
            logger.error("Deezer returned a non-JSON body: %r", resp.text[:200])
            raise UpstreamError("Deezer returned a non-JSON body", status=resp.status_code) from exc

        results = payload.get("data") if isinstance(payload, dict) else None
        preview_url = None
        if isinstance(results, list) and results:
            first = results[0]
            if isinstance(first, dict):
                preview_url = first.get("preview") or None

        if preview_url:
            logger.info("Found preview URL: %s", preview_url)
        else:
            logger.info("No preview URL found for %s by %s.", track, artist)
        return preview_url
