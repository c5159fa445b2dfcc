import logging
import sys
from typing import Optional

import requests
from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .config import ProxyConfig, load_config
from .errors import ConfigError, UpstreamError
from .logging_setup import setup_logging
from .services.deezer_service import DeezerPreviewService
from .services.spotify_service import SpotifyTokenService

logger = logging.getLogger(__name__)

TOKEN_ERROR = "Failed to fetch token from Spotify"
PREVIEW_ERROR = "Failed to fetch preview from Deezer"
MISSING_PREVIEW_PARAMS = "Missing track or artist name"


def create_app(config: ProxyConfig, session: Optional[requests.Session] = None) -> Flask:
    """Build the proxy app. ``session`` is the outbound HTTP client, swappable in tests."""
    app = Flask(__name__)
    # The front end is served from another origin/port.
    CORS(app, resources={r"/*": {"origins": "*"}}, send_wildcard=True)

    http = session or requests.Session()
    spotify = SpotifyTokenService(config.credentials, http, timeout=config.upstream_timeout)
    deezer = DeezerPreviewService(http, timeout=config.upstream_timeout)

    @app.route("/api/get-spotify-token", methods=["GET"])
    def get_spotify_token():
        logger.info("Received request for Spotify token...")
        try:
            token_payload = spotify.fetch_token()
        except UpstreamError as exc:
            logger.error("Internal server error: %s", exc)
            return jsonify({"error": TOKEN_ERROR}), 500
        return jsonify(token_payload)

    @app.route("/api/get-deezer-preview", methods=["GET"])
    def get_deezer_preview():
        track = request.args.get("track")
        artist = request.args.get("artist")
        if not track or not artist:
            return jsonify({"error": MISSING_PREVIEW_PARAMS}), 400

        logger.info("Received preview request for: %s by %s", track, artist)
        try:
            preview_url = deezer.find_preview(track, artist)
        except UpstreamError as exc:
            logger.error("Deezer fetch error: %s", exc)
            return jsonify({"error": PREVIEW_ERROR}), 500
        return jsonify({"previewUrl": preview_url})

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    @app.errorhandler(HTTPException)
    def http_error(exc: HTTPException):
        return jsonify({"error": exc.name}), exc.code

    @app.errorhandler(Exception)
    def unhandled_error(exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return jsonify({"error": "Internal server error"}), 500

    return app


def main() -> None:
    setup_logging()
    try:
        config = load_config()
    except ConfigError as exc:
        logger.error("Error: %s", exc)
        sys.exit(1)

    app = create_app(config)
    logger.info("Backend server is running on http://localhost:%s", config.port)
    logger.info("Waiting for requests at http://localhost:%s/api/get-spotify-token", config.port)
    app.run(host=config.host, port=config.port, threaded=True)


if __name__ == "__main__":
    main()
