import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from .errors import ConfigError

BASE_DIR = Path(__file__).resolve().parents[1]
CONFIG_DIR = BASE_DIR / "config"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_UPSTREAM_TIMEOUT = 10.0


@dataclass(frozen=True)
class SpotifyCredentials:
    client_id: str
    client_secret: str


@dataclass(frozen=True)
class ProxyConfig:
    credentials: SpotifyCredentials
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    upstream_timeout: float = DEFAULT_UPSTREAM_TIMEOUT


def _load_from_file(path: Path) -> Dict[str, str]:
    # File format (lines): SPOTIFY_CLIENT_ID=..., SPOTIFY_CLIENT_SECRET=...
    try:
        with open(path, encoding="utf-8") as f:
            lines = f.read().splitlines()
    except FileNotFoundError:
        return {}

    values = {}
    for line in lines:
        if "=" not in line:
            continue
        key, val = line.split("=", 1)
        values[key.strip()] = val.strip()
    return values


def _parse_number(env: Mapping[str, str], name: str, default, cast):
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None


def load_config(env: Optional[Mapping[str, str]] = None) -> ProxyConfig:
    """Build the immutable proxy configuration.

    Credentials come from the environment (a ``.env`` file is loaded first
    without overriding existing variables) and fall back to a local
    credentials file. Raises ``ConfigError`` if either credential is empty.
    """
    if env is None:
        load_dotenv(find_dotenv(usecwd=True), override=False)
        env = os.environ

    credentials_file = Path(
        env.get("SPOTIFY_CREDENTIALS_FILE") or CONFIG_DIR / "spotify_credentials.txt"
    )
    file_values = _load_from_file(credentials_file)

    client_id = env.get("SPOTIFY_CLIENT_ID") or file_values.get("SPOTIFY_CLIENT_ID")
    client_secret = env.get("SPOTIFY_CLIENT_SECRET") or file_values.get("SPOTIFY_CLIENT_SECRET")

    missing = [
        name
        for name, value in (
            ("SPOTIFY_CLIENT_ID", client_id),
            ("SPOTIFY_CLIENT_SECRET", client_secret),
        )
        if not value
    ]
    if missing:
        raise ConfigError(
            f"{' and '.join(missing)} not set in the environment, .env file or {credentials_file}"
        )

    return ProxyConfig(
        credentials=SpotifyCredentials(client_id=client_id, client_secret=client_secret),
        host=env.get("HOST") or DEFAULT_HOST,
        port=_parse_number(env, "PORT", DEFAULT_PORT, int),
        upstream_timeout=_parse_number(env, "UPSTREAM_TIMEOUT", DEFAULT_UPSTREAM_TIMEOUT, float),
    )
