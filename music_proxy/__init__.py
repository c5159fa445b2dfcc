"""Backend proxy for the Spotify token endpoint and Deezer preview search."""

__version__ = "0.1.0"
