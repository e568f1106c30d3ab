"""Food-seeking Battlesnake: safety classifier, move selector and server."""

__version__ = "0.1.0"
