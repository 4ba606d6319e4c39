"""The Coup card game: rules engine, roles, session logic and a pygame table view."""

__version__ = "0.1.0"
__all__ = ["errors", "game", "player", "roles", "session", "window"]