"""A networked crash-style betting game: wire messages, addressing, a round server and a player client."""

__version__ = "0.1.0"
__all__ = ["messages", "addressing", "server", "client"]