"""Version information for aterm-workspace."""

__version__ = "0.1.0"
