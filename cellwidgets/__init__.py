"""Text and tree view widgets drawn onto an in-memory character-cell screen."""

__version__ = "0.1.0"