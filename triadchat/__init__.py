"""Chat state, input editing, scrolling and panel text for a terminal chat with an AI clerk."""

__version__ = "0.1.1"