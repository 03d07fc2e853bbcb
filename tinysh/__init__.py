"""A small interactive command shell with aliases, pipes, tab completion and history."""

__version__ = "0.1.0"
__all__ = ["parser", "completion", "commands", "cli"]