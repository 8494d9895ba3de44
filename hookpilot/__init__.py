"""Building blocks of a Git hook runner: preparing, ordering, running and logging hook commands."""

__version__ = "1.6.0"

__all__ = [
    "commands",
    "executor",
    "filters",
    "log",
    "ordering",
    "result",
    "templates",
    "version",
]