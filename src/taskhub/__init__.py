"""taskhub - task management with filterable queries and partial updates."""

__version__ = "0.1.0"
