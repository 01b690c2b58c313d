"""Multi-board kanban task manager: boards, ordered columns and ordered tasks."""

__version__ = "0.1.0"
