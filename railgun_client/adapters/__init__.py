"""Adapter modules for external integrations."""

from .session import SessionRequestExecutor

__all__ = ["SessionRequestExecutor"]
