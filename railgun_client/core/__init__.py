"""Core primitives for railgun-client."""

from .protocols import RequestExecutor

__all__ = ["RequestExecutor"]
