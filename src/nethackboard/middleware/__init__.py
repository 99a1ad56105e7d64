# src/nethackboard/middleware/__init__.py

"""Middleware components for the NetHackBoard dashboard."""

from .logging import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]
