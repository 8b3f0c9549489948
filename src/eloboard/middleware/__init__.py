# src/eloboard/middleware/__init__.py

"""Middleware components for EloBoard API."""

from .logging import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]
