"""Collaborator interfaces and their environment-backed implementations."""

from .base import ConfirmationProvider, GuardChecker, SessionProvider, Transport
from .factory import create_manager

__all__ = [
    "Transport",
    "SessionProvider",
    "ConfirmationProvider",
    "GuardChecker",
    "create_manager",
]
