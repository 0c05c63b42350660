# src/learnloop/services/__init__.py
"""Business logic services for the LearnLoop application."""

from .email import EmailService
from .feed import FeedService
from .rate_limit import RateLimiter
from .reports import ReportLedger

__all__ = [
    "EmailService",
    "FeedService",
    "RateLimiter",
    "ReportLedger",
]
