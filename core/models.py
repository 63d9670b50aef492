"""
Model registration for the core app.
"""
from core.infrastructure.models import AuditLogEntry, RateLimitCounter  # noqa: F401
