"""Notification channel adapters."""

from .channels import DatabaseNotificationChannel, LogNotificationChannel

__all__ = [
    "DatabaseNotificationChannel",
    "LogNotificationChannel",
]
