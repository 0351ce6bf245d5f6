"""Moderator notification adapters."""

from __future__ import annotations

from .smtp import SmtpReportNotifier, build_message

__all__ = ["SmtpReportNotifier", "build_message"]
