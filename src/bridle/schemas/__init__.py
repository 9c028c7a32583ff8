"""Pydantic schemas for profiles, options and reports."""

from .options import CopyOptions
from .profile import (
    CanonicalAgent,
    CanonicalCommand,
    CanonicalMcpServer,
    CanonicalProfile,
    CanonicalSettings,
    CanonicalSkill,
    RejectedResource,
)
from .report import CopyReport, FatalError, ReportSummary, TransformOutcome

__all__ = [
    "CanonicalAgent",
    "CanonicalCommand",
    "CanonicalMcpServer",
    "CanonicalProfile",
    "CanonicalSettings",
    "CanonicalSkill",
    "CopyOptions",
    "CopyReport",
    "FatalError",
    "RejectedResource",
    "ReportSummary",
    "TransformOutcome",
]
