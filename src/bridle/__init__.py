"""bridle: profile manager and cross-harness configuration copier."""

from .copier import CopyRequest, copy_profile
from .harness.capabilities import naming_rule, supports
from .schemas.options import CopyOptions
from .schemas.report import CopyReport, TransformOutcome

__all__ = [
    "CopyOptions",
    "CopyReport",
    "CopyRequest",
    "TransformOutcome",
    "copy_profile",
    "naming_rule",
    "supports",
]
