"""Harness identifiers, capability matrix and format adapters."""

from .capabilities import (
    CAPABILITY_MATRIX,
    CapabilityDescriptor,
    descriptor_for,
    naming_rule,
    supports,
)
from .config import Harness, NamingRule, ResourceKind

__all__ = [
    "CAPABILITY_MATRIX",
    "CapabilityDescriptor",
    "Harness",
    "NamingRule",
    "ResourceKind",
    "descriptor_for",
    "naming_rule",
    "supports",
]
