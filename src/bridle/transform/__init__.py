"""Resource transform strategies and naming rules."""

from .naming import NameAllocator, is_valid_name, sanitize_name
from .transformers import (
    TRANSFORMERS,
    TransformContext,
    TransformResult,
    transform_resource,
)

__all__ = [
    "NameAllocator",
    "TRANSFORMERS",
    "TransformContext",
    "TransformResult",
    "is_valid_name",
    "sanitize_name",
    "transform_resource",
]
