"""Options controlling a cross-harness copy."""

from pydantic import BaseModel, Field

from ..harness.config import ResourceKind


class CopyOptions(BaseModel):
    """User-facing switches for a copy operation."""

    include: set[ResourceKind] | None = Field(
        default=None,
        description="When set, only these kinds are processed",
    )
    exclude: set[ResourceKind] = Field(
        default_factory=set,
        description="Kinds dropped when include is not set",
    )
    force: bool = Field(default=False, description="Allow replacing an existing target")
    dry_run: bool = Field(default=False, description="Build the report without writing")
    interactive_selection: dict[ResourceKind, set[str]] | None = Field(
        default=None,
        description="Explicit per-resource picks, applied after include/exclude",
    )
    no_transform: bool = Field(
        default=False,
        description="Disable name sanitization; names may be invalid for the target",
    )
