"""Report schemas for cross-harness copies.

One ``TransformOutcome`` per resource, grouped by kind in processing order.
Uses @computed_field so JSON dumps carry the summary counts.
"""

from typing import Literal

from pydantic import BaseModel, Field, computed_field

from ..harness.config import ResourceKind

OutcomeStatus = Literal["copied", "transformed", "skipped", "warned"]

UNSUPPORTED_BY_TARGET = "unsupported by target harness"
INVALID_IN_SOURCE = "invalid in source"


class TransformOutcome(BaseModel):
    """Result of carrying one resource across to the target."""

    kind: ResourceKind = Field(description="Resource kind")
    name: str = Field(description="Name in the source profile")
    status: OutcomeStatus = Field(description="What happened to the resource")
    target_name: str | None = Field(
        default=None,
        description="Name in the target profile; None when skipped",
    )
    reason: str | None = Field(default=None, description="Why it was skipped or warned")
    note: str | None = Field(default=None, description="Detail about a transformation")

    @classmethod
    def copied(cls, kind: ResourceKind, name: str) -> "TransformOutcome":
        return cls(kind=kind, name=name, status="copied", target_name=name)

    @classmethod
    def transformed(
        cls, kind: ResourceKind, original_name: str, new_name: str, note: str
    ) -> "TransformOutcome":
        return cls(
            kind=kind,
            name=original_name,
            status="transformed",
            target_name=new_name,
            note=note,
        )

    @classmethod
    def skipped(cls, kind: ResourceKind, name: str, reason: str) -> "TransformOutcome":
        return cls(kind=kind, name=name, status="skipped", reason=reason)

    @classmethod
    def warned(
        cls,
        kind: ResourceKind,
        name: str,
        reason: str,
        *,
        target_name: str | None = None,
        note: str | None = None,
    ) -> "TransformOutcome":
        return cls(
            kind=kind,
            name=name,
            status="warned",
            target_name=target_name or name,
            reason=reason,
            note=note,
        )

    @property
    def renamed(self) -> bool:
        return self.target_name is not None and self.target_name != self.name

    def describe(self) -> str:
        """One-line human-readable description."""
        label = f"{self.kind.value}/{self.name}"
        if self.status == "skipped":
            return f"{label}: skipped ({self.reason})"
        if self.status == "warned":
            rename = f" -> {self.target_name}" if self.renamed else ""
            return f"{label}{rename}: {self.reason}"
        if self.status == "transformed":
            return f"{label} -> {self.target_name} ({self.note})"
        return f"{label}: copied"


class ReportSummary(BaseModel):
    """Outcome counts across every kind."""

    copied: int = 0
    transformed: int = 0
    skipped: int = 0
    warned: int = 0

    @computed_field
    @property
    def total(self) -> int:
        return self.copied + self.transformed + self.skipped + self.warned


class FatalError(BaseModel):
    """Whole-operation failure attached to a report."""

    code: str
    message: str


class CopyReport(BaseModel):
    """Aggregate of every per-resource outcome of one copy."""

    source_harness: str
    source_profile: str
    target_harness: str
    target_profile: str
    dry_run: bool = False
    committed: bool = False
    outcomes: dict[ResourceKind, list[TransformOutcome]] = Field(default_factory=dict)
    fatal_error: FatalError | None = None

    def record(self, outcome: TransformOutcome) -> None:
        self.outcomes.setdefault(outcome.kind, []).append(outcome)

    @computed_field
    @property
    def summary(self) -> ReportSummary:
        counts = {"copied": 0, "transformed": 0, "skipped": 0, "warned": 0}
        for outcome in self.details():
            counts[outcome.status] += 1
        return ReportSummary(**counts)

    def details(self) -> list[TransformOutcome]:
        """Every outcome, flattened in processing order."""
        return [outcome for outcomes in self.outcomes.values() for outcome in outcomes]

    def for_kind(self, kind: ResourceKind) -> list[TransformOutcome]:
        return list(self.outcomes.get(kind, []))

    def warnings(self) -> list[TransformOutcome]:
        return [outcome for outcome in self.details() if outcome.status == "warned"]

    def notes(self) -> list[TransformOutcome]:
        """Skipped outcomes; informational, not failures."""
        return [outcome for outcome in self.details() if outcome.status == "skipped"]

    @property
    def succeeded(self) -> bool:
        return self.fatal_error is None

    def render_text(self) -> str:
        """Render a plain-text report for terminals."""
        source = f"{self.source_harness}/{self.source_profile}"
        target = f"{self.target_harness}/{self.target_profile}"
        mode = "dry run" if self.dry_run else ("committed" if self.committed else "not committed")
        lines = [f"Copy {source} -> {target} ({mode})"]

        for kind, outcomes in self.outcomes.items():
            lines.append(f"\n{kind.value}:")
            for outcome in outcomes:
                lines.append(f"  [{outcome.status}] {outcome.describe()}")

        summary = self.summary
        lines.append(
            f"\nSummary: {summary.copied} copied, {summary.transformed} transformed, "
            f"{summary.skipped} skipped, {summary.warned} warned"
        )
        if self.fatal_error:
            lines.append(f"Error ({self.fatal_error.code}): {self.fatal_error.message}")
        return "\n".join(lines)
