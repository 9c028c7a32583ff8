"""Tests for the copy report model."""

import json

import pytest

from bridle.harness.config import ResourceKind
from bridle.schemas.report import UNSUPPORTED_BY_TARGET, CopyReport, TransformOutcome


@pytest.fixture
def report() -> CopyReport:
    report = CopyReport(
        source_harness="claude-code",
        source_profile="work",
        target_harness="goose",
        target_profile="work",
    )
    report.record(TransformOutcome.copied(ResourceKind.MCP, "github"))
    report.record(TransformOutcome.copied(ResourceKind.MCP, "postgres"))
    report.record(
        TransformOutcome.transformed(
            ResourceKind.SKILLS, "Code Review Guide", "code-review-guide", "renamed"
        )
    )
    report.record(
        TransformOutcome.warned(
            ResourceKind.SKILLS, "code-review", "name collided", target_name="code-review-2"
        )
    )
    report.record(TransformOutcome.skipped(ResourceKind.AGENTS, "reviewer", UNSUPPORTED_BY_TARGET))
    return report


def test_summary_counts(report: CopyReport):
    summary = report.summary

    assert summary.copied == 2
    assert summary.transformed == 1
    assert summary.warned == 1
    assert summary.skipped == 1
    assert summary.total == 5


def test_details_follow_processing_order(report: CopyReport):
    assert [o.name for o in report.details()] == [
        "github",
        "postgres",
        "Code Review Guide",
        "code-review",
        "reviewer",
    ]
    assert [o.name for o in report.for_kind(ResourceKind.MCP)] == ["github", "postgres"]
    assert report.for_kind(ResourceKind.COMMANDS) == []


def test_warnings_and_notes_are_separated(report: CopyReport):
    assert [o.name for o in report.warnings()] == ["code-review"]
    assert [o.name for o in report.notes()] == ["reviewer"]
    assert report.succeeded


def test_json_dump_includes_summary_and_kind_keys(report: CopyReport):
    data = json.loads(report.model_dump_json())

    assert data["summary"]["copied"] == 2
    assert data["summary"]["total"] == 5
    assert list(data["outcomes"]) == ["mcp", "skills", "agents"]
    assert data["outcomes"]["skills"][0]["target_name"] == "code-review-guide"
    assert data["fatal_error"] is None


def test_report_round_trips_through_json(report: CopyReport):
    loaded = CopyReport.model_validate_json(report.model_dump_json())

    assert loaded.summary == report.summary
    assert loaded.details() == report.details()


def test_render_text(report: CopyReport):
    text = report.render_text()

    assert text.startswith("Copy claude-code/work -> goose/work (not committed)")
    assert "[transformed] skills/Code Review Guide -> code-review-guide (renamed)" in text
    assert "[warned] skills/code-review -> code-review-2: name collided" in text
    assert f"[skipped] agents/reviewer: skipped ({UNSUPPORTED_BY_TARGET})" in text
    assert "Summary: 2 copied, 1 transformed, 1 skipped, 1 warned" in text


def test_outcome_renamed_flag():
    assert not TransformOutcome.copied(ResourceKind.SKILLS, "a").renamed
    assert TransformOutcome.transformed(ResourceKind.SKILLS, "A", "a", "n").renamed
    assert not TransformOutcome.skipped(ResourceKind.SKILLS, "a", "r").renamed
