"""Shared test fixtures for bridle."""

import json
from pathlib import Path

import pytest

from bridle.harness.config import Harness
from bridle.profiles import ProfileStore
from bridle.schemas.profile import (
    CanonicalAgent,
    CanonicalCommand,
    CanonicalMcpServer,
    CanonicalProfile,
    CanonicalSettings,
    CanonicalSkill,
)

CODE_REVIEW_SKILL = """---
name: Code Review Guide
description: Checklist for reviewing pull requests
---

Review the diff for correctness first, style second.
"""

REVIEWER_AGENT = """---
name: code-reviewer
description: Use after writing code to get a second opinion
tools: Read, Grep
color: purple
---

You are a meticulous code reviewer.
"""


def skill_text(name: str, body: str = "Body.") -> str:
    return f"---\nname: {name}\ndescription: {name} skill\n---\n\n{body}\n"


def write_claude_profile(
    profile_dir: Path,
    *,
    servers: dict | None = None,
    skills: dict[str, str] | None = None,
    agents: dict[str, str] | None = None,
    commands: dict[str, str] | None = None,
    settings: dict | None = None,
) -> Path:
    """Lay out a Claude Code profile directory from native snippets."""
    profile_dir.mkdir(parents=True, exist_ok=True)
    if servers is not None:
        (profile_dir / ".mcp.json").write_text(json.dumps({"mcpServers": servers}, indent=2))
    if settings is not None:
        (profile_dir / "settings.json").write_text(json.dumps(settings, indent=2))
    for name, text in (skills or {}).items():
        skill_dir = profile_dir / "skills" / name
        skill_dir.mkdir(parents=True)
        (skill_dir / "SKILL.md").write_text(text)
    for name, text in (agents or {}).items():
        (profile_dir / "agents").mkdir(exist_ok=True)
        (profile_dir / "agents" / f"{name}.md").write_text(text)
    for name, text in (commands or {}).items():
        (profile_dir / "commands").mkdir(exist_ok=True)
        (profile_dir / "commands" / f"{name}.md").write_text(text)
    return profile_dir


def snapshot(root: Path) -> dict[str, bytes]:
    """Map every file below ``root`` to its bytes."""
    return {
        str(path.relative_to(root)): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


@pytest.fixture
def profiles_dir(tmp_path: Path) -> Path:
    root = tmp_path / "profiles"
    root.mkdir()
    return root


@pytest.fixture
def store(profiles_dir: Path) -> ProfileStore:
    return ProfileStore(profiles_dir)


@pytest.fixture
def github_server() -> dict:
    return {
        "command": "npx",
        "args": ["-y", "@modelcontextprotocol/server-github"],
        "env": {"GITHUB_TOKEN": "${GITHUB_TOKEN}"},
    }


@pytest.fixture
def claude_source(store: ProfileStore, github_server: dict) -> Path:
    """Claude Code profile 'work' with two servers, one skill and one agent."""
    return write_claude_profile(
        store.profile_path(Harness.CLAUDE_CODE, "work"),
        servers={
            "github": github_server,
            "postgres": {"type": "sse", "url": "http://localhost:8080/sse"},
        },
        skills={"Code Review Guide": CODE_REVIEW_SKILL},
        agents={"code-reviewer": REVIEWER_AGENT},
    )


@pytest.fixture
def sample_profile() -> CanonicalProfile:
    """Canonical profile covering every resource kind."""
    return CanonicalProfile(
        mcp_servers=[
            CanonicalMcpServer(
                name="github",
                command="npx",
                args=["-y", "@modelcontextprotocol/server-github"],
                env={"GITHUB_TOKEN": "${GITHUB_TOKEN}"},
            ),
            CanonicalMcpServer(name="postgres", transport="sse", url="http://localhost:8080/sse"),
            CanonicalMcpServer(
                name="legacy", enabled=False, command="legacy-mcp", args=["--stdio"]
            ),
        ],
        skills=[
            CanonicalSkill(
                name="Code Review Guide",
                description="Checklist for reviewing pull requests",
                content=CODE_REVIEW_SKILL,
            )
        ],
        agents=[
            CanonicalAgent(
                name="code-reviewer",
                description="Use after writing code to get a second opinion",
                prompt="You are a meticulous code reviewer.",
                tools=["Read", "Grep"],
                color="purple",
            )
        ],
        commands=[
            CanonicalCommand(name="deploy", description="Ship it", content="Deploy $ARGUMENTS\n")
        ],
        settings=CanonicalSettings(model="claude-sonnet-4-5", theme="dark"),
    )
