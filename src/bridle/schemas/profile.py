"""Harness-neutral canonical profile model.

A ``CanonicalProfile`` is built fresh from a source profile for each copy and
discarded once the report is produced. Collections keep insertion order so
output stays deterministic.
"""

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from ..harness.config import ResourceKind

Transport = Literal["stdio", "sse", "http", "streamable-http"]


class CanonicalMcpServer(BaseModel):
    """Tool-server descriptor."""

    name: str = Field(min_length=1, description="Server key")
    enabled: bool = Field(default=True, description="Whether the source had it switched on")
    transport: Transport = Field(default="stdio", description="Transport kind")
    command: str | None = Field(default=None, description="Executable for stdio servers")
    args: list[str] = Field(default_factory=list, description="Ordered command arguments")
    url: str | None = Field(default=None, description="Endpoint for remote servers")
    env: dict[str, str] = Field(
        default_factory=dict,
        description="Environment variables; placeholders are kept verbatim",
    )

    @model_validator(mode="after")
    def _check_endpoint(self) -> "CanonicalMcpServer":
        if self.transport == "stdio":
            if not self.command or self.url is not None:
                raise ValueError(f"stdio server '{self.name}' needs a command and no url")
        elif not self.url or self.command is not None or self.args:
            raise ValueError(
                f"{self.transport} server '{self.name}' needs a url and no command/args"
            )
        return self


class CanonicalSkill(BaseModel):
    """Reusable skill; ``content`` is the full SKILL.md text."""

    name: str = Field(min_length=1)
    description: str = ""
    content: str = ""


class CanonicalAgent(BaseModel):
    """Sub-agent definition."""

    name: str = Field(min_length=1, description="Agent identifier")
    description: str = Field(default="", description="When the host should use this agent")
    prompt: str = Field(default="", description="System prompt body")
    tools: list[str] = Field(default_factory=list, description="Ordered native tool names")
    color: str | None = Field(default=None, description="Presentation-only metadata")


class CanonicalCommand(BaseModel):
    """Slash command; ``content`` is the full command file text."""

    name: str = Field(min_length=1)
    description: str = ""
    content: str = ""


class CanonicalSettings(BaseModel):
    """Scalar settings."""

    model: str | None = None
    theme: str | None = None

    def items(self) -> list[tuple[str, str]]:
        """Present settings as ordered (name, value) pairs."""
        pairs = [("model", self.model), ("theme", self.theme)]
        return [(name, value) for name, value in pairs if value is not None]


class RejectedResource(BaseModel):
    """Source entry that failed validation during extraction."""

    kind: ResourceKind
    name: str
    reason: str


class CanonicalProfile(BaseModel):
    """All resources of one profile in harness-neutral form."""

    mcp_servers: list[CanonicalMcpServer] = Field(default_factory=list)
    skills: list[CanonicalSkill] = Field(default_factory=list)
    agents: list[CanonicalAgent] = Field(default_factory=list)
    commands: list[CanonicalCommand] = Field(default_factory=list)
    settings: CanonicalSettings = Field(default_factory=CanonicalSettings)
    rejected: list[RejectedResource] = Field(
        default_factory=list,
        description="Source entries that could not be read; reported, never staged",
    )

    @model_validator(mode="after")
    def _check_unique_names(self) -> "CanonicalProfile":
        for kind, resources in self.collections().items():
            seen: set[str] = set()
            for resource in resources:
                if resource.name in seen:
                    raise ValueError(f"Duplicate {kind.value} name '{resource.name}'")
                seen.add(resource.name)
        return self

    def collections(self) -> dict[ResourceKind, list]:
        """Named resource collections keyed by kind, in processing order."""
        return {
            ResourceKind.MCP: self.mcp_servers,
            ResourceKind.SKILLS: self.skills,
            ResourceKind.AGENTS: self.agents,
            ResourceKind.COMMANDS: self.commands,
        }

    def resource_names(self) -> dict[ResourceKind, list[str]]:
        names = {kind: [r.name for r in items] for kind, items in self.collections().items()}
        names[ResourceKind.SETTINGS] = [name for name, _ in self.settings.items()]
        return names

    def is_empty(self) -> bool:
        return not any(self.resource_names().values())
