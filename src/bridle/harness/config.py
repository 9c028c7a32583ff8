"""Harness identifiers and resource vocabulary."""

from enum import Enum


class Harness(str, Enum):
    """Supported harnesses."""

    CLAUDE_CODE = "claude-code"
    OPENCODE = "opencode"
    GOOSE = "goose"
    AMP_CODE = "amp-code"


class ResourceKind(str, Enum):
    """Resource kinds a profile carries, in processing order."""

    MCP = "mcp"
    SKILLS = "skills"
    AGENTS = "agents"
    COMMANDS = "commands"
    SETTINGS = "settings"


class NamingRule(str, Enum):
    """Naming constraint a harness imposes on resource names."""

    FREE = "free"
    LOWERCASE_HYPHENATED = "lowercase-hyphenated"


HARNESS_CHOICES = [harness.value for harness in Harness]
KIND_CHOICES = [kind.value for kind in ResourceKind]
