"""
Transport-neutral reply models for bot commands.

The dispatcher builds Reply objects; the Discord adapter turns them into
discord.Embed and interaction responses. Keeps command logic testable
without a gateway connection.
"""

from __future__ import annotations

from dataclasses import dataclass, field

COLOR_PURPLE = 0x8B5CF6
COLOR_GREEN = 0x00B894
COLOR_YELLOW = 0xF1C40F


@dataclass(frozen=True)
class EmbedField:
    name: str
    value: str
    inline: bool = False


@dataclass(frozen=True)
class EmbedSpec:
    title: str
    description: str | None = None
    color: int = COLOR_PURPLE
    fields: tuple[EmbedField, ...] = ()
    footer: str | None = None


@dataclass(frozen=True)
class Reply:
    content: str | None = None
    embeds: tuple[EmbedSpec, ...] = field(default_factory=tuple)
    ephemeral: bool = True
    """Visible only to the invoking user."""
