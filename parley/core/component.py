"""
Component base class for data-only records.

Components are pure data containers with NO logic. The dialogue
engine only carries them around; the host decides what they mean.

Usage:
    class Speaker(Component):
        name: str
        portrait_id: str | None = None
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class Component(BaseModel):
    """
    Base class for all components.

    Components are data-only containers using Pydantic for:
    - Automatic validation
    - JSON serialization
    - Default values
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        validate_assignment=True,
        extra='forbid',
    )


class Speaker(Component):
    """
    Identifies the NPC that owns a conversation.

    Passed as-is to the host action handler so custom verbs know who is
    talking.

    Attributes:
        id: Stable identifier of the NPC
        name: Display name
        portrait_id: Default portrait asset ID
    """
    id: str
    name: str = ""
    portrait_id: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name or self.id
