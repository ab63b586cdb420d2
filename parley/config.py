"""
Dialogue configuration.

Usage:
    config = DialogueConfig(wrap_width=40)
    config = DialogueConfig.from_file("game/data/dialogue.json")
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

# Mood verbs run before a line is shown instead of after it
DEFAULT_EARLY_VERBS = frozenset({"angry", "sad", "amused", "neutral", "bored"})


class DialogueConfig(BaseModel):
    """
    Settings shared by every conversation built from the same config.

    Attributes:
        wrap_width: Column width NPC lines are wrapped to
        entry_state: State a new conversation starts in
        early_verbs: Verbs executed by execute_before_line()
        proxy_separator: Line separator for single-text conversations
        proxy_empty_text: Line used when a single-text conversation is empty
    """

    model_config = ConfigDict(frozen=True, extra='forbid')

    wrap_width: int = Field(default=50, ge=1)
    entry_state: str = Field(default="entry", min_length=1)
    early_verbs: frozenset[str] = DEFAULT_EARLY_VERBS
    proxy_separator: str = Field(default=":::", min_length=1)
    proxy_empty_text: str = "Nothing…"

    @classmethod
    def from_file(cls, path: str | Path) -> DialogueConfig:
        """Load a config from a JSON file."""
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return cls.model_validate(data)


DEFAULT_CONFIG = DialogueConfig()
