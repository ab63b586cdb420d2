"""
Parley

Branching NPC dialogue driven by compact plain-text scripts.

Quick Start:
    from parley import Conversation

    script = {
        "entry": [
            "Lovely weather today. !amused",
            "> It is! @weather",
            "> Goodbye. !end",
        ],
        "weather": ["Shall we go for a walk? !set $walk_offered"],
    }

    conversation = Conversation(script, handler=my_campaign, speaker=npc)
    interaction = conversation.get_next_interaction()
"""

__version__ = "0.1.0"

from parley.config import DialogueConfig
from parley.core import Component, DialogueEvent, Event, EventBus, Speaker
from parley.dialog import (
    ActionHandler,
    Conversation,
    ConversationLine,
    ConversationProxy,
    Interaction,
    VariableStore,
    default_store,
    parse_line,
    wrap_text,
)
from parley.errors import InvalidStateError, ParleyError, ScriptFormatError, ScriptNotFoundError
from parley.resources import ScriptLibrary, ScriptWatcher

__all__ = [
    # Config
    "DialogueConfig",
    # Core
    "Component",
    "Speaker",
    "EventBus",
    "Event",
    "DialogueEvent",
    # Dialog
    "ActionHandler",
    "Conversation",
    "ConversationLine",
    "ConversationProxy",
    "Interaction",
    "VariableStore",
    "default_store",
    "parse_line",
    "wrap_text",
    # Resources
    "ScriptLibrary",
    "ScriptWatcher",
    # Errors
    "ParleyError",
    "InvalidStateError",
    "ScriptFormatError",
    "ScriptNotFoundError",
]
