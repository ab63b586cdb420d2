"""
Single-text conversations.

Signs, notes and simple NPCs carry their whole dialogue in one string
with lines separated by `:::`. The proxy turns it into an `entry`-only
script whose last line loops back to the start and ends the
conversation, so talking to the same NPC again replays it.
"""

from __future__ import annotations

from typing import Any, Optional

from parley.config import DEFAULT_CONFIG, DialogueConfig
from parley.core.events import EventBus
from parley.dialog.actions import ActionHandler
from parley.dialog.conversation import Conversation, Interaction
from parley.dialog.variables import VariableStore

LOOP_SUFFIX = " @{state} !end"


def build_proxy_script(
    content: Optional[str],
    config: DialogueConfig = DEFAULT_CONFIG,
) -> dict[str, list[str]]:
    """
    Build a script mapping from single-text content.

    Args:
        content: Lines joined by the configured separator
        config: Supplies separator, entry state and empty-content text

    Returns:
        {entry_state: [lines...]}
    """
    if not content:
        lines = [config.proxy_empty_text]
    else:
        lines = content.split(config.proxy_separator)

    lines[-1] += LOOP_SUFFIX.format(state=config.entry_state)
    return {config.entry_state: lines}


class ConversationProxy(Conversation):
    """
    A Conversation built from single-text content.

    Tracks whether it has run to completion so the host can remove the
    talking object once it is done.
    """

    def __init__(
        self,
        content: Optional[str],
        handler: Optional[ActionHandler] = None,
        speaker: Any = None,
        store: Optional[VariableStore] = None,
        events: Optional[EventBus] = None,
        config: Optional[DialogueConfig] = None,
    ):
        config = config or DEFAULT_CONFIG
        super().__init__(
            build_proxy_script(content, config),
            handler=handler,
            speaker=speaker,
            store=store,
            events=events,
            config=config,
        )
        self.finished = False

    def get_next_interaction(self) -> Optional[Interaction]:
        interaction = super().get_next_interaction()
        if interaction is None:
            self.finished = True
        return interaction

    def is_active(self) -> bool:
        return not self.finished
