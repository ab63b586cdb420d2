"""
Conversation lines - parsed script lines bound to a conversation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from parley.dialog.actions import Action, parse_action
from parley.dialog.parser import parse_line

if TYPE_CHECKING:
    from parley.dialog.conversation import Conversation


class ConversationLine:
    """
    One line of a conversation script.

    Everything except the visited flag is fixed at construction.

    Actions are split in two phases. Early actions (mood verbs such as
    `!sad`) run in execute_before_line(), before the line is shown.
    Everything else runs in execute(), after the state transition.

    The presentation layer must call, for the line it presents or the
    option the player picks:

        line.execute_before_line()
        ...show the line...
        line.execute()

    Attributes:
        full: Raw source text
        conversation: Owning conversation
        is_npc: True for NPC speech, False for player options
        line: Display text (wrapped for NPC speech)
        target_state: State entered by execute(), if any
        actions: Verb/argument tuples in source order
    """

    def __init__(self, full: str, conversation: Conversation):
        self.full = full
        self.conversation = conversation

        parsed = parse_line(full, conversation.config.wrap_width)
        self.is_npc = parsed.is_npc
        self.line = parsed.text
        self.target_state = parsed.target_state
        self.actions = parsed.actions

        early_verbs = conversation.config.early_verbs
        self._early: tuple[Action, ...] = tuple(
            parse_action(a) for a in parsed.actions if a[0] in early_verbs
        )
        self._late: tuple[Action, ...] = tuple(
            parse_action(a) for a in parsed.actions if a[0] not in early_verbs
        )
        self._visited = False

    @property
    def text(self) -> str:
        return self.line

    def execute_before_line(self) -> None:
        """Run early (mood) actions in source order."""
        for action in self._early:
            self.conversation.dispatch(action)

    def execute(self) -> None:
        """Mark visited, enter the target state, then run late actions."""
        self._visited = True
        if self.target_state is not None:
            self.conversation.set_state(self.target_state)
        for action in self._late:
            self.conversation.dispatch(action)
        self.conversation.line_executed(self)

    def is_early_action(self, verb: str) -> bool:
        return verb in self.conversation.config.early_verbs

    def was_visited(self) -> bool:
        return self._visited

    def __repr__(self) -> str:
        role = "npc" if self.is_npc else "option"
        return f"ConversationLine({role}, {self.full!r})"

