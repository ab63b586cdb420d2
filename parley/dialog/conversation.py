"""
Conversation engine - walks a dialogue script turn by turn.

A script maps state names to ordered raw lines:

    {
        "entry": [
            "Halt! Who goes there? !angry",
            "> A friend. @friend",
            "> None of your business. !end"
        ],
        "friend": [
            "Then be welcome, friend. !neutral !set $gate_open"
        ]
    }

Each call to get_next_interaction() yields one turn: either the NPC line
at the cursor, or the run of player options at the cursor. The caller
executes the NPC line or the chosen option, then asks for the next turn,
until None signals the conversation is over.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Optional

from parley.config import DEFAULT_CONFIG, DialogueConfig
from parley.core.events import DialogueEvent, EventBus
from parley.dialog.actions import Action, ActionDispatcher, ActionHandler, parse_action
from parley.dialog.line import ConversationLine
from parley.dialog.variables import LocalVariables, VariableStore, default_store, is_global_name
from parley.errors import InvalidStateError, ScriptFormatError

logger = logging.getLogger(__name__)


@dataclass
class Interaction:
    """
    One turn of a conversation.

    A turn holds either one NPC line or the run of player options at the
    cursor, never both. Options written after an NPC line are offered on
    the next turn, read from whatever state the cursor is in by then. If
    that NPC line carries an `@state` tag, executing it moves the cursor
    away and the options that followed it in the old state are never
    offered; put such options in the target state instead.

    Attributes:
        npc_line: What the NPC says this turn, if anything
        options: Player options offered this turn (only on turns without
            an NPC line)
        spoiled_options: Reserved for options known to lead nowhere new;
            currently always empty
    """
    npc_line: Optional[ConversationLine] = None
    options: list[ConversationLine] = field(default_factory=list)
    spoiled_options: list[ConversationLine] = field(default_factory=list)

    @property
    def has_options(self) -> bool:
        return len(self.options) > 0


def _check_script(script: Any) -> None:
    if not isinstance(script, Mapping):
        raise ScriptFormatError(f"Script must map state names to lines, got {type(script).__name__}")
    for name, lines in script.items():
        if not isinstance(name, str):
            raise ScriptFormatError(f"State name must be a string, got {name!r}")
        if isinstance(lines, str) or not isinstance(lines, Sequence):
            raise ScriptFormatError(f"State {name!r} must be a list of lines")
        for line in lines:
            if not isinstance(line, str):
                raise ScriptFormatError(f"State {name!r} contains a non-string line: {line!r}")


class Conversation:
    """
    Runs one NPC's conversation script.

    Owns the parsed lines, the cursor (current state and index into it),
    the local variables and the pending-end flag. Global variables live
    in the injected VariableStore.

    Usage:
        conversation = Conversation(script, handler=campaign, speaker=npc)
        while (interaction := conversation.get_next_interaction()):
            if interaction.npc_line:
                interaction.npc_line.execute_before_line()
                show(interaction.npc_line)
                interaction.npc_line.execute()
            if interaction.options:
                choice = pick(interaction.options)
                choice.execute_before_line()
                choice.execute()
    """

    def __init__(
        self,
        script: Mapping[str, Sequence[str]],
        handler: Optional[ActionHandler] = None,
        speaker: Any = None,
        store: Optional[VariableStore] = None,
        events: Optional[EventBus] = None,
        config: Optional[DialogueConfig] = None,
    ):
        _check_script(script)

        self.config = config or DEFAULT_CONFIG
        self.speaker = speaker
        self.store = store if store is not None else default_store()
        self.local = LocalVariables()
        self.events = events
        self._dispatcher = ActionDispatcher(self, handler)

        self.states: list[str] = list(script.keys())
        self._data: dict[str, list[ConversationLine]] = {
            state: [ConversationLine(line, self) for line in script[state]]
            for state in self.states
        }

        self._state = ""
        self._index = 0
        self._end_requested = False

        self.set_state(self.config.entry_state)

    @property
    def handler(self) -> Optional[ActionHandler]:
        return self._dispatcher.handler

    @property
    def current_state(self) -> str:
        return self._state

    @property
    def position(self) -> tuple[str, int]:
        """Cursor as (state name, index of the next unread line)."""
        return self._state, self._index

    def lines(self, state: str) -> list[ConversationLine]:
        """Lines of a state."""
        if state not in self._data:
            raise InvalidStateError(state)
        return list(self._data[state])

    # State machine

    def set_state(self, name: Optional[str] = None) -> None:
        """
        Move the cursor to the first line of a state.

        Args:
            name: State to enter (default: the configured entry state)

        Raises:
            InvalidStateError: If the script does not declare the state
        """
        if name is None:
            name = self.config.entry_state
        if name not in self._data:
            raise InvalidStateError(name)

        self._state = name
        self._index = 0
        logger.debug("Conversation entered state %s", name)
        self.publish(DialogueEvent.STATE_CHANGED, state=name)

    def get_next_interaction(self) -> Optional[Interaction]:
        """
        Build the next turn.

        Returns:
            The next Interaction, or None when the conversation is over,
            either because `!end` was executed or because the current
            state ran out of lines.
        """
        if self._end_requested:
            self._end_requested = False
            self.publish(DialogueEvent.CONVERSATION_FINISHED, explicit=True)
            return None

        first = self._peek_line()
        if first is None:
            self.publish(DialogueEvent.CONVERSATION_FINISHED, explicit=False)
            return None

        if first.is_npc:
            # Options after an NPC line are offered on the following turn
            return Interaction(npc_line=self._advance())

        interaction = Interaction()
        option = first
        while option is not None and not option.is_npc:
            interaction.options.append(self._advance())
            option = self._peek_line()

        # TODO: sort options that lead nowhere new into spoiled_options once
        # a rule for detecting them exists
        return interaction

    def has_ended(self) -> bool:
        """True while an executed `!end` has not yet been consumed by get_next_interaction()."""
        return self._end_requested

    def _peek_line(self) -> Optional[ConversationLine]:
        lines = self._data[self._state]
        if self._index >= len(lines):
            return None
        return lines[self._index]

    def _advance(self) -> ConversationLine:
        line = self._data[self._state][self._index]
        self._index += 1
        return line

    # Actions

    def run_action(self, action: Sequence[str]) -> None:
        """Run an action given as verb followed by arguments."""
        self.dispatch(parse_action(action))

    def dispatch(self, action: Action) -> None:
        self._dispatcher.dispatch(action)

    def request_end(self) -> None:
        """Finish the conversation after the current turn."""
        self._end_requested = True
        self.publish(DialogueEvent.END_REQUESTED)

    # Variables

    def set_variable(self, name: str, value: str) -> None:
        """Set a `$global` or local variable."""
        logger.info("Setting conversation variable %s to %s", name, value)
        is_global = is_global_name(name)
        if is_global:
            self.store.set(name, value)
        else:
            self.local.set(name, value)
        self.publish(DialogueEvent.VARIABLE_SET, name=name, value=value, is_global=is_global)

    def get_variable(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get a `$global` or local variable."""
        scope = self.store if is_global_name(name) else self.local
        return scope.get(name, default)

    # Events

    def publish(self, event_type: DialogueEvent, **data: Any) -> None:
        if self.events is not None:
            self.events.publish(event_type, conversation=self, **data)

    def line_executed(self, line: ConversationLine) -> None:
        self.publish(DialogueEvent.LINE_EXECUTED, line=line)
