"""
Line actions and their dispatch.

Two verbs are built in:

- `!end` asks the conversation to finish after the current turn.
- `!set name [value]` stores a variable; value defaults to "true".

Every other verb is a custom action handed to the host's ActionHandler
together with the speaker, e.g. `!give potion 2` becomes
`handler.run_action("give", speaker, ["potion", "2"])`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Protocol, Sequence, Union

from parley.core.events import DialogueEvent
from parley.dialog.variables import is_global_name

if TYPE_CHECKING:
    from parley.dialog.conversation import Conversation

logger = logging.getLogger(__name__)

END_VERB = "end"
SET_VERB = "set"
DEFAULT_SET_VALUE = "true"


@dataclass(frozen=True)
class EndAction:
    """Request the conversation to end."""

    @property
    def verb(self) -> str:
        return END_VERB


@dataclass(frozen=True)
class SetAction:
    """Assign a conversation variable."""
    name: str
    value: str = DEFAULT_SET_VALUE

    @property
    def verb(self) -> str:
        return SET_VERB

    @property
    def is_global(self) -> bool:
        return is_global_name(self.name)


@dataclass(frozen=True)
class CustomAction:
    """A game-specific verb executed by the host."""
    verb: str
    args: tuple[str, ...] = ()


Action = Union[EndAction, SetAction, CustomAction]


def parse_action(tokens: Sequence[str]) -> Action:
    """
    Build an action from its verb and arguments.

    Args:
        tokens: Verb followed by its arguments, e.g. ("set", "mood", "sad")

    Returns:
        EndAction, SetAction or CustomAction
    """
    if not tokens:
        raise ValueError("An action needs at least a verb")

    verb, *args = tokens
    if verb == END_VERB:
        return EndAction()
    if verb == SET_VERB:
        name = args[0] if args else ""
        value = args[1] if len(args) > 1 else DEFAULT_SET_VALUE
        return SetAction(name, value)
    return CustomAction(verb, tuple(args))


class ActionHandler(Protocol):
    """The host side of custom verbs."""

    def run_action(self, verb: str, speaker: Any, args: list[str]) -> None:
        """Execute a custom verb for the given speaker."""
        ...


class ActionDispatcher:
    """
    Executes actions on behalf of one conversation.

    Built-in verbs change the conversation directly; custom verbs are
    forwarded verbatim to the host handler. Without a handler custom
    verbs are logged and skipped.
    """

    def __init__(self, conversation: Conversation, handler: Optional[ActionHandler] = None):
        self.conversation = conversation
        self.handler = handler

    def dispatch(self, action: Action) -> None:
        """Execute one action."""
        if isinstance(action, EndAction):
            self.conversation.request_end()
        elif isinstance(action, SetAction):
            self.conversation.set_variable(action.name, action.value)
        else:
            self._run_custom(action)

    def _run_custom(self, action: CustomAction) -> None:
        conversation = self.conversation
        args = list(action.args)
        logger.debug("Custom action %s %s", action.verb, args)
        conversation.publish(DialogueEvent.CUSTOM_ACTION, verb=action.verb, args=args)

        if self.handler is None:
            logger.warning("No action handler for custom verb %r", action.verb)
            return
        self.handler.run_action(action.verb, conversation.speaker, args)
