"""
Dialog module - branching NPC conversations from plain-text scripts.

Provides:
- Line parsing (speaker role, display text, state tags, actions)
- Word wrapping for NPC speech
- The turn-based conversation engine
- Global and local conversation variables
- Single-text conversations
- `.dialog` authoring format compiler
"""

from parley.dialog.actions import (
    ActionDispatcher,
    ActionHandler,
    CustomAction,
    EndAction,
    SetAction,
    parse_action,
)
from parley.dialog.conversation import Conversation, Interaction
from parley.dialog.line import ConversationLine
from parley.dialog.parser import DialogParser, ParsedLine, compile_dialog_file, parse_line, tokenize_line
from parley.dialog.proxy import ConversationProxy, build_proxy_script
from parley.dialog.variables import GLOBAL_SIGIL, LocalVariables, VariableStore, default_store
from parley.dialog.wrap import MAX_CHARS_PER_LINE, wrap_text

__all__ = [
    "ActionDispatcher",
    "ActionHandler",
    "CustomAction",
    "EndAction",
    "SetAction",
    "parse_action",
    "Conversation",
    "Interaction",
    "ConversationLine",
    "DialogParser",
    "ParsedLine",
    "compile_dialog_file",
    "parse_line",
    "tokenize_line",
    "ConversationProxy",
    "build_proxy_script",
    "GLOBAL_SIGIL",
    "LocalVariables",
    "VariableStore",
    "default_store",
    "MAX_CHARS_PER_LINE",
    "wrap_text",
]
