"""
Exceptions raised by the dialogue engine.
"""

from __future__ import annotations


class ParleyError(Exception):
    """Base class for all dialogue engine errors."""


class InvalidStateError(ParleyError):
    """A conversation was asked to enter a state its script does not declare."""

    def __init__(self, state: str):
        super().__init__(f"State name {state} does not exist in conversation")
        self.state = state


class ScriptFormatError(ParleyError):
    """A script mapping is not shaped as state name -> list of lines."""


class ScriptNotFoundError(ParleyError):
    """A script id was requested that the library never loaded."""

    def __init__(self, script_id: str):
        super().__init__(f"Dialogue script not found: {script_id}")
        self.script_id = script_id
