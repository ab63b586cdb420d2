"""
Conversation variables.

Names starting with the sigil `$` are global: they live in a
VariableStore shared by every conversation that was given the same
store. All other names are local to one conversation.

The store does no locking. Hosts running conversations on several
threads must serialize writes to global names themselves.
"""

from __future__ import annotations

from typing import Iterator, Optional

GLOBAL_SIGIL = "$"


def is_global_name(name: str) -> bool:
    """Check whether a variable name belongs to the global scope."""
    return name.startswith(GLOBAL_SIGIL)


class VariableScope:
    """A flat mapping of variable name to string value."""

    def __init__(self):
        self._values: dict[str, str] = {}

    def set(self, name: str, value: str) -> None:
        """Set a variable, overwriting any previous value."""
        self._values[name] = value

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get a variable."""
        return self._values.get(name, default)

    def clear(self) -> None:
        self._values.clear()

    def as_dict(self) -> dict[str, str]:
        """Copy of all variables."""
        return dict(self._values)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._values!r})"


class VariableStore(VariableScope):
    """
    Global variables shared between conversations.

    Keys always carry the `$` sigil.
    """

    def set(self, name: str, value: str) -> None:
        if not is_global_name(name):
            raise ValueError(f"Global variable names must start with {GLOBAL_SIGIL!r}: {name!r}")
        super().set(name, value)


class LocalVariables(VariableScope):
    """
    Variables owned by a single conversation.

    Keys never carry the `$` sigil.
    """

    def set(self, name: str, value: str) -> None:
        if is_global_name(name):
            raise ValueError(f"Local variable names must not start with {GLOBAL_SIGIL!r}: {name!r}")
        super().set(name, value)


_default_store = VariableStore()


def default_store() -> VariableStore:
    """The process-wide store used when a conversation is given none."""
    return _default_store
