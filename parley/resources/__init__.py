"""
Resources module - loading and hot reloading dialogue scripts.
"""

from parley.resources.library import ScriptLibrary, SCRIPT_SCHEMA
from parley.resources.watcher import ScriptWatcher, ScriptEventHandler, ScriptChange

__all__ = [
    "ScriptLibrary",
    "SCRIPT_SCHEMA",
    "ScriptWatcher",
    "ScriptEventHandler",
    "ScriptChange",
]
