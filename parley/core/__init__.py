"""
Core module.

Exports:
- EventBus, Event, DialogueEvent: Event system
- Component, Speaker: Data-only records
"""

from parley.core.events import EventBus, Event, DialogueEvent
from parley.core.component import Component, Speaker

__all__ = [
    # Events
    "EventBus",
    "Event",
    "DialogueEvent",
    # Components
    "Component",
    "Speaker",
]
