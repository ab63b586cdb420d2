import os
import sys
import pytest
from unittest.mock import MagicMock

# Ensure parley can be imported without installing
sys.path.append(os.getcwd())


@pytest.fixture(autouse=True)
def clean_default_store():
    """
    The default global variable store lives for the whole process.
    Autoused so one test's $variables never leak into another.
    """
    from parley.dialog.variables import default_store

    default_store().clear()
    yield
    default_store().clear()


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from parley.core.events import EventBus
    return EventBus()


@pytest.fixture
def store():
    """Fresh global variable store, isolated from the default one."""
    from parley.dialog.variables import VariableStore
    return VariableStore()


@pytest.fixture
def handler():
    """Host action handler recording every custom verb."""
    return MagicMock()


@pytest.fixture
def speaker():
    from parley.core.component import Speaker
    return Speaker(id="keeper", name="Bridge Keeper")


@pytest.fixture
def sample_script():
    """Script exercising options, state changes and every action kind."""
    return {
        "entry": [
            "Halt! Who goes there? !angry",
            "> A friend. @friend",
            "> Nobody. !end",
            "Suit yourself.",
        ],
        "friend": [
            "Then be welcome, friend. !neutral !set $gate_open !opengate north",
            "> Thanks! !set thanked",
        ],
    }


@pytest.fixture
def conversation(sample_script, handler, speaker, store, event_bus):
    from parley.dialog.conversation import Conversation
    return Conversation(
        sample_script,
        handler=handler,
        speaker=speaker,
        store=store,
        events=event_bus,
    )
