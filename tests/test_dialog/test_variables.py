import pytest
from parley.dialog.conversation import Conversation
from parley.dialog.variables import (
    LocalVariables,
    VariableStore,
    default_store,
    is_global_name,
)

SCRIPT = {"entry": ["Hello."]}

def test_is_global_name():
    assert is_global_name("$flag")
    assert not is_global_name("flag")
    assert not is_global_name("")

def test_store_rejects_local_names():
    with pytest.raises(ValueError):
        VariableStore().set("flag", "1")

def test_local_rejects_global_names():
    with pytest.raises(ValueError):
        LocalVariables().set("$flag", "1")

def test_writes_overwrite_silently():
    scope = LocalVariables()
    scope.set("mood", "sad")
    scope.set("mood", "amused")
    assert scope.get("mood") == "amused"
    assert len(scope) == 1
    assert "mood" in scope

def test_global_variables_are_shared_between_conversations(store):
    first = Conversation(SCRIPT, store=store)
    second = Conversation(SCRIPT, store=store)

    first.run_action(["set", "$flag", "1"])

    assert store.get("$flag") == "1"
    assert second.get_variable("$flag") == "1"

def test_local_variables_are_private(store):
    first = Conversation(SCRIPT, store=store)
    second = Conversation(SCRIPT, store=store)

    first.run_action(["set", "mood", "sad"])

    assert first.get_variable("mood") == "sad"
    assert second.get_variable("mood") is None
    assert "mood" not in second.local
    assert "mood" not in store

def test_default_store_is_process_wide():
    first = Conversation(SCRIPT)
    second = Conversation(SCRIPT)

    first.run_action(["set", "$met_keeper"])

    assert second.store is first.store is default_store()
    assert default_store().get("$met_keeper") == "true"

def test_as_dict_is_a_copy():
    scope = LocalVariables()
    scope.set("a", "1")
    snapshot = scope.as_dict()
    snapshot["b"] = "2"
    assert list(scope) == ["a"]
