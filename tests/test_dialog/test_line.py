from unittest.mock import MagicMock, call
import pytest
from parley.dialog.conversation import Conversation
from parley.errors import InvalidStateError

def make_conversation(lines, handler, **states):
    script = {"entry": lines, **states}
    return Conversation(script, handler=handler, speaker="npc")

def test_line_attributes(handler):
    conversation = make_conversation(["> Sure thing. @shop !wave"], handler, shop=[])
    line = conversation.lines("entry")[0]

    assert line.full == "> Sure thing. @shop !wave"
    assert line.conversation is conversation
    assert line.is_npc is False
    assert line.line == line.text == "Sure thing."
    assert line.target_state == "shop"
    assert line.actions == (("wave",),)

def test_early_and_late_actions_run_in_their_phase(handler):
    conversation = make_conversation(["I am so sad today. !sad !cry loudly"], handler)
    line = conversation.lines("entry")[0]

    line.execute_before_line()
    assert handler.run_action.call_args_list == [call("sad", "npc", [])]

    handler.reset_mock()
    line.execute()
    assert handler.run_action.call_args_list == [call("cry", "npc", ["loudly"])]

def test_early_actions_keep_source_order(handler):
    conversation = make_conversation(["Hm. !wave !angry !nod !bored"], handler)
    line = conversation.lines("entry")[0]

    line.execute_before_line()

    assert [c.args[0] for c in handler.run_action.call_args_list] == ["angry", "bored"]

def test_execute_marks_visited(handler):
    conversation = make_conversation(["Hello."], handler)
    line = conversation.lines("entry")[0]

    assert not line.was_visited()
    line.execute_before_line()
    assert not line.was_visited()
    line.execute()
    assert line.was_visited()

def test_state_transition_happens_before_late_actions(handler):
    conversation = make_conversation(["> Let's go. @forest !look"], handler, forest=["Trees."])
    line = conversation.lines("entry")[0]
    seen_states = []
    handler.run_action.side_effect = lambda verb, speaker, args: seen_states.append(conversation.current_state)

    line.execute()

    assert seen_states == ["forest"]
    assert conversation.position == ("forest", 0)

def test_execute_into_missing_state_fails(handler):
    conversation = make_conversation(["> Go. @nowhere !look"], handler)
    line = conversation.lines("entry")[0]

    with pytest.raises(InvalidStateError):
        line.execute()

    assert line.was_visited()
    handler.run_action.assert_not_called()

def test_is_early_action(handler):
    line = make_conversation(["Hi."], handler).lines("entry")[0]
    for verb in ["angry", "sad", "amused", "neutral", "bored"]:
        assert line.is_early_action(verb)
    assert not line.is_early_action("end")
    assert not line.is_early_action("set")

def test_builtin_actions_through_line(handler):
    conversation = make_conversation(["Bye! !set $left !set mood grumpy !end"], handler)
    line = conversation.lines("entry")[0]

    line.execute_before_line()
    assert not conversation.has_ended()

    line.execute()
    assert conversation.get_variable("$left") == "true"
    assert conversation.get_variable("mood") == "grumpy"
    assert conversation.has_ended()
    handler.run_action.assert_not_called()
