import pytest
from pydantic import ValidationError
from parley.core.component import Component, Speaker

class Mood(Component):
    value: str = "neutral"

def test_speaker_display_name():
    assert Speaker(id="keeper", name="Bridge Keeper").display_name == "Bridge Keeper"
    assert Speaker(id="keeper").display_name == "keeper"

def test_component_forbids_unknown_fields():
    with pytest.raises(ValidationError):
        Speaker(id="keeper", voice="deep")

def test_component_validates_assignment():
    speaker = Speaker(id="keeper")
    with pytest.raises(ValidationError):
        speaker.name = {"invalid": "type"}

def test_subclass_defaults():
    assert Mood().value == "neutral"
    assert Mood(value="sad").value == "sad"
