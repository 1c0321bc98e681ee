import pygame
import pytest
from input.keymap import (DEFAULT_BINDINGS, ACTIONS, serialize_bindings,
                          deserialize_bindings, name_to_keycode)

@pytest.fixture(autouse=True)
def video():
    pygame.display.init()
    yield
    pygame.display.quit()

def test_defaults_use_known_actions():
    assert set(DEFAULT_BINDINGS.values()) <= set(ACTIONS)
    assert DEFAULT_BINDINGS[pygame.K_g] == "start"
    assert DEFAULT_BINDINGS[pygame.K_RETURN] == "load_preset"

def test_round_trip():
    obj = serialize_bindings({pygame.K_g: "start", pygame.K_SPACE: "quit"})
    assert obj == {"g": "start", "space": "quit"}
    assert deserialize_bindings(obj) == {pygame.K_g: "start", pygame.K_SPACE: "quit"}

def test_numeric_keycode_allowed():
    assert name_to_keycode(str(pygame.K_h)) == pygame.K_h

def test_unknown_action():
    with pytest.raises(ValueError):
        deserialize_bindings({"g": "explode"})

def test_unknown_key_name():
    with pytest.raises(ValueError):
        deserialize_bindings({"no such key": "start"})
