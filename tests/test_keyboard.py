from kiwi.keyboard import Keyboard, KeyState


def test_unknown_key_has_no_state():
    kb = Keyboard()
    assert kb.get_key_state("w") is None
    assert not kb.is_key_pressed("w")
    assert not kb.is_key_held("w")


def test_press_then_hold():
    kb = Keyboard()
    kb.press_key("w")
    assert kb.is_key_pressed("w")
    assert not kb.is_key_held("w")
    kb.update_keys()
    assert kb.is_key_held("w")
    assert not kb.is_key_pressed("w")
    kb.update_keys()
    assert kb.get_key_state("w") is KeyState.HELD


def test_release_then_up():
    kb = Keyboard()
    kb.press_key("a")
    kb.update_keys()
    kb.release_key("a")
    assert kb.get_key_state("a") is KeyState.RELEASED
    kb.update_keys()
    assert kb.get_key_state("a") is KeyState.UP
    kb.update_keys()
    assert kb.get_key_state("a") is KeyState.UP


def test_set_key_state_directly():
    kb = Keyboard()
    kb.set_key_state("s", KeyState.HELD)
    assert kb.is_key_held("s")
    kb.set_key_state("s", KeyState.UP)
    assert not kb.is_key_held("s")


def test_keys_are_independent():
    kb = Keyboard()
    kb.press_key("w")
    kb.release_key("d")
    kb.update_keys()
    assert kb.get_key_state("w") is KeyState.HELD
    assert kb.get_key_state("d") is KeyState.UP