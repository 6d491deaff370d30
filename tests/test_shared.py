import gc

from kiwi.shared import Shared


def test_get_and_set():
    shared = Shared([1, 2])
    assert shared.get() == [1, 2]
    shared.set([3])
    assert shared.get() == [3]


def test_upgraded_handle_shares_storage():
    shared = Shared("a")
    strong = shared.downgrade().upgrade()
    strong.set("b")
    assert shared.get() == "b"


def test_upgrade_fails_after_all_strong_handles_dropped():
    shared = Shared(object())
    weak = shared.downgrade()
    assert weak.upgrade() is not None and weak.upgrade().get() is shared.get()
    del shared
    gc.collect()
    assert weak.upgrade() is None


def test_new_cyclic_sees_nothing_during_construction():
    class Node:
        def __init__(self, weak):
            self.me = weak
            self.seen = weak.upgrade()

    shared = Shared.new_cyclic(Node)
    node = shared.get()
    assert node.seen is None
    assert node.me.upgrade().get() is node


def test_equality_compares_values():
    assert Shared(5) == Shared(5)
    assert not (Shared(5) == Shared(6))