"""Unit tests for the keyed lock registry."""

import threading

from stockflow.domain.service.locks import KeyedLockRegistry, order_key, product_key


def test_key_helpers():
    assert product_key("7") == "product:7"
    assert order_key(7) == "order:7"


def test_hold_is_reentrant():
    locks = KeyedLockRegistry()
    with locks.hold(["product:1", "product:2"]):
        with locks.hold(["product:2"]):
            pass


def test_duplicate_keys_are_acquired_once():
    locks = KeyedLockRegistry()
    with locks.hold(["product:1", "product:1"]):
        pass


def test_held_key_blocks_other_threads():
    locks = KeyedLockRegistry()
    acquired = threading.Event()

    def other():
        with locks.hold(["product:1"]):
            acquired.set()

    with locks.hold(["product:1"]):
        worker = threading.Thread(target=other)
        worker.start()
        assert not acquired.wait(timeout=0.2)

    worker.join(timeout=2)
    assert acquired.is_set()
