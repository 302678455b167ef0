"""
Tests for keyed in-process locks.
"""
import threading
import time

from ivrit.utils.locks import KeyedLocks


class TestKeyedLocks:

    def test_released_keys_are_forgotten(self):
        locks = KeyedLocks()
        with locks.hold((1, 2)):
            assert len(locks) == 1
        assert len(locks) == 0

    def test_same_key_is_serialized(self):
        locks = KeyedLocks()
        inside = []
        overlaps = []

        def worker():
            with locks.hold("user-1"):
                if inside:
                    overlaps.append(True)
                inside.append(True)
                time.sleep(0.01)
                inside.pop()

        threads = [threading.Thread(target=worker) for _ in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert overlaps == []
        assert len(locks) == 0
