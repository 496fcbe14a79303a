"""Tests for the authorization gate and its readers-writer lock."""

import threading
from concurrent.futures import ThreadPoolExecutor

from menu_bot.core.auth import AuthorizationGate, ReadWriteLock


def test_grant_and_is_authorized() -> None:
    gate = AuthorizationGate()
    assert not gate.is_authorized(1)
    gate.grant(1)
    assert gate.is_authorized(1)
    assert not gate.is_authorized(2)


def test_grant_is_idempotent() -> None:
    gate = AuthorizationGate()
    gate.grant(7)
    gate.grant(7)
    assert gate.is_authorized(7)
    assert gate._authorized == {7}


def test_concurrent_grants_and_reads() -> None:
    gate = AuthorizationGate()

    def work(i: int) -> bool:
        gate.grant(i)
        return gate.is_authorized(i)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(work, range(200)))

    assert all(results)
    assert all(gate.is_authorized(i) for i in range(200))


def test_readers_share_the_lock() -> None:
    lock = ReadWriteLock()
    # both readers must be inside the lock at once to pass the barrier
    barrier = threading.Barrier(2, timeout=2)
    errors: list[BaseException] = []

    def reader() -> None:
        try:
            with lock.read():
                barrier.wait()
        except BaseException as exc:  # pragma: no cover - reported below
            errors.append(exc)

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)
    assert errors == []


def test_writer_excludes_readers() -> None:
    lock = ReadWriteLock()
    entered = threading.Event()

    def reader() -> None:
        with lock.read():
            entered.set()

    with lock.write():
        t = threading.Thread(target=reader)
        t.start()
        assert not entered.wait(timeout=0.1)
    t.join(timeout=5)
    assert entered.is_set()


def test_readers_block_writer() -> None:
    lock = ReadWriteLock()
    entered = threading.Event()

    def writer() -> None:
        with lock.write():
            entered.set()

    with lock.read():
        t = threading.Thread(target=writer)
        t.start()
        assert not entered.wait(timeout=0.1)
    t.join(timeout=5)
    assert entered.is_set()
