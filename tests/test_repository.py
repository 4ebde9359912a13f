"""Tests for the in-memory repository."""

import threading
from concurrent.futures import ThreadPoolExecutor

from photo_uploader.services.repository import InMemoryRepository


def test_keys_start_at_one_and_increase() -> None:
    repository: InMemoryRepository[str] = InMemoryRepository()

    first = repository.add(lambda key: f"value-{key}")
    second = repository.add(lambda key: f"value-{key}")

    assert first == "value-1"
    assert second == "value-2"
    assert repository.get(1) == "value-1"
    assert repository.get(2) == "value-2"


def test_get_unknown_key_returns_none() -> None:
    repository: InMemoryRepository[str] = InMemoryRepository()
    repository.add(str)

    assert repository.get(2) is None
    assert repository.get(0) is None


def test_factory_called_once_per_add() -> None:
    repository: InMemoryRepository[int] = InMemoryRepository()
    seen: list[int] = []

    def factory(key: int) -> int:
        seen.append(key)
        return key * 10

    result = repository.add(factory)

    assert seen == [1]
    assert result == 10


def test_concurrent_adds_get_unique_keys() -> None:
    repository: InMemoryRepository[int] = InMemoryRepository()
    total = 200

    with ThreadPoolExecutor(max_workers=16) as pool:
        keys = list(pool.map(lambda _: repository.add(lambda key: key), range(total)))

    assert sorted(keys) == list(range(1, total + 1))
    assert repository.get(total + 1) is None
    assert all(repository.get(key) == key for key in keys)


def test_value_not_visible_until_factory_returns() -> None:
    repository: InMemoryRepository[str] = InMemoryRepository()
    started = threading.Event()
    release = threading.Event()

    def slow_factory(key: int) -> str:
        started.set()
        release.wait(timeout=5)
        return f"value-{key}"

    worker = threading.Thread(target=repository.add, args=(slow_factory,))
    worker.start()
    started.wait(timeout=5)

    assert repository.get(1) is None

    release.set()
    worker.join(timeout=5)

    assert repository.get(1) == "value-1"


def test_custom_start_key() -> None:
    repository: InMemoryRepository[int] = InMemoryRepository(start=100)

    assert repository.add(lambda key: key) == 100
