import threading

import pytest

from tunnelsrv.proxies import ProxyNameInUse, ProxyRegistry


class _FakeProxy:
    def __init__(self, name):
        self.name = name


def test_add_then_get_returns_same_proxy():
    registry = ProxyRegistry()
    proxy = _FakeProxy("web")
    registry.add("web", proxy)
    assert registry.get("web") is proxy
    assert "web" in registry
    assert len(registry) == 1


def test_get_unknown_name_returns_none():
    registry = ProxyRegistry()
    assert registry.get("missing") is None
    assert "missing" not in registry


def test_duplicate_name_is_rejected_and_keeps_first():
    registry = ProxyRegistry()
    first = _FakeProxy("ssh")
    registry.add("ssh", first)
    with pytest.raises(ProxyNameInUse) as info:
        registry.add("ssh", _FakeProxy("ssh"))
    assert str(info.value) == "proxy name [ssh] is already in use"
    assert info.value.name == "ssh"
    assert registry.get("ssh") is first


def test_delete_removes_and_frees_name():
    registry = ProxyRegistry()
    registry.add("a", _FakeProxy("a"))
    registry.delete("a")
    assert registry.get("a") is None
    replacement = _FakeProxy("a")
    registry.add("a", replacement)
    assert registry.get("a") is replacement


def test_delete_unknown_leaves_others():
    registry = ProxyRegistry()
    kept = _FakeProxy("kept")
    registry.add("kept", kept)
    registry.delete("other")
    assert registry.get("kept") is kept
    assert registry.names() == ["kept"]


def test_iteration_lists_all_names():
    registry = ProxyRegistry()
    for name in ("x", "y", "z"):
        registry.add(name, _FakeProxy(name))
    assert sorted(registry) == ["x", "y", "z"]


def test_concurrent_adds_of_same_name_only_one_wins():
    registry = ProxyRegistry()
    barrier = threading.Barrier(8)
    results = []
    lock = threading.Lock()

    def worker(index):
        barrier.wait()
        try:
            registry.add("shared", index)
            outcome = "ok"
        except ProxyNameInUse:
            outcome = "dup"
        with lock:
            results.append((index, outcome))

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    winners = [index for index, outcome in results if outcome == "ok"]
    assert len(winners) == 1
    assert registry.get("shared") == winners[0]
    assert len(registry) == 1