import pytest

from tunnelsrv import metrics
from tunnelsrv.metrics import ServerMetrics


class _Recorder(ServerMetrics):
    def __init__(self):
        self.events = []

    def new_client(self):
        self.events.append(("new_client",))

    def add_traffic_in(self, name, proxy_type, traffic_bytes):
        self.events.append(("in", name, proxy_type, traffic_bytes))


@pytest.mark.parametrize(
    "method, args",
    [
        ("new_client", ()),
        ("close_client", ()),
        ("new_proxy", ("web", "http")),
        ("close_proxy", ("web", "http")),
        ("open_connection", ("web", "http")),
        ("close_connection", ("web", "http")),
        ("add_traffic_in", ("web", "http", 10)),
        ("add_traffic_out", ("web", "http", 10)),
    ],
)
def test_base_methods_return_none(method, args):
    assert getattr(ServerMetrics(), method)(*args) is None


def test_first_registration_wins():
    before = metrics.server()
    assert isinstance(before, ServerMetrics)

    first = _Recorder()
    metrics.register(first)
    assert metrics.server() is first

    second = _Recorder()
    metrics.register(second)
    assert metrics.server() is first

    metrics.server().new_client()
    metrics.server().add_traffic_in("web", "http", 42)
    assert first.events == [("new_client",), ("in", "web", "http", 42)]
    assert second.events == []