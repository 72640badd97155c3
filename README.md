# tunnelsrv

Bookkeeping for the server side of a reverse tunnelling proxy. In such a
system a client behind a firewall registers proxies with a server, and the
server opens public ports for them. This package keeps track of those ports,
the proxies and the client sessions, and counts what happens to them.

## Modules

- `tunnelsrv.ports` — `PortManager(net_type, bind_addr, allow_ports=None, *, clean_interval=3600.0)`
  hands out TCP or UDP ports (`net_type` is `"tcp"` or `"udp"`) from an
  allow-list, or from the whole range 1–65535 when no allow-list is given.
  - `acquire(name, port)` takes a port for the proxy `name`. With `port` 0 it
    first tries the port that proxy had last, then up to five randomly chosen
    free ports. It returns the port it took.
  - `release(port)` puts a used port back into the free set.
  - `is_port_available(port)` checks whether the port can be bound on the bind
    address right now.
  - `clean_reserved()` forgets the remembered port of proxies whose port was
    released more than 24 hours ago. Unless `clean_interval` is `None`, a
    daemon thread calls it at that interval.

  Failures raise subclasses of `PortError`: `PortAlreadyUsed`,
  `PortNotAllowed`, `PortUnavailable` and `NoAvailablePort`. Each
  `PortContext` records the proxy name, the port, whether it is closed and when
  it last changed.
- `tunnelsrv.proxies` — `ProxyRegistry` is a thread-safe map from proxy name to
  proxy object, with `add`, `delete` and `get`, plus `names()`, `in`, `len()`
  and iteration. `add` raises `ProxyNameInUse` for a name already taken.
- `tunnelsrv.controls` — `ControlRegistry` maps a client's run id to its
  control session. `add(run_id, control)` calls `replaced(new)` on any older
  session with the same run id and returns that older session.
  `delete(run_id, control)` removes the entry only if it is still that same
  session. `get` returns the session or `None`. The registry also has
  `run_ids()`, `in`, `len()` and iteration.
- `tunnelsrv.metrics` — `ServerMetrics` receives server events (`new_client`,
  `close_client`, `new_proxy`, `close_proxy`, `open_connection`,
  `close_connection`, `add_traffic_in`, `add_traffic_out`). It keeps in-memory
  counters of them: `client_count`, `proxy_type_counts`,
  `current_connections`, `traffic_in` and `traffic_out`. `server()` returns the
  sink in use. `register(metrics)` installs a sink, and only its first call has
  any effect.

## Example

```python
from tunnelsrv.ports import PortManager, PortNotAllowed
from tunnelsrv.proxies import ProxyRegistry

ports = PortManager("tcp", "127.0.0.1", allow_ports={20000, 20001}, clean_interval=None)
port = ports.acquire("web", 0)        # any free allowed port
try:
    ports.acquire("db", 25003)
except PortNotAllowed:
    pass

proxies = ProxyRegistry()
proxies.add("web", object())
ports.release(port)
```

## What this package does not do

It opens no listeners and relays no traffic. It has no client login, no work
connections, no proxy groups or HTTP routing, no dashboard and no command to
start a server. `PortManager` only binds a socket for a moment to test whether
a port is free. The registries hold whatever objects you give them.

## Installing and testing

```
pip install .[test]
pytest
```