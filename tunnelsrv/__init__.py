"""Port allocation, proxy and client-control registries, and metrics for a reverse tunnelling proxy server."""

__version__ = "0.1.0"

__all__ = ["controls", "metrics", "ports", "proxies"]