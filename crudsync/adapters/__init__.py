"""Transport adapters: perform one call, report exactly one outcome."""

from crudsync.adapters.httpx_adapter import HttpxAdapter, http_method

__all__ = ["HttpxAdapter", "http_method"]
