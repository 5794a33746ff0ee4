"""numbuf JSON API — dict-in, dict-out interface to buffers and benchmarks."""

from numbuf.api.dispatch import dispatch, json_float, json_values, ACTIONS

__all__ = ["dispatch", "json_float", "json_values", "ACTIONS"]
