"""Runtime context exports."""

from repricer.runtime.context import RunContext, create_run_context

__all__ = [
    "RunContext",
    "create_run_context",
]
