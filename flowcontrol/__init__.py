"""Python adapter for flowcontrol valve controllers."""

from .adapter import FlowControlAdapter
from .exceptions import (
    FlowControlConfigError,
    FlowControlConnectionError,
    FlowControlDataError,
    FlowControlError,
)
from .flowcontrol import FlowControl
from .models import AdapterConfig, State, StateCommon, StateObject, StatusSnapshot
from .states import MemoryStateStore, StateStore, upsert_state

__all__ = [
    "AdapterConfig",
    "FlowControl",
    "FlowControlAdapter",
    "FlowControlConfigError",
    "FlowControlConnectionError",
    "FlowControlDataError",
    "FlowControlError",
    "MemoryStateStore",
    "State",
    "StateCommon",
    "StateObject",
    "StateStore",
    "StatusSnapshot",
    "upsert_state",
]
