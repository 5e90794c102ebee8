"""State store access for the flowcontrol adapter."""

from __future__ import annotations

import fnmatch
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable

from .const import DEFAULT_NAMESPACE
from .models import State, StateCommon, StateObject

_LOGGER = logging.getLogger(__name__)

StateHandler = Callable[[str, "State | None"], Awaitable[None]]


class StateStore(ABC):
    """Host state store as seen by the adapter.

    Ids passed in are relative to the adapter namespace; change
    notifications carry the full id.
    """

    @abstractmethod
    async def get_object(self, state_id: str) -> StateObject | None:
        """Return the object for an id, or None."""

    @abstractmethod
    async def set_object(self, state_id: str, obj: StateObject) -> None:
        """Create or replace an object."""

    @abstractmethod
    async def get_state(self, state_id: str) -> State | None:
        """Return the current state of an id, or None."""

    @abstractmethod
    async def set_state_changed(self, state_id: str, state: State) -> bool:
        """Write a state if it differs from the stored one; return True if written."""

    @abstractmethod
    def subscribe_states(self, pattern: str, handler: StateHandler) -> None:
        """Register a handler for changes of ids matching pattern."""


async def upsert_state(
    store: StateStore,
    state_id: str,
    name: str,
    role: str,
    type_: str,
    value: Any,
    writable: bool = False,
) -> None:
    """Create the state object if missing, then write value acknowledged."""
    if await store.get_object(state_id) is None:
        _LOGGER.debug("Creating state object %s", state_id)
        await store.set_object(
            state_id,
            StateObject(common=StateCommon(name=name, role=role, type=type_, read=True, write=writable)),
        )
    await store.set_state_changed(state_id, State(val=value, ack=True))


class MemoryStateStore(StateStore):
    """Dict backed state store."""

    def __init__(self, namespace: str = DEFAULT_NAMESPACE) -> None:
        self.namespace = namespace
        self.objects: dict[str, StateObject] = {}
        self.states: dict[str, State] = {}
        self._subscriptions: list[tuple[str, StateHandler]] = []

    def full_id(self, state_id: str) -> str:
        """Return the namespaced id used in notifications."""
        return f"{self.namespace}.{state_id}"

    async def get_object(self, state_id: str) -> StateObject | None:
        """Return the object for an id, or None."""
        return self.objects.get(state_id)

    async def set_object(self, state_id: str, obj: StateObject) -> None:
        """Create or replace an object."""
        self.objects[state_id] = obj

    async def get_state(self, state_id: str) -> State | None:
        """Return the current state of an id, or None."""
        return self.states.get(state_id)

    async def set_state_changed(self, state_id: str, state: State) -> bool:
        """Write and notify only when value or ack differ."""
        if self.states.get(state_id) == state:
            return False
        await self._write(state_id, state)
        return True

    async def set_state(self, state_id: str, val: Any, ack: bool = False) -> None:
        """Write a state unconditionally, as the host does for user commands."""
        await self._write(state_id, State(val=val, ack=ack))

    def subscribe_states(self, pattern: str, handler: StateHandler) -> None:
        """Register a handler for a pattern relative to the namespace."""
        self._subscriptions.append((self.full_id(pattern), handler))

    async def _write(self, state_id: str, state: State) -> None:
        """Store a state and notify matching subscribers."""
        self.states[state_id] = state
        full_id = self.full_id(state_id)
        for pattern, handler in list(self._subscriptions):
            if fnmatch.fnmatchcase(full_id, pattern):
                await handler(full_id, state)
