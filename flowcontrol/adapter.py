"""Adapter mirroring a flowcontrol device into a host state store."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Coroutine

import aiohttp

from .const import (
    ALIVE_UNKNOWN,
    COMMAND_LEAF,
    ERROR_COMMAND_FAILED,
    ERROR_SUCCESS,
    POLL_INTERVAL,
    RETRY_INTERVAL,
    STATE_ALIVE,
    STATE_COMMAND_VALVE,
    STATE_CONNECTED,
    STATE_DEFINITIONS,
    STATE_ERROR,
    STATE_VALVE,
    VALVE_UNKNOWN,
)
from .exceptions import FlowControlConnectionError, FlowControlDataError
from .flowcontrol import FlowControl
from .models import AdapterConfig, State
from .states import StateStore, upsert_state

_LOGGER = logging.getLogger(__name__)


class FlowControlAdapter:
    """Polls the device status and forwards valve commands to it."""

    def __init__(
        self,
        config: AdapterConfig,
        store: StateStore,
        client: FlowControl | None = None,
        websession: aiohttp.ClientSession | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            config: Adapter configuration
            store: State store of the host platform
            client: Optional device client. Built from config.server when omitted.
            websession: Optional aiohttp ClientSession handed to the built client
        """
        self.config = config
        self.store = store
        if client is None and config.server:
            client = FlowControl(
                config.server,
                websession=websession,
                request_timeout=config.request_timeout,
            )
        self.client = client
        self.next_poll_delay: float | None = None
        self._poll_task: asyncio.Task | None = None
        self._tasks: set[asyncio.Task] = set()
        self._unloaded = False

    async def set_state(self, state_id: str, value: Any) -> None:
        """Upsert one of the known states with an acknowledged value."""
        name, role, type_, writable = STATE_DEFINITIONS[state_id]
        await upsert_state(self.store, state_id, name, role, type_, value, writable)

    async def on_ready(self) -> None:
        """Start operation once the host has connected its databases."""
        logging.getLogger(__package__).setLevel(self.config.logging_level)
        _LOGGER.info("address of flowcontrol server: %s", self.config.server)
        if self.client is None:
            _LOGGER.warning("No server configured, status polling disabled")

        self.store.subscribe_states("*", self.on_state_change)

        await self.reset_states()
        await self.poll()

    async def on_unload(self, callback: Callable[[], None]) -> None:
        """Release resources; callback is always invoked."""
        self._unloaded = True
        try:
            tasks = [task for task in (self._poll_task, *self._tasks) if task is not None]
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            self._poll_task = None
            if self.client is not None:
                await self.client.close_connection()
            _LOGGER.info("cleaned everything up...")
        except Exception:
            _LOGGER.exception("Error while unloading")
        finally:
            callback()

    async def reset_states(self) -> None:
        """Write the startup values of the command, valve and error states."""
        await self.set_state(STATE_COMMAND_VALVE, False)
        await self.set_state(STATE_VALVE, VALVE_UNKNOWN)
        await self.set_state(STATE_ERROR, ERROR_SUCCESS)

    async def poll(self, repeat: bool = True) -> None:
        """Fetch the device status once and mirror it into the store.

        With repeat set, the next poll is scheduled after POLL_INTERVAL on
        success and RETRY_INTERVAL on failure.
        """
        if self.client is None or self._unloaded:
            return

        try:
            status = await self.client.fetch_status()
        except FlowControlConnectionError as err:
            _LOGGER.warning("Error: %s", err)
            await self._set_offline()
            delay = RETRY_INTERVAL
        except FlowControlDataError as err:
            _LOGGER.error("Invalid status from %s: %s", self.config.server, err)
            await self._set_offline()
            delay = RETRY_INTERVAL
        else:
            await self.set_state(STATE_CONNECTED, True)
            await self.set_state(STATE_ALIVE, status.alive)
            await self.set_state(STATE_VALVE, status.valve)
            delay = POLL_INTERVAL

        if repeat:
            self._schedule_poll(delay)

    async def _set_offline(self) -> None:
        """Write the states reported while the device is unreachable."""
        await self.set_state(STATE_CONNECTED, False)
        await self.set_state(STATE_ALIVE, ALIVE_UNKNOWN)
        await self.set_state(STATE_VALVE, VALVE_UNKNOWN)

    def _schedule_poll(self, delay: float) -> None:
        """Replace the pending poll with one due after delay seconds."""
        current = asyncio.current_task()
        if self._poll_task is not None and self._poll_task is not current:
            self._poll_task.cancel()
        self.next_poll_delay = delay
        self._poll_task = asyncio.create_task(self._delayed_poll(delay))

    async def _delayed_poll(self, delay: float) -> None:
        """Sleep, then poll and reschedule."""
        await asyncio.sleep(delay)
        await self.poll()

    async def on_state_change(self, state_id: str, state: State | None) -> None:
        """Handle a state change notification from the host."""
        _LOGGER.info("stateChange %s %s", state_id, state)

        if self._unloaded:
            return
        if not state_id or state is None or state.ack:
            return
        parts = state_id.split(".")
        if len(parts) != 4:
            _LOGGER.info("what are you trying to set in %s???", state_id)
            return
        if parts[3] == COMMAND_LEAF:
            if state.val:
                self._track(self.valve_on())
            else:
                self._track(self.valve_off())

    def _track(self, coro: Coroutine[Any, Any, None]) -> None:
        """Run a command coroutine as a task cancelled on unload."""
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def wait_pending(self) -> None:
        """Wait for in-flight command tasks."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def valve_on(self) -> None:
        """Send flowon; the outcome is not reflected in any state."""
        if self.client is None:
            return
        await self.client.valve_on()

    async def valve_off(self) -> None:
        """Send flowoff, report the outcome and refresh the status once."""
        if self.client is not None and await self.client.valve_off():
            await self.set_state(STATE_ERROR, ERROR_SUCCESS)
            await self.poll(repeat=False)
        else:
            await self.set_state(STATE_ERROR, ERROR_COMMAND_FAILED)
