"""Run the flowcontrol adapter against an in-memory state store."""

from __future__ import annotations

import argparse
import asyncio
import logging

from .adapter import FlowControlAdapter
from .const import DEFAULT_LOG_LEVEL, DEFAULT_REQUEST_TIMEOUT, LOG_LEVELS
from .models import AdapterConfig, State
from .states import MemoryStateStore

_LOGGER = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(prog="flowcontrol", description=__doc__)
    parser.add_argument("server", help="device address, host or host:port")
    parser.add_argument("--log-level", default=DEFAULT_LOG_LEVEL, choices=sorted(LOG_LEVELS))
    parser.add_argument("--timeout", type=float, default=DEFAULT_REQUEST_TIMEOUT)
    return parser.parse_args(argv)


async def _log_change(state_id: str, state: State | None) -> None:
    """Log acknowledged state writes."""
    if state is not None and state.ack:
        _LOGGER.info("%s = %r", state_id, state.val)


async def run(config: AdapterConfig) -> None:
    """Run the adapter until cancelled."""
    store = MemoryStateStore(config.namespace)
    store.subscribe_states("*", _log_change)
    adapter = FlowControlAdapter(config, store)
    await adapter.on_ready()
    try:
        await asyncio.Event().wait()
    finally:
        await adapter.on_unload(lambda: _LOGGER.info("stopped"))


def main(argv: list[str] | None = None) -> None:
    """Command line entry point."""
    args = parse_args(argv)
    config = AdapterConfig(server=args.server, log_level=args.log_level, request_timeout=args.timeout)
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        asyncio.run(run(config))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
