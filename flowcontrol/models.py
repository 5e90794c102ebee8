"""Data models for the flowcontrol adapter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .const import DEFAULT_LOG_LEVEL, DEFAULT_NAMESPACE, DEFAULT_REQUEST_TIMEOUT, LOG_LEVELS
from .exceptions import FlowControlConfigError, FlowControlDataError


@dataclass
class StatusSnapshot:
    """Status reported by the device on /alive."""

    alive: float | int
    valve: str

    @classmethod
    def from_dict(cls, data: Any) -> StatusSnapshot:
        """Build a snapshot from the decoded /alive payload."""
        if not isinstance(data, dict):
            raise FlowControlDataError(f"Expected a JSON object, got {type(data).__name__}")
        try:
            alive = data["alive"]
            valve = data["valve"]
        except KeyError as err:
            raise FlowControlDataError(f"Missing field in status payload: {err}") from err
        if isinstance(alive, bool) or not isinstance(alive, (int, float)):
            raise FlowControlDataError(f"Invalid alive value: {alive!r}")
        if not isinstance(valve, str):
            raise FlowControlDataError(f"Invalid valve value: {valve!r}")
        return cls(alive=alive, valve=valve)


@dataclass
class StateCommon:
    """Descriptive metadata of a state object."""

    name: str
    role: str
    type: str
    read: bool = True
    write: bool = False


@dataclass
class StateObject:
    """A state object as kept by the host state store."""

    common: StateCommon
    type: str = "state"
    native: dict[str, Any] = field(default_factory=dict)


@dataclass
class State:
    """A state value and its acknowledged flag."""

    val: Any
    ack: bool = False


@dataclass
class AdapterConfig:
    """Adapter configuration, taken from the host's native config."""

    server: str | None = None
    log_level: str = DEFAULT_LOG_LEVEL
    request_timeout: float | None = DEFAULT_REQUEST_TIMEOUT
    namespace: str = DEFAULT_NAMESPACE

    def __post_init__(self) -> None:
        """Normalize and validate the config."""
        self.log_level = (self.log_level or DEFAULT_LOG_LEVEL).lower()
        if self.log_level not in LOG_LEVELS:
            raise FlowControlConfigError(
                f"Invalid log level '{self.log_level}'. Must be one of: {', '.join(LOG_LEVELS)}"
            )
        if self.server is not None:
            self.server = self.server.strip() or None
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise FlowControlConfigError("request_timeout must be positive")

    @property
    def logging_level(self) -> str:
        """Level name understood by the logging module."""
        return LOG_LEVELS[self.log_level]

    @classmethod
    def from_native(cls, native: dict[str, Any]) -> AdapterConfig:
        """Build the config from a host native config dict."""
        timeout = native.get("request_timeout", DEFAULT_REQUEST_TIMEOUT)
        if timeout is not None:
            try:
                timeout = float(timeout)
            except (TypeError, ValueError) as err:
                raise FlowControlConfigError(f"Invalid request_timeout: {timeout!r}") from err
        log_level = native.get("loglevel") or native.get("log_level") or DEFAULT_LOG_LEVEL
        return cls(
            server=native.get("server") or None,
            log_level=log_level,
            request_timeout=timeout,
            namespace=native.get("namespace", DEFAULT_NAMESPACE),
        )
