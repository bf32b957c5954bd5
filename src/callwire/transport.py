"""Transports: deliver a request payload to a remote instance and return the response.

The core only depends on :class:`Transport`. :class:`LoopbackTransport`
serves calls from in-process :class:`~callwire.inbound.InboundService`
objects; :class:`SerializedTransport` makes calls into a single-threaded
engine mutually exclusive.
"""

from __future__ import annotations

import logging
import threading
from typing import Protocol, TYPE_CHECKING

from .exc import RemoteCallError

if TYPE_CHECKING:
    from .inbound import InboundService

log = logging.getLogger("callwire.transport")


class Transport(Protocol):
    """Blocking request/response channel to a remote engine."""

    def invoke_remote(self, instance: str, function: str, payload: bytes) -> bytes: ...


class LoopbackTransport:
    """Dispatches calls to services bound in the same process."""

    def __init__(self) -> None:
        self._services: dict[str, InboundService] = {}

    def bind(self, instance: str, service: InboundService) -> None:
        """Serve *service* under the instance name *instance*."""
        self._services[instance] = service
        log.debug("bound instance %s (%d functions)", instance, len(service.functions))

    def unbind(self, instance: str) -> None:
        self._services.pop(instance, None)

    @property
    def instances(self) -> list[str]:
        return list(self._services)

    def invoke_remote(self, instance: str, function: str, payload: bytes) -> bytes:
        service = self._services.get(instance)
        if service is None:
            raise RemoteCallError(instance, function, "no such instance")
        if function not in service:
            raise RemoteCallError(instance, function, "no such function")
        try:
            return service.dispatch(function, payload)
        except Exception as exc:
            log.warning("remote call %s.%s failed: %s", instance, function, exc)
            raise RemoteCallError(instance, function, str(exc)) from exc


class SerializedTransport:
    """Wraps a transport so only one call runs at a time."""

    def __init__(self, inner: Transport) -> None:
        self.inner = inner
        self._lock = threading.Lock()

    def invoke_remote(self, instance: str, function: str, payload: bytes) -> bytes:
        with self._lock:
            return self.inner.invoke_remote(instance, function, payload)
