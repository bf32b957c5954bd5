"""Named collection of call factories, one per remote instance."""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

from .call import CallFactory, OutboundCall
from .codec import default_codec
from .exc import FactoryNotFoundError
from .transport import SerializedTransport

if TYPE_CHECKING:
    from .codec.base import Codec
    from .transport import Transport


class FactoryRegistry:
    """Named collection of :class:`CallFactory` instances.

    Usage::

        registry = FactoryRegistry()
        registry.register("ui", CallFactory("ui", codec, transport))
        registry.register("worker", CallFactory("worker", codec, transport))

        call = registry.create("render", 1)            # default (ui)
        call = registry.create("run", 0, "worker")     # explicit
    """

    def __init__(self) -> None:
        self._factories: dict[str, CallFactory] = {}
        self._default: str | None = None

    def register(self, name: str, factory: CallFactory) -> None:
        """Register a factory under a name. The first one becomes the default."""
        self._factories[name] = factory
        if self._default is None:
            self._default = name

    def get(self, name: str | None = None) -> CallFactory:
        """Get a factory by name, or the default."""
        key = name if name is not None else self._default
        if key is None:
            raise FactoryNotFoundError("No factories registered")
        try:
            return self._factories[key]
        except KeyError:
            available = ", ".join(sorted(self._factories)) or "(none)"
            raise FactoryNotFoundError(
                f"Factory {key!r} not found. Available: {available}"
            )

    def set_default(self, name: str) -> None:
        """Set the default factory name."""
        if name not in self._factories:
            raise FactoryNotFoundError(f"Factory {name!r} not registered")
        self._default = name

    @property
    def default(self) -> str | None:
        """Return the name of the default factory."""
        return self._default

    @property
    def names(self) -> list[str]:
        """Return all registered factory names."""
        return list(self._factories)

    def create(
        self, function: str, parameter_count: int, name: str | None = None,
    ) -> OutboundCall:
        """Shortcut for ``registry.get(name).create(function, parameter_count)``."""
        return self.get(name).create(function, parameter_count)

    @classmethod
    def from_config(
        cls,
        config: dict[str, Any],
        transport: Transport,
        codec: Codec | None = None,
    ) -> FactoryRegistry:
        """Build a registry from a config dict.

        ``instances`` maps registry names to factory settings. ``instance``
        overrides the remote instance identity (defaults to the name) and
        ``serialize`` wraps the transport in a lock::

            FactoryRegistry.from_config({
                "default": "worker",
                "instances": {
                    "ui": {},
                    "worker": {"instance": "bg-worker", "serialize": True},
                },
            }, transport)
        """
        if not isinstance(config, dict):
            raise ValueError(
                f"Config must be a mapping, got {type(config).__name__}"
            )
        codec = codec if codec is not None else default_codec()
        instances = config.get("instances") or {}
        if not isinstance(instances, dict):
            raise ValueError("'instances' must be a mapping of name to settings")
        registry = cls()
        shared_lock: SerializedTransport | None = None
        for name, params in instances.items():
            params = params or {}
            if not isinstance(params, dict):
                raise ValueError(
                    f"Settings for instance {name!r} must be a mapping, "
                    f"got {type(params).__name__}"
                )
            unknown = set(params) - {"instance", "serialize"}
            if unknown:
                raise ValueError(
                    f"Unknown settings for instance {name!r}: {sorted(unknown)}"
                )
            target = transport
            if params.get("serialize", False):
                # one lock per transport, shared by every serialized instance
                if shared_lock is None:
                    shared_lock = SerializedTransport(transport)
                target = shared_lock
            registry.register(
                name, CallFactory(params.get("instance", name), codec, target),
            )
        default = config.get("default")
        if default is not None:
            registry.set_default(default)
        return registry

    def __repr__(self) -> str:
        names = ", ".join(self._factories)
        return f"FactoryRegistry([{names}], default={self._default!r})"
