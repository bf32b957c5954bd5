"""Typed helpers that turn a Python call into an :class:`~callwire.call.OutboundCall`."""

from __future__ import annotations

import functools
import inspect
from typing import Any, Callable, Hashable, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from .call import CallFactory


class RemoteFunction:
    """Reusable wrapper around a named remote function with declared types.

    Usage::

        greet = RemoteFunction("greet", [str], str)
        result = greet(factory, "hello")
    """

    def __init__(
        self,
        func_name: str,
        parameter_types: Sequence[Hashable],
        result_type: Hashable,
    ) -> None:
        self.func_name = func_name
        self.parameter_types = tuple(parameter_types)
        self.result_type = result_type

    def __call__(self, factory: CallFactory, *args: Any) -> Any:
        if len(args) != len(self.parameter_types):
            raise TypeError(
                f"{self.func_name}() takes {len(self.parameter_types)} "
                f"arguments but {len(args)} were given"
            )
        call = factory.create(self.func_name, len(self.parameter_types))
        for type_tag, value in zip(self.parameter_types, args):
            call.parameter(type_tag, value)
        return call.invoke(self.result_type)

    def __repr__(self) -> str:
        return f"RemoteFunction({self.func_name!r})"


def remote_api(
    func_name: str,
    parameter_types: Sequence[Hashable],
    result_type: Hashable,
) -> Callable[..., Callable[..., Any]]:
    """Decorator that maps a typed Python signature to a remote function call.

    The decorated function's body is never executed. Arguments after the
    factory are bound against the signature, so keyword arguments are
    sent in declaration order and a ``*args`` parameter is expanded in
    place. A ``**kwargs`` parameter has no order and is rejected.

    Usage::

        @remote_api("sum", [int, int], int)
        def add(factory, a: int, b: int): ...

        add(factory, 3, b=4)
    """
    rfunc = RemoteFunction(func_name, parameter_types, result_type)

    def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
        sig = inspect.signature(fn)
        params = list(sig.parameters.values())[1:]
        if any(p.kind is inspect.Parameter.VAR_KEYWORD for p in params):
            raise TypeError(
                f"{fn.__name__}: **kwargs cannot be mapped to {func_name}() parameters"
            )

        @functools.wraps(fn)
        def wrapper(factory: CallFactory, *args: Any, **kwargs: Any) -> Any:
            bound = sig.bind(factory, *args, **kwargs)
            bound.apply_defaults()
            ordered: list[Any] = []
            for p in params:
                value = bound.arguments[p.name]
                if p.kind is inspect.Parameter.VAR_POSITIONAL:
                    ordered.extend(value)
                else:
                    ordered.append(value)
            return rfunc(factory, *ordered)

        wrapper._remote_function = rfunc  # type: ignore[attr-defined]
        return wrapper

    return decorator
