"""Value codecs for call parameters and results.

Usage::

    from callwire.codec import default_codec

    codec = default_codec()
    codec.encode(42, sink, 'int')
    codec.encode("hi", sink, str)
"""

from __future__ import annotations

from .base import Codec, TypeAdapter, RegistryCodec
from .adapters import (
    UnitAdapter, BoolAdapter, StructAdapter, FloatAdapter,
    StrAdapter, BytesAdapter, JsonAdapter, int_adapter,
)


def default_codec() -> RegistryCodec:
    """Return a codec with the built-in adapters registered.

    Each adapter is reachable by name and, where one exists, by the
    matching Python type.
    """
    codec = RegistryCodec()
    builtins = [
        (UnitAdapter(), type(None)),
        (BoolAdapter(), bool),
        (int_adapter(), int),
        (FloatAdapter(), float),
        (StrAdapter(), str),
        (BytesAdapter(), bytes),
        (JsonAdapter(), None),
    ]
    for adapter, python_type in builtins:
        codec.register(adapter.name, adapter)
        if python_type is not None:
            codec.register(python_type, adapter)
    return codec


__all__ = [
    'Codec', 'TypeAdapter', 'RegistryCodec', 'default_codec',
    'UnitAdapter', 'BoolAdapter', 'StructAdapter', 'FloatAdapter',
    'StrAdapter', 'BytesAdapter', 'JsonAdapter', 'int_adapter',
]
