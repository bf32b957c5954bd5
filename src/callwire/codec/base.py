"""Codec interfaces and the tag-keyed adapter registry."""

from __future__ import annotations

from typing import Any, Hashable, Protocol

from ..exc import DecodeError, UnknownTypeError
from ..protocol.buffer import ByteBuffer


class TypeAdapter(Protocol):
    """Encodes and decodes values of one type."""

    name: str

    def encode(self, value: Any, sink: ByteBuffer) -> None: ...

    def decode(self, source: ByteBuffer) -> Any: ...


class Codec(Protocol):
    """Turns a value of a given type into bytes and back.

    ``type_tag`` is supplied explicitly by the caller; a codec never
    inspects the value to choose how to encode it.
    """

    def encode(self, value: Any, sink: ByteBuffer, type_tag: Hashable) -> None: ...

    def decode(self, source: ByteBuffer, type_tag: Hashable) -> Any: ...


class RegistryCodec:
    """Codec that dispatches on an explicit type tag.

    Usage::

        codec = RegistryCodec()
        codec.register('str', StrAdapter())
        codec.register(str, StrAdapter())  # a Python type works as a tag too

        sink = ByteBuffer()
        codec.encode("hello", sink, 'str')
        assert codec.decode(sink, str) == "hello"

    Each value occupies the whole of the source it is decoded from, so
    :meth:`decode` fails if the adapter leaves bytes unread.
    """

    def __init__(self) -> None:
        self._adapters: dict[Hashable, TypeAdapter] = {}

    def register(self, tag: Hashable, adapter: TypeAdapter) -> None:
        """Register *adapter* under *tag*, replacing any previous one."""
        self._adapters[tag] = adapter

    def adapter_for(self, tag: Hashable) -> TypeAdapter:
        try:
            return self._adapters[tag]
        except (KeyError, TypeError):
            raise UnknownTypeError(f"No adapter registered for type tag {tag!r}")

    @property
    def tags(self) -> list[Hashable]:
        return list(self._adapters)

    def encode(self, value: Any, sink: ByteBuffer, type_tag: Hashable) -> None:
        self.adapter_for(type_tag).encode(value, sink)

    def decode(self, source: ByteBuffer, type_tag: Hashable) -> Any:
        adapter = self.adapter_for(type_tag)
        value = adapter.decode(source)
        if not source.exhausted():
            raise DecodeError(
                f"{len(source)} trailing bytes after {adapter.name} value"
            )
        return value

    def __repr__(self) -> str:
        names = ", ".join(repr(t) for t in self._adapters)
        return f"RegistryCodec({names})"
