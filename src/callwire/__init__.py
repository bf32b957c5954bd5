"""callwire — call envelopes for cross-engine function calls.

Usage::

    from callwire import CallFactory, LoopbackTransport, InboundService, default_codec

    codec = default_codec()
    service = InboundService(codec)

    @service.register("greet", [str], str)
    def greet(name):
        return name.upper()

    transport = LoopbackTransport()
    transport.bind("greeter", service)

    factory = CallFactory("greeter", codec, transport)
    call = factory.create("greet", 1)
    call.parameter(str, "hello")
    assert call.invoke(str) == "HELLO"
"""

from .call import OutboundCall, CallFactory, CallState
from .codec import (
    Codec, TypeAdapter, RegistryCodec, default_codec,
)
from .inbound import InboundCall, InboundService
from .transport import Transport, LoopbackTransport, SerializedTransport
from .rpc import RemoteFunction, remote_api
from .registry import FactoryRegistry
from .config import load_config, registry_from_config
from .protocol.buffer import ByteBuffer
from .protocol.framing import build_request, parse_request
from .exc import (
    CallwireError, ProtocolViolation, TransportError, RemoteCallError,
    CodecError, EncodeError, DecodeError, BufferUnderflowError,
    FramingError, UnknownTypeError, FactoryNotFoundError, FunctionNotFoundError,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    'OutboundCall', 'CallFactory', 'CallState',
    'RemoteFunction', 'remote_api',
    'FactoryRegistry', 'load_config', 'registry_from_config',
    # Collaborators
    'Codec', 'TypeAdapter', 'RegistryCodec', 'default_codec',
    'Transport', 'LoopbackTransport', 'SerializedTransport',
    'InboundCall', 'InboundService',
    # Wire
    'ByteBuffer', 'build_request', 'parse_request',
    # Exceptions
    'CallwireError', 'ProtocolViolation', 'TransportError', 'RemoteCallError',
    'CodecError', 'EncodeError', 'DecodeError', 'BufferUnderflowError',
    'FramingError', 'UnknownTypeError', 'FactoryNotFoundError',
    'FunctionNotFoundError',
]
