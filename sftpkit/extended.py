"""SSH_FXP_EXTENDED requests and SSH_FXP_EXTENDED_REPLY responses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from .wire import Buffer, PacketType

_extended_types: dict[str, Any] = {}


def register_extended_packet_type(name: str, factory: Any) -> None:
    """Register how the data of the extended request ``name`` is decoded.

    ``factory`` must offer ``from_buffer(buf)`` returning the decoded data,
    which in turn must offer ``marshal_into(buf)``.
    """
    _extended_types[name] = factory


@dataclass
class RawExtendedData:
    """Extended data of an unregistered kind, kept as raw bytes."""

    data: bytes = b""

    def marshal_into(self, buf: Buffer) -> None:
        for byte in self.data:
            buf.append_uint8(byte)

    @classmethod
    def from_buffer(cls, buf: Buffer) -> RawExtendedData:
        """Consume everything left in the buffer."""
        return cls(data=bytes(buf.consume_uint8() for _ in range(len(buf))))


@dataclass
class ExtendedPacket:
    """SSH_FXP_EXTENDED: a named vendor request with request-specific data."""

    TYPE: ClassVar[PacketType] = PacketType.EXTENDED

    extended_request: str = ""
    data: Any = None

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Encode as header and payload with the given request id."""
        buf = Buffer()
        buf.start_packet(self.TYPE, request_id)
        buf.append_string(self.extended_request)
        if self.data is not None:
            self.data.marshal_into(buf)
        return buf.packet()

    @classmethod
    def from_body(cls, buf: Buffer) -> ExtendedPacket:
        """Decode the body; registered requests get their own data type."""
        name = buf.consume_string()
        decoder = _extended_types.get(name, RawExtendedData)
        return cls(extended_request=name, data=decoder.from_buffer(buf))


@dataclass
class ExtendedReplyPacket:
    """SSH_FXP_EXTENDED_REPLY: the reply to an extended request."""

    TYPE: ClassVar[PacketType] = PacketType.EXTENDED_REPLY

    data: Any = None

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Encode as header and payload with the given request id."""
        buf = Buffer()
        buf.start_packet(self.TYPE, request_id)
        if self.data is not None:
            self.data.marshal_into(buf)
        return buf.packet()

    @classmethod
    def from_body(cls, buf: Buffer, data_type: Any = None) -> ExtendedReplyPacket:
        """Decode the body with ``data_type.from_buffer``, or as raw bytes."""
        decoder = data_type if data_type is not None else RawExtendedData
        return cls(data=decoder.from_buffer(buf))