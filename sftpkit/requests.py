"""Decoding of arbitrary request packets, as a server receives them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, BinaryIO

from .extended import ExtendedPacket
from .handle_packets import (
    ClosePacket,
    FSetstatPacket,
    FStatPacket,
    ReadDirPacket,
    ReadPacket,
    WritePacket,
)
from .open_packets import OpenDirPacket, OpenPacket
from .path_packets import (
    LStatPacket,
    MkdirPacket,
    ReadLinkPacket,
    RealPathPacket,
    RemovePacket,
    RenamePacket,
    RmdirPacket,
    SetstatPacket,
    StatPacket,
    SymlinkPacket,
)
from .wire import (
    DEFAULT_MAX_PACKET_LENGTH,
    Buffer,
    PacketError,
    PacketType,
    compose_packet,
    read_packet,
)

_REQUEST_TYPES: dict[int, Any] = {
    packet_class.TYPE: packet_class
    for packet_class in (
        OpenPacket,
        ClosePacket,
        ReadPacket,
        WritePacket,
        LStatPacket,
        FStatPacket,
        SetstatPacket,
        FSetstatPacket,
        OpenDirPacket,
        ReadDirPacket,
        RemovePacket,
        MkdirPacket,
        RmdirPacket,
        RealPathPacket,
        StatPacket,
        RenamePacket,
        ReadLinkPacket,
        SymlinkPacket,
        ExtendedPacket,
    )
}


def _request_class(packet_type: int) -> Any:
    try:
        return _REQUEST_TYPES[int(packet_type)]
    except KeyError:
        try:
            shown: object = PacketType(packet_type)
        except ValueError:
            shown = packet_type
        raise PacketError(f"unexpected request packet type: {shown}") from None


def new_packet_from_type(packet_type: int, buf: Buffer) -> Any:
    """Decode a request body of the given type; PacketError if not a request."""
    return _request_class(packet_type).from_body(buf)


@dataclass
class RequestPacket:
    """A request packet whose body is decoded according to its type."""

    request: Any = None
    request_id: int = 0

    @property
    def packet_type(self) -> PacketType:
        return self.request.TYPE

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Encode with the given request id as header and payload."""
        if self.request is None:
            raise PacketError("empty request packet")
        return self.request.marshal_packet(request_id)

    def to_bytes(self) -> bytes:
        return compose_packet(*self.marshal_packet(self.request_id))

    @classmethod
    def from_buffer(cls, buf: Buffer) -> RequestPacket:
        packet_class = _request_class(buf.consume_uint8())
        request_id = buf.consume_uint32()
        return cls(request=packet_class.from_body(buf), request_id=request_id)

    @classmethod
    def from_bytes(cls, data: bytes) -> RequestPacket:
        """Decode a packet whose length prefix has already been removed."""
        return cls.from_buffer(Buffer(data))

    @classmethod
    def read_from(
        cls, stream: BinaryIO, max_packet_length: int = DEFAULT_MAX_PACKET_LENGTH
    ) -> RequestPacket:
        return cls.from_bytes(read_packet(stream, max_packet_length))