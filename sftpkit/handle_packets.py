"""Request packets that operate on an open file or directory handle."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from .wire import Attributes, Buffer, PacketType


@dataclass
class ClosePacket:
    """SSH_FXP_CLOSE: release a handle."""

    TYPE: ClassVar[PacketType] = PacketType.CLOSE

    handle: str = ""

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Encode as header and payload with the given request id."""
        buf = Buffer()
        buf.start_packet(self.TYPE, request_id)
        buf.append_string(self.handle)
        return buf.packet()

    @classmethod
    def from_body(cls, buf: Buffer) -> ClosePacket:
        """Decode the body that follows the request id."""
        return cls(handle=buf.consume_string())


@dataclass
class ReadPacket:
    """SSH_FXP_READ: read up to ``length`` bytes at ``offset``."""

    TYPE: ClassVar[PacketType] = PacketType.READ

    handle: str = ""
    offset: int = 0
    length: int = 0

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Encode as header and payload with the given request id."""
        buf = Buffer()
        buf.start_packet(self.TYPE, request_id)
        buf.append_string(self.handle)
        buf.append_uint64(self.offset)
        buf.append_uint32(self.length)
        return buf.packet()

    @classmethod
    def from_body(cls, buf: Buffer) -> ReadPacket:
        """Decode the body that follows the request id."""
        handle = buf.consume_string()
        offset = buf.consume_uint64()
        length = buf.consume_uint32()
        return cls(handle=handle, offset=offset, length=length)


@dataclass
class WritePacket:
    """SSH_FXP_WRITE: write ``data`` at ``offset``."""

    TYPE: ClassVar[PacketType] = PacketType.WRITE

    handle: str = ""
    offset: int = 0
    data: bytes = b""

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Encode as header and payload; the data itself is the payload."""
        buf = Buffer()
        buf.start_packet(self.TYPE, request_id)
        buf.append_string(self.handle)
        buf.append_uint64(self.offset)
        buf.append_uint32(len(self.data))
        return buf.packet(self.data)

    @classmethod
    def from_body(cls, buf: Buffer) -> WritePacket:
        """Decode the body that follows the request id."""
        handle = buf.consume_string()
        offset = buf.consume_uint64()
        data = buf.consume_byte_slice()
        return cls(handle=handle, offset=offset, data=data)


@dataclass
class FStatPacket:
    """SSH_FXP_FSTAT: attributes of an open handle."""

    TYPE: ClassVar[PacketType] = PacketType.FSTAT

    handle: str = ""

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Encode as header and payload with the given request id."""
        buf = Buffer()
        buf.start_packet(self.TYPE, request_id)
        buf.append_string(self.handle)
        return buf.packet()

    @classmethod
    def from_body(cls, buf: Buffer) -> FStatPacket:
        """Decode the body that follows the request id."""
        return cls(handle=buf.consume_string())


@dataclass
class FSetstatPacket:
    """SSH_FXP_FSETSTAT: change attributes of an open handle."""

    TYPE: ClassVar[PacketType] = PacketType.FSETSTAT

    handle: str = ""
    attrs: Attributes = field(default_factory=Attributes)

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Encode as header and payload with the given request id."""
        buf = Buffer()
        buf.start_packet(self.TYPE, request_id)
        buf.append_string(self.handle)
        self.attrs.marshal_into(buf)
        return buf.packet()

    @classmethod
    def from_body(cls, buf: Buffer) -> FSetstatPacket:
        """Decode the body that follows the request id."""
        handle = buf.consume_string()
        return cls(handle=handle, attrs=Attributes.from_buffer(buf))


@dataclass
class ReadDirPacket:
    """SSH_FXP_READDIR: next entries of an open directory."""

    TYPE: ClassVar[PacketType] = PacketType.READDIR

    handle: str = ""

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Encode as header and payload with the given request id."""
        buf = Buffer()
        buf.start_packet(self.TYPE, request_id)
        buf.append_string(self.handle)
        return buf.packet()

    @classmethod
    def from_body(cls, buf: Buffer) -> ReadDirPacket:
        """Decode the body that follows the request id."""
        return cls(handle=buf.consume_string())