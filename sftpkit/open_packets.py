"""Request packets that open files and directories."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag
from typing import ClassVar

from .wire import Attributes, Buffer, PacketType


class OpenFlag(IntFlag):
    """The SSH_FXF_* flags of an open request."""

    READ = 1 << 0
    WRITE = 1 << 1
    APPEND = 1 << 2
    CREATE = 1 << 3
    TRUNCATE = 1 << 4
    EXCLUSIVE = 1 << 5


@dataclass
class OpenPacket:
    """SSH_FXP_OPEN: open a file with the given flags and attributes."""

    TYPE: ClassVar[PacketType] = PacketType.OPEN

    filename: str = ""
    pflags: int = 0
    attrs: Attributes = field(default_factory=Attributes)

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Encode as header and payload with the given request id."""
        buf = Buffer()
        buf.start_packet(self.TYPE, request_id)
        buf.append_string(self.filename)
        buf.append_uint32(int(self.pflags))
        self.attrs.marshal_into(buf)
        return buf.packet()

    @classmethod
    def from_body(cls, buf: Buffer) -> OpenPacket:
        """Decode the body that follows the request id."""
        filename = buf.consume_string()
        pflags = buf.consume_uint32()
        return cls(filename=filename, pflags=pflags, attrs=Attributes.from_buffer(buf))


@dataclass
class OpenDirPacket:
    """SSH_FXP_OPENDIR: open a directory for listing."""

    TYPE: ClassVar[PacketType] = PacketType.OPENDIR

    path: str = ""

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Encode as header and payload with the given request id."""
        buf = Buffer()
        buf.start_packet(self.TYPE, request_id)
        buf.append_string(self.path)
        return buf.packet()

    @classmethod
    def from_body(cls, buf: Buffer) -> OpenDirPacket:
        """Decode the body that follows the request id."""
        return cls(path=buf.consume_string())