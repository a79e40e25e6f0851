"""The SSH_FXP_INIT and SSH_FXP_VERSION handshake packets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from .wire import Buffer, ExtensionPair, PacketType


def _encode(packet_type: PacketType, version: int, extensions: list[ExtensionPair]) -> bytes:
    body = Buffer()
    body.append_uint8(packet_type)
    body.append_uint32(version)
    for ext in extensions:
        ext.marshal_into(body)
    data = body.bytes()
    return len(data).to_bytes(4, "big") + data


def _decode(data: bytes) -> tuple[int, list[ExtensionPair]]:
    buf = Buffer(data)
    version = buf.consume_uint32()
    extensions = []
    while len(buf) > 0:
        extensions.append(ExtensionPair.from_buffer(buf))
    return version, extensions


@dataclass
class InitPacket:
    """SSH_FXP_INIT: the client's protocol version and extensions."""

    TYPE: ClassVar[PacketType] = PacketType.INIT

    version: int = 0
    extensions: list[ExtensionPair] = field(default_factory=list)

    def to_bytes(self) -> bytes:
        """Encode the whole packet, length prefix included."""
        return _encode(self.TYPE, self.version, self.extensions)

    @classmethod
    def from_bytes(cls, data: bytes) -> InitPacket:
        """Decode a packet whose length and type bytes are already removed."""
        version, extensions = _decode(data)
        return cls(version=version, extensions=extensions)


@dataclass
class VersionPacket:
    """SSH_FXP_VERSION: the server's protocol version and extensions."""

    TYPE: ClassVar[PacketType] = PacketType.VERSION

    version: int = 0
    extensions: list[ExtensionPair] = field(default_factory=list)

    def to_bytes(self) -> bytes:
        """Encode the whole packet, length prefix included."""
        return _encode(self.TYPE, self.version, self.extensions)

    @classmethod
    def from_bytes(cls, data: bytes) -> VersionPacket:
        """Decode a packet whose length and type bytes are already removed."""
        version, extensions = _decode(data)
        return cls(version=version, extensions=extensions)