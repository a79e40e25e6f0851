"""Binary framing and common data types of the SSH file transfer protocol."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import BinaryIO

from .permissions import FileMode

DEFAULT_MAX_PACKET_LENGTH = 34000


class PacketType(IntEnum):
    """The SSH_FXP_* packet type codes."""

    INIT = 1
    VERSION = 2
    OPEN = 3
    CLOSE = 4
    READ = 5
    WRITE = 6
    LSTAT = 7
    FSTAT = 8
    SETSTAT = 9
    FSETSTAT = 10
    OPENDIR = 11
    READDIR = 12
    REMOVE = 13
    MKDIR = 14
    RMDIR = 15
    REALPATH = 16
    STAT = 17
    RENAME = 18
    READLINK = 19
    SYMLINK = 20
    STATUS = 101
    HANDLE = 102
    DATA = 103
    NAME = 104
    ATTRS = 105
    EXTENDED = 200
    EXTENDED_REPLY = 201

    def __str__(self) -> str:
        return f"SSH_FXP_{self.name}"


class Status(IntEnum):
    """The SSH_FX_* status codes."""

    OK = 0
    EOF = 1
    NO_SUCH_FILE = 2
    PERMISSION_DENIED = 3
    FAILURE = 4
    BAD_MESSAGE = 5
    NO_CONNECTION = 6
    CONNECTION_LOST = 7
    OP_UNSUPPORTED = 8

    def __str__(self) -> str:
        return f"SSH_FX_{self.name}"


def _to_packet_type(value: int) -> PacketType | int:
    try:
        return PacketType(value)
    except ValueError:
        return value


class PacketError(Exception):
    """A packet could not be encoded or decoded."""


class ShortPacketError(PacketError):
    """A packet is shorter than its contents require."""

    def __init__(self, message: str = "packet too short") -> None:
        super().__init__(message)


class LongPacketError(PacketError):
    """A packet is longer than the allowed maximum."""

    def __init__(self, message: str = "packet too long") -> None:
        super().__init__(message)


class Buffer:
    """A byte buffer that is appended to when encoding and consumed when decoding."""

    def __init__(self, data: bytes = b"") -> None:
        self._data = bytearray(data)
        self._offset = 0

    def __len__(self) -> int:
        """Number of bytes not yet consumed."""
        return len(self._data) - self._offset

    def __repr__(self) -> str:
        return f"Buffer({self.bytes()!r})"

    def bytes(self) -> bytes:
        """The bytes not yet consumed."""
        return bytes(self._data[self._offset:])

    def append_uint8(self, value: int) -> None:
        self._data += value.to_bytes(1, "big")

    def append_uint32(self, value: int) -> None:
        self._data += value.to_bytes(4, "big")

    def append_uint64(self, value: int) -> None:
        self._data += value.to_bytes(8, "big")

    def append_byte_slice(self, value: bytes) -> None:
        """Append a uint32 length followed by the bytes."""
        self.append_uint32(len(value))
        self._data += value

    def append_string(self, value: str | bytes) -> None:
        """Append a length-prefixed string."""
        if isinstance(value, str):
            value = value.encode("utf-8", "surrogateescape")
        self.append_byte_slice(value)

    def _take(self, count: int) -> bytes:
        if len(self) < count:
            raise ShortPacketError()
        start = self._offset
        self._offset += count
        return bytes(self._data[start:self._offset])

    def consume_uint8(self) -> int:
        return self._take(1)[0]

    def consume_uint32(self) -> int:
        return int.from_bytes(self._take(4), "big")

    def consume_uint64(self) -> int:
        return int.from_bytes(self._take(8), "big")

    def consume_byte_slice(self) -> bytes:
        """Consume a uint32 length and that many bytes."""
        length = self.consume_uint32()
        return self._take(length)

    def consume_string(self) -> str:
        """Consume a length-prefixed string."""
        return self.consume_byte_slice().decode("utf-8", "surrogateescape")

    def start_packet(self, packet_type: int, request_id: int) -> None:
        """Reset the buffer to a packet header with a length placeholder."""
        self._data = bytearray(4)
        self._offset = 0
        self.append_uint8(int(packet_type))
        self.append_uint32(request_id)

    def packet(self, payload: bytes = b"") -> tuple[bytes, bytes]:
        """Fill in the length and return the header and payload."""
        length = len(self._data) - 4 + len(payload)
        self._data[0:4] = length.to_bytes(4, "big")
        return bytes(self._data), bytes(payload)


def compose_packet(header: bytes, payload: bytes = b"") -> bytes:
    """Join the two parts produced by marshal_packet into one packet."""
    return bytes(header) + bytes(payload)


@dataclass
class ExtensionPair:
    """A name and data pair used by extensions."""

    name: str = ""
    data: str = ""

    def marshal_into(self, buf: Buffer) -> None:
        buf.append_string(self.name)
        buf.append_string(self.data)

    @classmethod
    def from_buffer(cls, buf: Buffer) -> ExtensionPair:
        name = buf.consume_string()
        data = buf.consume_string()
        return cls(name=name, data=data)


@dataclass
class Attributes:
    """File attributes; only the fields named in flags are on the wire."""

    SIZE = 0x00000001
    UID_GID = 0x00000002
    PERMISSIONS = 0x00000004
    AC_MOD_TIME = 0x00000008
    EXTENDED = 0x80000000

    flags: int = 0
    size: int = 0
    uid: int = 0
    gid: int = 0
    permissions: FileMode = FileMode(0)
    atime: int = 0
    mtime: int = 0
    extended_attributes: list[ExtensionPair] = field(default_factory=list)

    def marshal_into(self, buf: Buffer) -> None:
        buf.append_uint32(self.flags)
        if self.flags & self.SIZE:
            buf.append_uint64(self.size)
        if self.flags & self.UID_GID:
            buf.append_uint32(self.uid)
            buf.append_uint32(self.gid)
        if self.flags & self.PERMISSIONS:
            buf.append_uint32(int(self.permissions))
        if self.flags & self.AC_MOD_TIME:
            buf.append_uint32(self.atime)
            buf.append_uint32(self.mtime)
        if self.flags & self.EXTENDED:
            buf.append_uint32(len(self.extended_attributes))
            for pair in self.extended_attributes:
                pair.marshal_into(buf)

    @classmethod
    def from_buffer(cls, buf: Buffer) -> Attributes:
        attrs = cls(flags=buf.consume_uint32())
        if attrs.flags & cls.SIZE:
            attrs.size = buf.consume_uint64()
        if attrs.flags & cls.UID_GID:
            attrs.uid = buf.consume_uint32()
            attrs.gid = buf.consume_uint32()
        if attrs.flags & cls.PERMISSIONS:
            attrs.permissions = FileMode(buf.consume_uint32())
        if attrs.flags & cls.AC_MOD_TIME:
            attrs.atime = buf.consume_uint32()
            attrs.mtime = buf.consume_uint32()
        if attrs.flags & cls.EXTENDED:
            count = buf.consume_uint32()
            attrs.extended_attributes = [
                ExtensionPair.from_buffer(buf) for _ in range(count)
            ]
        return attrs


@dataclass
class NameEntry:
    """One entry of an SSH_FXP_NAME response."""

    filename: str = ""
    longname: str = ""
    attrs: Attributes = field(default_factory=Attributes)

    def marshal_into(self, buf: Buffer) -> None:
        buf.append_string(self.filename)
        buf.append_string(self.longname)
        self.attrs.marshal_into(buf)

    @classmethod
    def from_buffer(cls, buf: Buffer) -> NameEntry:
        filename = buf.consume_string()
        longname = buf.consume_string()
        attrs = Attributes.from_buffer(buf)
        return cls(filename=filename, longname=longname, attrs=attrs)


def _read_exact(stream: BinaryIO, count: int) -> bytes:
    chunks = []
    remaining = count
    while remaining:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    data = b"".join(chunks)
    if len(data) < count:
        raise EOFError(f"expected {count} bytes, got {len(data)}")
    return data


def read_packet(
    stream: BinaryIO, max_packet_length: int = DEFAULT_MAX_PACKET_LENGTH
) -> bytes:
    """Read one uint32 length-prefixed packet and return its body.

    Raises ShortPacketError if the length cannot hold a type and request id,
    LongPacketError if it exceeds max_packet_length (no body is read then),
    and EOFError if the stream ends early.
    """
    length = int.from_bytes(_read_exact(stream, 4), "big")
    if length < 5:
        raise ShortPacketError()
    if length > max_packet_length:
        raise LongPacketError()
    return _read_exact(stream, length)


@dataclass
class RawPacket:
    """A packet whose body is kept undecoded."""

    packet_type: PacketType | int
    request_id: int = 0
    data: bytes = b""

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Encode with the given request id as header and payload."""
        buf = Buffer()
        buf.start_packet(self.packet_type, request_id)
        return buf.packet(self.data)

    def to_bytes(self) -> bytes:
        return compose_packet(*self.marshal_packet(self.request_id))

    @classmethod
    def from_buffer(cls, buf: Buffer) -> RawPacket:
        packet_type = _to_packet_type(buf.consume_uint8())
        request_id = buf.consume_uint32()
        return cls(packet_type=packet_type, request_id=request_id, data=buf.bytes())

    @classmethod
    def from_bytes(cls, data: bytes) -> RawPacket:
        """Decode a packet whose length prefix has already been removed."""
        return cls.from_buffer(Buffer(data))

    @classmethod
    def read_from(
        cls, stream: BinaryIO, max_packet_length: int = DEFAULT_MAX_PACKET_LENGTH
    ) -> RawPacket:
        return cls.from_bytes(read_packet(stream, max_packet_length))