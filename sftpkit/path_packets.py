"""Request packets that operate on paths."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from .wire import Attributes, Buffer, PacketType


def _marshal_strings(packet_type: PacketType, request_id: int, *values: str) -> tuple[bytes, bytes]:
    buf = Buffer()
    buf.start_packet(packet_type, request_id)
    for value in values:
        buf.append_string(value)
    return buf.packet()


def _marshal_path_attrs(
    packet_type: PacketType, request_id: int, path: str, attrs: Attributes
) -> tuple[bytes, bytes]:
    buf = Buffer()
    buf.start_packet(packet_type, request_id)
    buf.append_string(path)
    attrs.marshal_into(buf)
    return buf.packet()


@dataclass
class LStatPacket:
    """SSH_FXP_LSTAT: attributes of a path, not following symlinks."""

    TYPE: ClassVar[PacketType] = PacketType.LSTAT

    path: str = ""

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Encode as header and payload with the given request id."""
        return _marshal_strings(self.TYPE, request_id, self.path)

    @classmethod
    def from_body(cls, buf: Buffer) -> LStatPacket:
        """Decode the body that follows the request id."""
        return cls(path=buf.consume_string())


@dataclass
class SetstatPacket:
    """SSH_FXP_SETSTAT: change attributes of a path."""

    TYPE: ClassVar[PacketType] = PacketType.SETSTAT

    path: str = ""
    attrs: Attributes = field(default_factory=Attributes)

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Encode as header and payload with the given request id."""
        return _marshal_path_attrs(self.TYPE, request_id, self.path, self.attrs)

    @classmethod
    def from_body(cls, buf: Buffer) -> SetstatPacket:
        """Decode the body that follows the request id."""
        path = buf.consume_string()
        return cls(path=path, attrs=Attributes.from_buffer(buf))


@dataclass
class RemovePacket:
    """SSH_FXP_REMOVE: delete a file."""

    TYPE: ClassVar[PacketType] = PacketType.REMOVE

    path: str = ""

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Encode as header and payload with the given request id."""
        return _marshal_strings(self.TYPE, request_id, self.path)

    @classmethod
    def from_body(cls, buf: Buffer) -> RemovePacket:
        """Decode the body that follows the request id."""
        return cls(path=buf.consume_string())


@dataclass
class MkdirPacket:
    """SSH_FXP_MKDIR: create a directory."""

    TYPE: ClassVar[PacketType] = PacketType.MKDIR

    path: str = ""
    attrs: Attributes = field(default_factory=Attributes)

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Encode as header and payload with the given request id."""
        return _marshal_path_attrs(self.TYPE, request_id, self.path, self.attrs)

    @classmethod
    def from_body(cls, buf: Buffer) -> MkdirPacket:
        """Decode the body that follows the request id."""
        path = buf.consume_string()
        return cls(path=path, attrs=Attributes.from_buffer(buf))


@dataclass
class RmdirPacket:
    """SSH_FXP_RMDIR: remove a directory."""

    TYPE: ClassVar[PacketType] = PacketType.RMDIR

    path: str = ""

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Encode as header and payload with the given request id."""
        return _marshal_strings(self.TYPE, request_id, self.path)

    @classmethod
    def from_body(cls, buf: Buffer) -> RmdirPacket:
        """Decode the body that follows the request id."""
        return cls(path=buf.consume_string())


@dataclass
class RealPathPacket:
    """SSH_FXP_REALPATH: canonicalise a path."""

    TYPE: ClassVar[PacketType] = PacketType.REALPATH

    path: str = ""

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Encode as header and payload with the given request id."""
        return _marshal_strings(self.TYPE, request_id, self.path)

    @classmethod
    def from_body(cls, buf: Buffer) -> RealPathPacket:
        """Decode the body that follows the request id."""
        return cls(path=buf.consume_string())


@dataclass
class StatPacket:
    """SSH_FXP_STAT: attributes of a path, following symlinks."""

    TYPE: ClassVar[PacketType] = PacketType.STAT

    path: str = ""

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Encode as header and payload with the given request id."""
        return _marshal_strings(self.TYPE, request_id, self.path)

    @classmethod
    def from_body(cls, buf: Buffer) -> StatPacket:
        """Decode the body that follows the request id."""
        return cls(path=buf.consume_string())


@dataclass
class ReadLinkPacket:
    """SSH_FXP_READLINK: target of a symbolic link."""

    TYPE: ClassVar[PacketType] = PacketType.READLINK

    path: str = ""

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Encode as header and payload with the given request id."""
        return _marshal_strings(self.TYPE, request_id, self.path)

    @classmethod
    def from_body(cls, buf: Buffer) -> ReadLinkPacket:
        """Decode the body that follows the request id."""
        return cls(path=buf.consume_string())


@dataclass
class RenamePacket:
    """SSH_FXP_RENAME: rename ``old_path`` to ``new_path``."""

    TYPE: ClassVar[PacketType] = PacketType.RENAME

    old_path: str = ""
    new_path: str = ""

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Encode as header and payload with the given request id."""
        return _marshal_strings(self.TYPE, request_id, self.old_path, self.new_path)

    @classmethod
    def from_body(cls, buf: Buffer) -> RenamePacket:
        """Decode the body that follows the request id."""
        old_path = buf.consume_string()
        new_path = buf.consume_string()
        return cls(old_path=old_path, new_path=new_path)


@dataclass
class SymlinkPacket:
    """SSH_FXP_SYMLINK: create ``link_path`` pointing at ``target_path``.

    On the wire the target comes first, as deployed servers expect,
    although the draft specifies the reverse order.
    """

    TYPE: ClassVar[PacketType] = PacketType.SYMLINK

    link_path: str = ""
    target_path: str = ""

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Encode as header and payload with the given request id."""
        return _marshal_strings(self.TYPE, request_id, self.target_path, self.link_path)

    @classmethod
    def from_body(cls, buf: Buffer) -> SymlinkPacket:
        """Decode the body that follows the request id."""
        target_path = buf.consume_string()
        link_path = buf.consume_string()
        return cls(link_path=link_path, target_path=target_path)