"""OpenSSH vendor extensions to the SSH file transfer protocol."""

from __future__ import annotations

from dataclasses import astuple, dataclass, fields
from typing import ClassVar

from .extended import ExtendedPacket, ExtendedReplyPacket, register_extended_packet_type
from .wire import Buffer, ExtensionPair, PacketType, compose_packet

_VENDOR_SUFFIX = "@openssh.com"

EXTENSION_FSYNC = "fsync" + _VENDOR_SUFFIX
EXTENSION_HARDLINK = "hardlink" + _VENDOR_SUFFIX
EXTENSION_POSIX_RENAME = "posix-rename" + _VENDOR_SUFFIX
EXTENSION_STATVFS = "statvfs" + _VENDOR_SUFFIX
EXTENSION_FSTATVFS = "fstatvfs" + _VENDOR_SUFFIX

# Values of the mount_flags field of a statvfs reply.
MOUNT_FLAGS_READ_ONLY = 0x1
MOUNT_FLAGS_NO_SUID = 0x2


def _extended_packet(extension: str, data, request_id: int) -> tuple[bytes, bytes]:
    return ExtendedPacket(extended_request=extension, data=data).marshal_packet(request_id)


def _data_bytes(data) -> bytes:
    buf = Buffer()
    data.marshal_into(buf)
    return buf.bytes()


@dataclass
class FSyncExtendedPacket:
    """The fsync extension: flush an open handle to disk."""

    TYPE: ClassVar[PacketType] = PacketType.EXTENDED
    EXTENSION: ClassVar[str] = EXTENSION_FSYNC

    handle: str = ""

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Encode the full extended packet as header and payload."""
        return _extended_packet(self.EXTENSION, self, request_id)

    def marshal_into(self, buf: Buffer) -> None:
        """Append the extension-specific data to ``buf``."""
        buf.append_string(self.handle)

    def to_bytes(self) -> bytes:
        """Encode only the extension-specific data."""
        return _data_bytes(self)

    @classmethod
    def from_buffer(cls, buf: Buffer) -> FSyncExtendedPacket:
        """Decode the extension-specific data."""
        return cls(handle=buf.consume_string())


@dataclass
class HardlinkExtendedPacket:
    """The hardlink extension: link ``new_path`` to ``old_path``."""

    TYPE: ClassVar[PacketType] = PacketType.EXTENDED
    EXTENSION: ClassVar[str] = EXTENSION_HARDLINK

    old_path: str = ""
    new_path: str = ""

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Encode the full extended packet as header and payload."""
        return _extended_packet(self.EXTENSION, self, request_id)

    def marshal_into(self, buf: Buffer) -> None:
        """Append the extension-specific data to ``buf``."""
        buf.append_string(self.old_path)
        buf.append_string(self.new_path)

    def to_bytes(self) -> bytes:
        """Encode only the extension-specific data."""
        return _data_bytes(self)

    @classmethod
    def from_buffer(cls, buf: Buffer) -> HardlinkExtendedPacket:
        """Decode the extension-specific data."""
        old_path = buf.consume_string()
        new_path = buf.consume_string()
        return cls(old_path=old_path, new_path=new_path)


@dataclass
class PosixRenameExtendedPacket:
    """The posix-rename extension: rename with POSIX overwrite semantics."""

    TYPE: ClassVar[PacketType] = PacketType.EXTENDED
    EXTENSION: ClassVar[str] = EXTENSION_POSIX_RENAME

    old_path: str = ""
    new_path: str = ""

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Encode the full extended packet as header and payload."""
        return _extended_packet(self.EXTENSION, self, request_id)

    def marshal_into(self, buf: Buffer) -> None:
        """Append the extension-specific data to ``buf``."""
        buf.append_string(self.old_path)
        buf.append_string(self.new_path)

    def to_bytes(self) -> bytes:
        """Encode only the extension-specific data."""
        return _data_bytes(self)

    @classmethod
    def from_buffer(cls, buf: Buffer) -> PosixRenameExtendedPacket:
        """Decode the extension-specific data."""
        old_path = buf.consume_string()
        new_path = buf.consume_string()
        return cls(old_path=old_path, new_path=new_path)


@dataclass
class StatVFSExtendedPacket:
    """The statvfs extension: file system statistics for a path."""

    TYPE: ClassVar[PacketType] = PacketType.EXTENDED
    EXTENSION: ClassVar[str] = EXTENSION_STATVFS

    path: str = ""

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Encode the full extended packet as header and payload."""
        return _extended_packet(self.EXTENSION, self, request_id)

    def marshal_into(self, buf: Buffer) -> None:
        """Append the extension-specific data to ``buf``."""
        buf.append_string(self.path)

    def to_bytes(self) -> bytes:
        """Encode only the extension-specific data."""
        return _data_bytes(self)

    @classmethod
    def from_buffer(cls, buf: Buffer) -> StatVFSExtendedPacket:
        """Decode the extension-specific data."""
        return cls(path=buf.consume_string())


@dataclass
class FStatVFSExtendedPacket:
    """The fstatvfs extension: file system statistics for an open handle."""

    TYPE: ClassVar[PacketType] = PacketType.EXTENDED
    EXTENSION: ClassVar[str] = EXTENSION_FSTATVFS

    path: str = ""

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Encode the full extended packet as header and payload."""
        return _extended_packet(self.EXTENSION, self, request_id)

    def marshal_into(self, buf: Buffer) -> None:
        """Append the extension-specific data to ``buf``."""
        buf.append_string(self.path)

    def to_bytes(self) -> bytes:
        """Encode only the extension-specific data."""
        return _data_bytes(self)

    @classmethod
    def from_buffer(cls, buf: Buffer) -> FStatVFSExtendedPacket:
        """Decode the extension-specific data."""
        return cls(path=buf.consume_string())


@dataclass
class StatVFSExtendedReplyPacket:
    """The reply to statvfs and fstatvfs requests."""

    TYPE: ClassVar[PacketType] = PacketType.EXTENDED_REPLY

    block_size: int = 0
    fragment_size: int = 0
    blocks: int = 0
    blocks_free: int = 0
    blocks_avail: int = 0
    files: int = 0
    files_free: int = 0
    files_avail: int = 0
    filesystem_id: int = 0
    mount_flags: int = 0
    max_name_length: int = 0

    def marshal_packet(self, request_id: int) -> tuple[bytes, bytes]:
        """Encode the full extended reply packet as header and payload."""
        return ExtendedReplyPacket(data=self).marshal_packet(request_id)

    def marshal_into(self, buf: Buffer) -> None:
        """Append the reply-specific data to ``buf``."""
        for value in astuple(self):
            buf.append_uint64(value)

    def to_bytes(self) -> bytes:
        """Encode only the reply-specific data."""
        return _data_bytes(self)

    @classmethod
    def from_buffer(cls, buf: Buffer) -> StatVFSExtendedReplyPacket:
        """Decode the reply-specific data."""
        return cls(**{f.name: buf.consume_uint64() for f in fields(cls)})

    @classmethod
    def from_body(cls, buf: Buffer) -> StatVFSExtendedReplyPacket:
        """Decode the reply body that follows the request id."""
        return ExtendedReplyPacket.from_body(buf, cls).data


def _pair(name: str, data: str) -> ExtensionPair:
    return ExtensionPair(name=name, data=data)


def register_extension_fsync() -> None:
    """Decode fsync extended requests as FSyncExtendedPacket."""
    register_extended_packet_type(EXTENSION_FSYNC, FSyncExtendedPacket)


def extension_fsync() -> ExtensionPair:
    """The pair announcing fsync support in an init or version packet."""
    return _pair(EXTENSION_FSYNC, "1")


def register_extension_hardlink() -> None:
    """Decode hardlink extended requests as HardlinkExtendedPacket."""
    register_extended_packet_type(EXTENSION_HARDLINK, HardlinkExtendedPacket)


def extension_hardlink() -> ExtensionPair:
    """The pair announcing hardlink support in an init or version packet."""
    return _pair(EXTENSION_HARDLINK, "1")


def register_extension_posix_rename() -> None:
    """Decode posix-rename extended requests as PosixRenameExtendedPacket."""
    register_extended_packet_type(EXTENSION_POSIX_RENAME, PosixRenameExtendedPacket)


def extension_posix_rename() -> ExtensionPair:
    """The pair announcing posix-rename support in an init or version packet."""
    return _pair(EXTENSION_POSIX_RENAME, "1")


def register_extension_statvfs() -> None:
    """Decode statvfs extended requests as StatVFSExtendedPacket."""
    register_extended_packet_type(EXTENSION_STATVFS, StatVFSExtendedPacket)


def extension_statvfs() -> ExtensionPair:
    """The pair announcing statvfs support in an init or version packet."""
    return _pair(EXTENSION_STATVFS, "2")


def register_extension_fstatvfs() -> None:
    """Decode fstatvfs extended requests as FStatVFSExtendedPacket."""
    register_extended_packet_type(EXTENSION_FSTATVFS, FStatVFSExtendedPacket)


def extension_fstatvfs() -> ExtensionPair:
    """The pair announcing fstatvfs support in an init or version packet."""
    return _pair(EXTENSION_FSTATVFS, "2")


__all__ = [
    "EXTENSION_FSTATVFS",
    "EXTENSION_FSYNC",
    "EXTENSION_HARDLINK",
    "EXTENSION_POSIX_RENAME",
    "EXTENSION_STATVFS",
    "MOUNT_FLAGS_NO_SUID",
    "MOUNT_FLAGS_READ_ONLY",
    "FSyncExtendedPacket",
    "FStatVFSExtendedPacket",
    "HardlinkExtendedPacket",
    "PosixRenameExtendedPacket",
    "StatVFSExtendedPacket",
    "StatVFSExtendedReplyPacket",
    "compose_packet",
    "extension_fstatvfs",
    "extension_fsync",
    "extension_hardlink",
    "extension_posix_rename",
    "extension_statvfs",
    "register_extension_fstatvfs",
    "register_extension_fsync",
    "register_extension_hardlink",
    "register_extension_posix_rename",
    "register_extension_statvfs",
]