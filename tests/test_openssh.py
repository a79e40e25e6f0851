import pytest

from sftpkit.extended import ExtendedPacket, ExtendedReplyPacket, RawExtendedData
from sftpkit.openssh import (
    EXTENSION_FSTATVFS,
    EXTENSION_FSYNC,
    EXTENSION_HARDLINK,
    EXTENSION_POSIX_RENAME,
    EXTENSION_STATVFS,
    FSyncExtendedPacket,
    FStatVFSExtendedPacket,
    HardlinkExtendedPacket,
    PosixRenameExtendedPacket,
    StatVFSExtendedPacket,
    StatVFSExtendedReplyPacket,
    extension_fstatvfs,
    extension_fsync,
    extension_hardlink,
    extension_posix_rename,
    extension_statvfs,
    register_extension_fstatvfs,
    register_extension_fsync,
    register_extension_hardlink,
    register_extension_posix_rename,
    register_extension_statvfs,
)
from sftpkit.wire import Buffer, ShortPacketError, compose_packet

SUFFIX = b"@openssh.com"


@pytest.fixture(autouse=True)
def registered():
    register_extension_fsync()
    register_extension_hardlink()
    register_extension_posix_rename()
    register_extension_statvfs()
    register_extension_fstatvfs()


def test_fsync_extended_packet():
    ep = FSyncExtendedPacket(handle="somehandle")
    data = compose_packet(*ep.marshal_packet(42))
    want = (
        b"\x00\x00\x00\x28"
        b"\xc8"
        b"\x00\x00\x00\x2a"
        b"\x00\x00\x00\x11" b"fsync" + SUFFIX
        + b"\x00\x00\x00\x0a" b"somehandle"
    )
    assert data == want

    p = ExtendedPacket.from_body(Buffer(data[9:]))
    assert p.extended_request == EXTENSION_FSYNC
    assert isinstance(p.data, FSyncExtendedPacket)
    assert p.data.handle == "somehandle"


def test_hardlink_extended_packet():
    ep = HardlinkExtendedPacket(old_path="/foo", new_path="/bar")
    data = compose_packet(*ep.marshal_packet(42))
    want = (
        b"\x00\x00\x00\x2d"
        b"\xc8"
        b"\x00\x00\x00\x2a"
        b"\x00\x00\x00\x14" b"hardlink" + SUFFIX
        + b"\x00\x00\x00\x04/foo"
        b"\x00\x00\x00\x04/bar"
    )
    assert data == want

    p = ExtendedPacket.from_body(Buffer(data[9:]))
    assert p.extended_request == EXTENSION_HARDLINK
    assert isinstance(p.data, HardlinkExtendedPacket)
    assert p.data.old_path == "/foo"
    assert p.data.new_path == "/bar"


def test_posix_rename_extended_packet():
    ep = PosixRenameExtendedPacket(old_path="/foo", new_path="/bar")
    data = compose_packet(*ep.marshal_packet(42))
    want = (
        b"\x00\x00\x00\x31"
        b"\xc8"
        b"\x00\x00\x00\x2a"
        b"\x00\x00\x00\x18" b"posix-rename" + SUFFIX
        + b"\x00\x00\x00\x04/foo"
        b"\x00\x00\x00\x04/bar"
    )
    assert data == want

    p = ExtendedPacket.from_body(Buffer(data[9:]))
    assert p.extended_request == EXTENSION_POSIX_RENAME
    assert isinstance(p.data, PosixRenameExtendedPacket)
    assert p.data.old_path == "/foo"
    assert p.data.new_path == "/bar"


def test_statvfs_extended_packet():
    ep = StatVFSExtendedPacket(path="/foo")
    data = compose_packet(*ep.marshal_packet(42))
    want = (
        b"\x00\x00\x00\x24"
        b"\xc8"
        b"\x00\x00\x00\x2a"
        b"\x00\x00\x00\x13" b"statvfs" + SUFFIX
        + b"\x00\x00\x00\x04/foo"
    )
    assert data == want

    p = ExtendedPacket.from_body(Buffer(data[9:]))
    assert p.extended_request == EXTENSION_STATVFS
    assert isinstance(p.data, StatVFSExtendedPacket)
    assert p.data.path == "/foo"


def test_fstatvfs_extended_packet():
    ep = FStatVFSExtendedPacket(path="/foo")
    data = compose_packet(*ep.marshal_packet(42))
    want = (
        b"\x00\x00\x00\x25"
        b"\xc8"
        b"\x00\x00\x00\x2a"
        b"\x00\x00\x00\x14" b"fstatvfs" + SUFFIX
        + b"\x00\x00\x00\x04/foo"
    )
    assert data == want

    p = ExtendedPacket.from_body(Buffer(data[9:]))
    assert p.extended_request == EXTENSION_FSTATVFS
    assert isinstance(p.data, FStatVFSExtendedPacket)
    assert p.data.path == "/foo"


REPLY_VALUES = dict(
    block_size=13,
    fragment_size=14,
    blocks=15,
    blocks_free=16,
    blocks_avail=17,
    files=18,
    files_free=19,
    files_avail=20,
    filesystem_id=21,
    mount_flags=22,
    max_name_length=23,
)

REPLY_WANT = (
    b"\x00\x00\x00\x5d"
    b"\xc9"
    b"\x00\x00\x00\x2a"
    b"\x00\x00\x00\x00\x00\x00\x00\x0d"
    b"\x00\x00\x00\x00\x00\x00\x00\x0e"
    b"\x00\x00\x00\x00\x00\x00\x00\x0f"
    b"\x00\x00\x00\x00\x00\x00\x00\x10"
    b"\x00\x00\x00\x00\x00\x00\x00\x11"
    b"\x00\x00\x00\x00\x00\x00\x00\x12"
    b"\x00\x00\x00\x00\x00\x00\x00\x13"
    b"\x00\x00\x00\x00\x00\x00\x00\x14"
    b"\x00\x00\x00\x00\x00\x00\x00\x15"
    b"\x00\x00\x00\x00\x00\x00\x00\x16"
    b"\x00\x00\x00\x00\x00\x00\x00\x17"
)


def test_statvfs_extended_reply_packet_marshal():
    ep = StatVFSExtendedReplyPacket(**REPLY_VALUES)
    assert compose_packet(*ep.marshal_packet(42)) == REPLY_WANT


def test_statvfs_extended_reply_packet_via_reply_packet():
    p = ExtendedReplyPacket.from_body(Buffer(REPLY_WANT[9:]), StatVFSExtendedReplyPacket)
    assert isinstance(p.data, StatVFSExtendedReplyPacket)
    assert p.data == StatVFSExtendedReplyPacket(**REPLY_VALUES)


def test_statvfs_extended_reply_from_body():
    ep = StatVFSExtendedReplyPacket.from_body(Buffer(REPLY_WANT[9:]))
    assert ep.block_size == 13
    assert ep.fragment_size == 14
    assert ep.blocks == 15
    assert ep.blocks_free == 16
    assert ep.blocks_avail == 17
    assert ep.files == 18
    assert ep.files_free == 19
    assert ep.files_avail == 20
    assert ep.filesystem_id == 21
    assert ep.mount_flags == 22
    assert ep.max_name_length == 23


def test_statvfs_reply_to_bytes_is_data_only():
    ep = StatVFSExtendedReplyPacket(**REPLY_VALUES)
    assert ep.to_bytes() == REPLY_WANT[9:]
    assert len(ep.to_bytes()) == 88


def test_statvfs_reply_short_body_raises():
    with pytest.raises(ShortPacketError):
        StatVFSExtendedReplyPacket.from_body(Buffer(REPLY_WANT[9:-1]))


def test_to_bytes_encodes_only_data():
    assert FSyncExtendedPacket(handle="h").to_bytes() == b"\x00\x00\x00\x01h"
    assert HardlinkExtendedPacket(old_path="a", new_path="b").to_bytes() == (
        b"\x00\x00\x00\x01a\x00\x00\x00\x01b"
    )
    assert StatVFSExtendedPacket(path="/x").to_bytes() == b"\x00\x00\x00\x02/x"


@pytest.mark.parametrize(
    "packet_class, value",
    [
        (FSyncExtendedPacket, FSyncExtendedPacket(handle="somehandle")),
        (HardlinkExtendedPacket, HardlinkExtendedPacket(old_path="/a", new_path="/b")),
        (
            PosixRenameExtendedPacket,
            PosixRenameExtendedPacket(old_path="/a", new_path="/b"),
        ),
        (StatVFSExtendedPacket, StatVFSExtendedPacket(path="/foo")),
        (FStatVFSExtendedPacket, FStatVFSExtendedPacket(path="/foo")),
    ],
)
def test_from_buffer_round_trip(packet_class, value):
    assert packet_class.from_buffer(Buffer(value.to_bytes())) == value


def test_from_buffer_short_raises():
    with pytest.raises(ShortPacketError):
        HardlinkExtendedPacket.from_buffer(Buffer(b"\x00\x00\x00\x01a"))


def test_unregistered_extension_stays_raw():
    buf = Buffer()
    buf.append_string("unknown-ext")
    buf.append_uint8(7)
    buf.append_uint8(9)
    p = ExtendedPacket.from_body(buf)
    assert p.extended_request == "unknown-ext"
    assert isinstance(p.data, RawExtendedData)
    assert p.data.data == b"\x07\x09"


@pytest.mark.parametrize(
    "make_pair, name, data",
    [
        (extension_fsync, EXTENSION_FSYNC, "1"),
        (extension_hardlink, EXTENSION_HARDLINK, "1"),
        (extension_posix_rename, EXTENSION_POSIX_RENAME, "1"),
        (extension_statvfs, EXTENSION_STATVFS, "2"),
        (extension_fstatvfs, EXTENSION_FSTATVFS, "2"),
    ],
)
def test_extension_pairs(make_pair, name, data):
    pair = make_pair()
    assert pair.name == name
    assert pair.data == data


def test_extension_names_on_wire():
    assert EXTENSION_FSYNC.encode() == b"fsync" + SUFFIX
    assert EXTENSION_FSTATVFS.encode() == b"fstatvfs" + SUFFIX