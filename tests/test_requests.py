import io

import pytest

from sftpkit.extended import ExtendedPacket, RawExtendedData
from sftpkit.handle_packets import ReadPacket, WritePacket
from sftpkit.path_packets import RenamePacket, StatPacket
from sftpkit.requests import RequestPacket, new_packet_from_type
from sftpkit.wire import (
    Buffer,
    LongPacketError,
    PacketError,
    PacketType,
    ShortPacketError,
)


def test_request_packet():
    p = RequestPacket(request_id=42, request=StatPacket(path="foo"))
    buf = p.to_bytes()
    want = bytes([0, 0, 0, 12, 17, 0, 0, 0, 42, 0, 0, 0, 3]) + b"foo"
    assert buf == want

    decoded = RequestPacket.read_from(io.BytesIO(buf))
    assert decoded.request_id == 42
    assert isinstance(decoded.request, StatPacket)
    assert decoded.request.path == "foo"
    assert decoded.packet_type == PacketType.STAT


@pytest.mark.parametrize(
    "request_",
    [
        ReadPacket(handle="h", offset=5, length=10),
        WritePacket(handle="h", offset=1, data=b"data"),
        RenamePacket(old_path="/foo", new_path="/bar"),
        ExtendedPacket(extended_request="x@example.com", data=RawExtendedData(b"z")),
    ],
)
def test_request_round_trip(request_):
    packet = RequestPacket(request=request_, request_id=7)
    decoded = RequestPacket.from_bytes(packet.to_bytes()[4:])
    assert decoded == packet


def test_new_packet_from_type():
    buf = Buffer()
    buf.append_string("/foo")
    assert new_packet_from_type(PacketType.STAT, buf) == StatPacket(path="/foo")


def test_new_packet_from_type_rejects_responses():
    with pytest.raises(PacketError, match="unexpected request packet type"):
        new_packet_from_type(PacketType.STATUS, Buffer())


def test_unknown_type_raises():
    data = bytes([99, 0, 0, 0, 1])
    with pytest.raises(PacketError):
        RequestPacket.from_bytes(data)


def test_empty_request_cannot_be_marshalled():
    with pytest.raises(PacketError, match="empty request packet"):
        RequestPacket().marshal_packet(1)


def test_read_from_rejects_long_packet():
    stream = io.BytesIO(b"\xff\xff\xff\xff")
    with pytest.raises(LongPacketError):
        RequestPacket.read_from(stream)


def test_read_from_rejects_short_packet():
    stream = io.BytesIO(bytes([0, 0, 0, 3, 17, 0, 0]))
    with pytest.raises(ShortPacketError):
        RequestPacket.read_from(stream)


def test_truncated_body_raises():
    data = RequestPacket(request=StatPacket(path="/foo"), request_id=1).to_bytes()
    with pytest.raises(ShortPacketError):
        RequestPacket.from_bytes(data[4:-1])