from dataclasses import dataclass

import pytest

from sftpkit.extended import (
    ExtendedPacket,
    ExtendedReplyPacket,
    RawExtendedData,
    register_extended_packet_type,
)
from sftpkit.wire import Buffer, PacketType, ShortPacketError, compose_packet

REQUEST_NAME = "pathpair@example.com"


@dataclass
class _PathPair:
    first: str = ""
    second: str = ""

    def marshal_into(self, buf):
        buf.append_string(self.first)
        buf.append_string(self.second)

    @classmethod
    def from_buffer(cls, buf):
        first = buf.consume_string()
        second = buf.consume_string()
        return cls(first, second)


register_extended_packet_type(REQUEST_NAME, _PathPair)


def _length_prefix_is_consistent(data):
    return int.from_bytes(data[:4], "big") == len(data) - 4


def test_raw_extended_data_round_trip():
    buf = Buffer()
    RawExtendedData(b"\x00\x01abc").marshal_into(buf)
    assert buf.bytes() == b"\x00\x01abc"
    decoded = RawExtendedData.from_buffer(buf)
    assert decoded.data == b"\x00\x01abc"
    assert len(buf) == 0


def test_unregistered_request_keeps_raw_data():
    packet = ExtendedPacket(
        extended_request="unknown@example.com", data=RawExtendedData(b"payload")
    )
    data = compose_packet(*packet.marshal_packet(7))
    assert data[4] == PacketType.EXTENDED
    assert _length_prefix_is_consistent(data)
    decoded = ExtendedPacket.from_body(Buffer(data[9:]))
    assert decoded == packet


def test_registered_request_decodes_its_type():
    packet = ExtendedPacket(extended_request=REQUEST_NAME, data=_PathPair("/a", "/b"))
    data = compose_packet(*packet.marshal_packet(1))
    assert int.from_bytes(data[5:9], "big") == 1
    decoded = ExtendedPacket.from_body(Buffer(data[9:]))
    assert isinstance(decoded.data, _PathPair)
    assert decoded.data == _PathPair("/a", "/b")


def test_registered_request_with_truncated_data():
    buf = Buffer()
    buf.append_string(REQUEST_NAME)
    buf.append_string("/only-one")
    with pytest.raises(ShortPacketError):
        ExtendedPacket.from_body(buf)


def test_request_without_data():
    packet = ExtendedPacket(extended_request="bare@example.com")
    data = compose_packet(*packet.marshal_packet(3))
    assert _length_prefix_is_consistent(data)
    decoded = ExtendedPacket.from_body(Buffer(data[9:]))
    assert decoded.extended_request == "bare@example.com"
    assert decoded.data == RawExtendedData(b"")


def test_reply_round_trip_with_type():
    reply = ExtendedReplyPacket(data=_PathPair("x", "y"))
    data = compose_packet(*reply.marshal_packet(9))
    assert data[4] == PacketType.EXTENDED_REPLY
    assert _length_prefix_is_consistent(data)
    decoded = ExtendedReplyPacket.from_body(Buffer(data[9:]), _PathPair)
    assert decoded.data == _PathPair("x", "y")


def test_reply_round_trip_raw():
    reply = ExtendedReplyPacket(data=RawExtendedData(b"\xff\xfe"))
    data = compose_packet(*reply.marshal_packet(9))
    decoded = ExtendedReplyPacket.from_body(Buffer(data[9:]))
    assert decoded.data.data == b"\xff\xfe"