# sftpkit

Building blocks for the SSH File Transfer Protocol (version 3, as used by OpenSSH),
written with the standard library only.

## What it covers

- **Wire encoding** (`sftpkit.wire`): `Buffer` appends and consumes the protocol's
  big-endian integers and length-prefixed strings; `Attributes`, `NameEntry` and
  `ExtensionPair` encode and decode themselves into a `Buffer`; `PacketType` and
  `Status` enumerate the packet types and status codes. `read_packet` reads one
  length-prefixed packet from a binary stream and raises `ShortPacketError`,
  `LongPacketError` (before reading the body) or `EOFError`. `RawPacket` keeps a
  packet's body undecoded, and `compose_packet` joins the header and payload that
  every `marshal_packet` returns.
- **Handshake** (`sftpkit.init_packets`): `InitPacket` and `VersionPacket`, with
  `to_bytes` and `from_bytes`.
- **Request packets**: `sftpkit.handle_packets` (`ClosePacket`, `ReadPacket`,
  `WritePacket`, `FStatPacket`, `FSetstatPacket`, `ReadDirPacket`),
  `sftpkit.open_packets` (`OpenPacket`, `OpenDirPacket`, and the `OpenFlag` flags) and
  `sftpkit.path_packets` (`LStatPacket`, `SetstatPacket`, `RemovePacket`,
  `MkdirPacket`, `RmdirPacket`, `RealPathPacket`, `StatPacket`, `RenamePacket`,
  `ReadLinkPacket`, `SymlinkPacket`). Each has `marshal_packet(request_id)` and
  `from_body(buf)`. `SymlinkPacket` puts the target path first on the wire, as
  deployed servers expect.
- **Request decoding** (`sftpkit.requests`): `RequestPacket` reads the type byte and
  request id and decodes the body into the matching packet class;
  `new_packet_from_type` decodes a body of a given type. Anything that is not a
  request type raises `PacketError`.
- **Extended packets** (`sftpkit.extended`): `ExtendedPacket`, `ExtendedReplyPacket`,
  `register_extended_packet_type`, and `RawExtendedData` for unregistered data.
- **OpenSSH extensions** (`sftpkit.openssh`): fsync, hardlink, posix-rename, statvfs
  and fstatvfs request packets, `StatVFSExtendedReplyPacket`, the
  `register_extension_*` functions and the `extension_*` functions that return the
  `ExtensionPair` announcing each extension.
- **Permissions** (`sftpkit.permissions.FileMode`): POSIX mode bits with `is_dir`,
  `is_regular`, `perm`, `type` and an `ls -l` style `str()`.
- **Listings** (`sftpkit.listing`): `format_longname(info, id_lookup, now)` renders a
  `FileInfo` as an `ls -l` line; `FileInfo.from_path` describes a local file;
  `OSIDLookup` turns uids and gids into names from the local user database.
  Files older than six months show the year instead of the time.
- **Globbing** (`sftpkit.pathmatch`): shell-style `match`, `split`, `join`, `has_meta`,
  and `glob(fs, pattern)` over any object offering `lstat`, `stat` and `read_dir`.
  Malformed patterns raise `BadPatternError`.
- **Ordered replies** (`sftpkit.packet_manager`): `PacketManager` passes responses
  (`OrderedPacket`) to a sender callable only in the order their requests were
  registered; `close` waits until every request has its response.

## What it does not do

It has no SSH transport, client or server, and no command to run. It does not decode
or encode the response packets (status, handle, data, name and attrs) as their own
classes: read them as a `RawPacket` and consume the body with `Buffer`.

## Installation

```
pip install .
```

## Examples

Encode a request and decode it again:

```python
import io
from sftpkit.path_packets import StatPacket
from sftpkit.requests import RequestPacket

packet = RequestPacket(request_id=42, request=StatPacket(path="foo"))
data = packet.to_bytes()

decoded = RequestPacket.read_from(io.BytesIO(data))
assert decoded.request_id == 42
assert decoded.request.path == "foo"
```

Show a permission string:

```python
from sftpkit.permissions import FileMode

print(str(FileMode(0o40755)))   # drwxr-xr-x
```

Build an OpenSSH extension request:

```python
from sftpkit.openssh import FSyncExtendedPacket, register_extension_fsync

register_extension_fsync()
header, payload = FSyncExtendedPacket(handle="somehandle").marshal_packet(7)
```

Keep replies in request order:

```python
from sftpkit.packet_manager import OrderedPacket, PacketManager

sent = []
manager = PacketManager(sent.append)
manager.incoming_packet(OrderedPacket("req-a", 1))
manager.incoming_packet(OrderedPacket("req-b", 2))
manager.ready_packet(OrderedPacket("reply-b", 2))
manager.ready_packet(OrderedPacket("reply-a", 1))
assert sent == ["reply-a", "reply-b"]
manager.close()
```

## Running the tests

```
pip install .[test]
pytest
```