"""POSIX file mode bits as carried in SFTP attributes."""

from __future__ import annotations


class FileMode(int):
    """A file's type and permission bits, laid out as POSIX defines them."""

    PERM = 0o0777
    USER_READ = 0o0400
    USER_WRITE = 0o0200
    USER_EXEC = 0o0100
    GROUP_READ = 0o0040
    GROUP_WRITE = 0o0020
    GROUP_EXEC = 0o0010
    OTHER_READ = 0o0004
    OTHER_WRITE = 0o0002
    OTHER_EXEC = 0o0001

    SETUID = 0o4000
    SETGID = 0o2000
    STICKY = 0o1000

    TYPE = 0xF000
    NAMED_PIPE = 0x1000
    CHAR_DEVICE = 0x2000
    DIR = 0x4000
    DEVICE = 0x6000
    REGULAR = 0x8000
    SYMLINK = 0xA000
    SOCKET = 0xC000

    def is_dir(self) -> bool:
        """Whether the mode describes a directory."""
        return (self & FileMode.TYPE) == FileMode.DIR

    def is_regular(self) -> bool:
        """Whether the mode describes a regular file."""
        return (self & FileMode.TYPE) == FileMode.REGULAR

    def perm(self) -> FileMode:
        """The permission bits only."""
        return FileMode(self & FileMode.PERM)

    def type(self) -> FileMode:
        """The file type bits only."""
        return FileMode(self & FileMode.TYPE)

    def __str__(self) -> str:
        """An ``ls -l`` style string such as ``-rwxr-xr-x``."""
        chars = [_TYPE_CHARS.get(int(self.type()), "?")]
        chars.extend(
            char if self & (1 << (8 - bit)) else "-"
            for bit, char in enumerate("rwxrwxrwx")
        )
        for flag, index, lower, upper in _SPECIAL_BITS:
            if self & flag:
                chars[index] = lower if chars[index] == "x" else upper
        return "".join(chars)

    def __repr__(self) -> str:
        return f"FileMode(0o{int(self):o})"


_TYPE_CHARS = {
    FileMode.REGULAR: "-",
    FileMode.DIR: "d",
    FileMode.SYMLINK: "l",
    FileMode.DEVICE: "b",
    FileMode.CHAR_DEVICE: "c",
    FileMode.NAMED_PIPE: "p",
    FileMode.SOCKET: "s",
}

_SPECIAL_BITS = (
    (FileMode.SETUID, 3, "s", "S"),
    (FileMode.SETGID, 6, "s", "S"),
    (FileMode.STICKY, 9, "t", "T"),
)