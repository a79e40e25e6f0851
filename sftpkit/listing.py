"""``ls -l`` style long names for SSH_FXP_NAME entries."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol

from .permissions import FileMode

try:
    import grp
    import pwd
except ImportError:  # platforms without a user database
    grp = None
    pwd = None

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


class IDLookup(Protocol):
    """Turns numeric user and group ids into names."""

    def lookup_user_name(self, uid: str) -> str: ...

    def lookup_group_name(self, gid: str) -> str: ...


class OSIDLookup:
    """Looks ids up in the local user and group database."""

    def lookup_user_name(self, uid: str) -> str:
        """The user name for uid, or uid itself if it is unknown."""
        if pwd is None:
            return uid
        try:
            return pwd.getpwuid(int(uid)).pw_name
        except (KeyError, ValueError, OverflowError):
            return uid

    def lookup_group_name(self, gid: str) -> str:
        """The group name for gid, or gid itself if it is unknown."""
        if grp is None:
            return gid
        try:
            return grp.getgrgid(int(gid)).gr_name
        except (KeyError, ValueError, OverflowError):
            return gid


@dataclass
class FileInfo:
    """What a directory listing shows about one file."""

    name: str
    size: int
    mode: FileMode
    mtime: datetime
    nlink: int = 1
    uid: int | str = 0
    gid: int | str = 0

    @classmethod
    def from_path(cls, path: str | os.PathLike) -> FileInfo:
        """Describe the file at path, following symbolic links."""
        st = os.stat(path)
        text = os.fspath(path)
        name = os.path.basename(text.rstrip("/" + os.sep)) or text
        return cls(
            name=name,
            size=st.st_size,
            mode=FileMode(st.st_mode & 0xFFFF),
            mtime=datetime.fromtimestamp(st.st_mtime),
            nlink=st.st_nlink,
            uid=st.st_uid,
            gid=st.st_gid,
        )


def _add_months(moment: datetime, months: int) -> datetime:
    """Shift by whole months, letting day overflow roll into the next month."""
    index = moment.year * 12 + (moment.month - 1) + months
    year, month = divmod(index, 12)
    first = moment.replace(year=year, month=month + 1, day=1)
    return first + timedelta(days=moment.day - 1)


def format_longname(
    info: FileInfo, id_lookup: IDLookup | None = None, now: datetime | None = None
) -> str:
    """Format info like a line of ``ls -l``.

    Files modified more than six months before ``now`` show the year
    instead of the time of day.
    """
    uid, gid = str(info.uid), str(info.gid)
    if id_lookup is not None:
        uid = id_lookup.lookup_user_name(uid)
        gid = id_lookup.lookup_group_name(gid)

    mtime = info.mtime
    if now is None:
        now = datetime.now(mtime.tzinfo)
    date = f"{_MONTHS[mtime.month - 1]} {mtime.day}"
    if mtime < _add_months(now, -6):
        year_or_time = f"{mtime.year:04d}"
    else:
        year_or_time = f"{mtime.hour:02d}:{mtime.minute:02d}"

    perms = str(FileMode(info.mode))
    return (
        f"{perms} {info.nlink:4d} {uid:<8} {gid:<8} {info.size:8d} "
        f"{date} {year_or_time:>5} {info.name}"
    )