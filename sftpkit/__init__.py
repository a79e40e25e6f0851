"""SSH File Transfer Protocol request encoding, OpenSSH extensions, reply ordering and listings."""

__version__ = "0.1.0"