"""Filesystem based packet store implementation for redpacket."""

from redpacket.fs.filesystem_packet_store import FilesystemPacketStore

__all__ = ["FilesystemPacketStore"]
