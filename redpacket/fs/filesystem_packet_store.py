from dataclasses import dataclass, field, replace
import logging
import os
from pathlib import Path
from uuid import UUID, uuid4

from redpacket.packet import Packet
from redpacket.packet_store import PacketStore
from redpacket.redpacket_error import (
    PacketNotFound,
    RedPacketError,
    TransientStoreFailure,
)
from redpacket.serializers.pydantic_serializer import get_json_serializer
from redpacket.serializers.serializer import Serializer

_LOGGER = logging.getLogger(__name__)


@dataclass
class FilesystemPacketStore(PacketStore):
    """
    Filesystem implementation of PacketStore.

    Each packet has a directory containing one immutable file per version:

        <root_dir>/packets/<packet_id>/<version>

    A new version is written to a temporary file and then hard linked to its final name.
    Creating the link fails if the name already exists, so of any number of writers
    (threads or processes) deriving from the same version exactly one succeeds. Old
    versions are kept, giving a history of every grant.
    """

    root_dir: Path
    serializer: Serializer[Packet] = field(
        default_factory=lambda: get_json_serializer(Packet)
    )

    def __post_init__(self):
        self.root_dir = Path(self.root_dir)
        self.packet_dir.mkdir(parents=True, exist_ok=True)
        self.tmp_dir.mkdir(parents=True, exist_ok=True)

    @property
    def packet_dir(self) -> Path:
        return self.root_dir / "packets"

    @property
    def tmp_dir(self) -> Path:
        return self.root_dir / "tmp"

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_value, traceback):
        pass

    async def create_packet(self, packet: Packet) -> Packet:
        packet = replace(packet, version=0)
        versions_dir = self.packet_dir / str(packet.id)
        try:
            versions_dir.mkdir()
            self._write_version(versions_dir, packet)
        except FileExistsError as e:
            raise RedPacketError(f"Packet {packet.id} already exists") from e
        except OSError as e:
            raise TransientStoreFailure(f"Error creating packet {packet.id}: {e}") from e
        return packet

    async def get_packet(self, packet_id: UUID) -> Packet:
        versions_dir = self.packet_dir / str(packet_id)
        try:
            version = self._get_latest_version(versions_dir)
            with open(versions_dir / str(version), "rb") as f:
                data = f.read()
        except FileNotFoundError as e:
            raise PacketNotFound(f"Packet {packet_id} not found") from e
        except OSError as e:
            raise TransientStoreFailure(f"Error reading packet {packet_id}: {e}") from e
        return replace(self.serializer.deserialize(data), version=version)

    async def update_packet(self, packet: Packet, expected_version: int) -> bool:
        packet = replace(packet, version=expected_version + 1)
        versions_dir = self.packet_dir / str(packet.id)
        try:
            if self._get_latest_version(versions_dir) != expected_version:
                return False
            return self._write_version(versions_dir, packet)
        except FileNotFoundError as e:
            raise PacketNotFound(f"Packet {packet.id} not found") from e
        except OSError as e:
            raise TransientStoreFailure(f"Error updating packet {packet.id}: {e}") from e

    def _get_latest_version(self, versions_dir: Path) -> int:
        versions = []
        for file in versions_dir.iterdir():
            try:
                versions.append(int(file.name))
            except ValueError:
                _LOGGER.warning(f"unexpected_file_in_packet_dir {file}")
        if not versions:
            # Directory created but first version not yet linked
            raise FileNotFoundError(versions_dir)
        return max(versions)

    def _write_version(self, versions_dir: Path, packet: Packet) -> bool:
        data = self.serializer.serialize(packet)
        tmp_file = self.tmp_dir / f"{packet.id}.{uuid4().hex}"
        try:
            with open(tmp_file, "xb") as f:
                f.write(data)
            try:
                os.link(tmp_file, versions_dir / str(packet.version))
            except FileExistsError:
                _LOGGER.debug(f"version_exists packet_id={packet.id} version={packet.version}")
                return False
            return True
        finally:
            tmp_file.unlink(missing_ok=True)
