"""Wake-on-LAN (WOL) implementation — magic packet builder and UDP sender."""

from __future__ import annotations

import binascii
import logging
import socket
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wolweb.config import MachineConfig

logger = logging.getLogger(__name__)

MAC_SIZE = 6
SYNC_PREFIX = b"\xff" * MAC_SIZE
MAC_REPETITIONS = 16
PACKET_SIZE = len(SYNC_PREFIX) + MAC_SIZE * MAC_REPETITIONS  # 102

_MAC_DELIMITERS = str.maketrans("", "", ":- ")


class MacError(str, Enum):
    INVALID_FORMAT = "invalid symbols in mac address"
    SIZE_MISMATCH = "mac address size mismatch"


@dataclass(frozen=True)
class MacParseResult:
    """Outcome of parsing a MAC string: either ``mac_bytes`` or ``error``."""

    mac_bytes: bytes | None = None
    error: MacError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class WolError(Exception):
    """Base class for every Wake-on-LAN failure."""


class MagicPacketError(WolError, ValueError):
    def __init__(self, mac: str, kind: MacError):
        super().__init__(f"{kind.value}: {mac!r}")
        self.mac = mac
        self.kind = kind


class InvalidFormatError(MagicPacketError):
    def __init__(self, mac: str):
        super().__init__(mac, MacError.INVALID_FORMAT)


class SizeMismatchError(MagicPacketError):
    def __init__(self, mac: str):
        super().__init__(mac, MacError.SIZE_MISMATCH)


class SendError(WolError):
    """A magic packet could not be delivered to ``address:port``."""

    reason = "cannot send magic packet"

    def __init__(self, mac: str, address: str, port: int, detail: str = ""):
        message = f"{self.reason} for {mac} to {address}:{port}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.mac = mac
        self.address = address
        self.port = port


class PacketBuildFailed(SendError):
    reason = "cannot generate magic packet"


class DialFailed(SendError):
    reason = "cannot dial network"


class WriteFailed(SendError):
    reason = "cannot write magic packet"


class ShortWrite(SendError):
    reason = "short write"


def parse_mac(mac: str) -> MacParseResult:
    """Decode a colon/dash/space delimited MAC string into its 6 raw bytes."""
    cleaned = mac.translate(_MAC_DELIMITERS)
    try:
        mac_bytes = binascii.unhexlify(cleaned)
    except (binascii.Error, ValueError):
        return MacParseResult(error=MacError.INVALID_FORMAT)
    if len(mac_bytes) != MAC_SIZE:
        return MacParseResult(error=MacError.SIZE_MISMATCH)
    return MacParseResult(mac_bytes=mac_bytes)


def build_magic_packet(mac: str) -> bytes:
    """
    Build the 102-byte magic packet for a MAC address.

    Args:
        mac: MAC address such as "AA:BB:CC:DD:EE:FF", "aa-bb-cc-dd-ee-ff"
            or "AA BB CC DD EE FF"

    Raises:
        InvalidFormatError: non-hex characters remain after stripping delimiters
        SizeMismatchError: the address does not decode to exactly 6 bytes
    """
    result = parse_mac(mac)
    if result.error is MacError.INVALID_FORMAT:
        raise InvalidFormatError(mac)
    if result.error is MacError.SIZE_MISMATCH:
        raise SizeMismatchError(mac)
    # Magic packet: 6x 0xFF + 16x MAC address
    return SYNC_PREFIX + result.mac_bytes * MAC_REPETITIONS


def send_magic_packet(address: str, port: int, mac: str) -> None:
    """
    Send one Wake-on-LAN magic packet as a single UDP datagram.

    Args:
        address: Broadcast (or unicast) IPv4 address
        port: UDP port, 0-65535
        mac: Target MAC address

    Raises:
        PacketBuildFailed, DialFailed, WriteFailed, ShortWrite
    """
    try:
        packet = build_magic_packet(mac)
    except MagicPacketError as e:
        raise PacketBuildFailed(mac, address, port, str(e)) from e

    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    except OSError as e:
        raise DialFailed(mac, address, port, str(e)) from e

    with sock:
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
            sock.connect((address, port))
        except (OSError, OverflowError, TypeError) as e:
            raise DialFailed(mac, address, port, str(e)) from e

        try:
            written = sock.send(packet)
        except OSError as e:
            raise WriteFailed(mac, address, port, str(e)) from e

    if written != PACKET_SIZE:
        raise ShortWrite(
            mac, address, port, f"written {written} bytes instead of {PACKET_SIZE}"
        )


def wake_machine(
    broadcast: str,
    machine: MachineConfig,
    log: logging.Logger | logging.LoggerAdapter = logger,
) -> None:
    """Send the magic packet to every configured port, stopping at the first failure."""
    for port in machine.ports:
        send_magic_packet(broadcast, port, machine.mac)
        log.debug(
            "Magic packet sent to %s (%s) via %s:%d",
            machine.name, machine.mac, broadcast, port,
        )
