"""Extraction of the Server Name Indication host from a TLS ClientHello.

This is a minimal TLS reader: it only walks a handshake record far enough to
find the first ``host_name`` entry of the server name extension.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Union

__all__ = [
    "TlsError",
    "IncompleteRequest",
    "NoHostname",
    "InvalidClientHello",
    "Protocol",
    "TLS_PROTOCOL",
    "parse_tls_header",
    "parse_extensions",
    "parse_server_name_extension",
]

logger = logging.getLogger(__name__)

TLS_HEADER_LEN = 5
TLS_HANDSHAKE_CONTENT_TYPE = 0x16
TLS_HANDSHAKE_TYPE_CLIENT_HELLO = 0x01
SERVER_NAME_EXTENSION = 0x0000
HOST_NAME_TYPE = 0x00

Buffer = Union[bytes, bytearray, memoryview]


class TlsError(ValueError):
    """Base class for failures to read a hostname from a TLS record."""


class IncompleteRequest(TlsError):
    """More data is needed before the record can be parsed."""


class NoHostname(TlsError):
    """The record is well formed but carries no server name."""


class InvalidClientHello(TlsError):
    """The data is not a valid TLS ClientHello."""


@dataclass(frozen=True)
class Protocol:
    """A sniffable protocol: its default port and its hostname parser."""

    default_port: int
    parse_packet: Callable[[Buffer], str]


def _u16(data: bytes, pos: int) -> int:
    return (data[pos] << 8) | data[pos + 1]


def _decode_hostname(raw: bytes) -> str:
    # Copying stops at the first NUL byte.
    return raw.split(b"\x00", 1)[0].decode("latin-1")


def parse_tls_header(data: Buffer) -> str:
    """Return the first SNI host name found in a TLS ClientHello record.

    Raises IncompleteRequest if the record is not yet complete, NoHostname if
    it carries no server name and InvalidClientHello if it is malformed.
    """
    data = bytes(data)
    if len(data) < TLS_HEADER_LEN:
        raise IncompleteRequest("shorter than a TLS record header")

    # SSL 2.0 compatible ClientHello: high bit of the length, type ClientHello.
    if data[0] & 0x80 and data[2] == 1:
        logger.debug("Received SSL 2.0 Client Hello which can not support SNI.")
        raise NoHostname("SSL 2.0 ClientHello cannot carry SNI")

    if data[0] != TLS_HANDSHAKE_CONTENT_TYPE:
        logger.debug("Request did not begin with TLS handshake.")
        raise InvalidClientHello("record is not a TLS handshake")

    major, minor = data[1], data[2]
    if major < 3:
        logger.debug("Received SSL %d.%d handshake which can not support SNI.",
                     major, minor)
        raise NoHostname(f"SSL {major}.{minor} handshake cannot carry SNI")

    record_len = _u16(data, 3) + TLS_HEADER_LEN
    if len(data) < record_len:
        raise IncompleteRequest("TLS record is not complete")
    data = data[:record_len]
    size = len(data)

    pos = TLS_HEADER_LEN
    if pos + 1 > size:
        raise InvalidClientHello("missing handshake type")
    if data[pos] != TLS_HANDSHAKE_TYPE_CLIENT_HELLO:
        logger.debug("Not a client hello")
        raise InvalidClientHello("handshake is not a ClientHello")

    # Handshake type, length, version and random.
    pos += 38

    if pos + 1 > size:
        raise InvalidClientHello("truncated session id")
    pos += 1 + data[pos]

    if pos + 2 > size:
        raise InvalidClientHello("truncated cipher suites")
    pos += 2 + _u16(data, pos)

    if pos + 1 > size:
        raise InvalidClientHello("truncated compression methods")
    pos += 1 + data[pos]

    if pos == size and major == 3 and minor == 0:
        logger.debug("Received SSL 3.0 handshake without extensions")
        raise NoHostname("SSL 3.0 handshake without extensions")

    if pos + 2 > size:
        raise InvalidClientHello("truncated extensions length")
    ext_len = _u16(data, pos)
    pos += 2
    if pos + ext_len > size:
        raise InvalidClientHello("extensions overrun the record")
    return parse_extensions(data[pos:pos + ext_len])


def parse_extensions(data: Buffer) -> str:
    """Find the server name extension in an extensions block and parse it."""
    data = bytes(data)
    size = len(data)
    pos = 0
    while pos + 4 <= size:
        length = _u16(data, pos + 2)
        if _u16(data, pos) == SERVER_NAME_EXTENSION:
            # Each extension type occurs at most once.
            if pos + 4 + length > size:
                raise InvalidClientHello("server name extension overruns block")
            return parse_server_name_extension(data[pos + 4:pos + 4 + length])
        pos += 4 + length
    if pos != size:
        raise InvalidClientHello("extensions block has trailing bytes")
    raise NoHostname("no server name extension")


def parse_server_name_extension(data: Buffer) -> str:
    """Return the first ``host_name`` entry of a server name extension body."""
    data = bytes(data)
    size = len(data)
    pos = 2  # server name list length
    while pos + 3 < size:
        length = _u16(data, pos + 1)
        if pos + 3 + length > size:
            raise InvalidClientHello("server name entry overruns extension")
        name_type = data[pos]
        if name_type == HOST_NAME_TYPE:
            return _decode_hostname(data[pos + 3:pos + 3 + length])
        logger.debug("Unknown server name extension name type: %d", name_type)
        pos += 3 + length
    if pos != size:
        raise InvalidClientHello("server name list has trailing bytes")
    raise NoHostname("server name extension holds no host name")


TLS_PROTOCOL = Protocol(default_port=443, parse_packet=parse_tls_header)