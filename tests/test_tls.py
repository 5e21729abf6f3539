import pytest
from hypothesis import given, strategies as st

from snihash.tls import (
    TLS_PROTOCOL,
    IncompleteRequest,
    InvalidClientHello,
    NoHostname,
    TlsError,
    parse_extensions,
    parse_server_name_extension,
    parse_tls_header,
)


def u16(n):
    return n.to_bytes(2, "big")


def sni_body(name, name_type=0):
    entry = bytes([name_type]) + u16(len(name)) + name
    return u16(len(entry)) + entry


def sni_extension(name):
    body = sni_body(name)
    return b"\x00\x00" + u16(len(body)) + body


def other_extension(ext_type=0x000A, payload=b"\x00\x02\x00\x17"):
    return u16(ext_type) + u16(len(payload)) + payload


def client_hello(extensions=b"", version=(3, 3), with_ext_block=True,
                 handshake_type=1, session_id=b"", ciphers=b"\x00\x2f"):
    body = bytes(version) + b"\x00" * 32
    body += bytes([len(session_id)]) + session_id
    body += u16(len(ciphers)) + ciphers
    body += b"\x01\x00"
    if with_ext_block:
        body += u16(len(extensions)) + extensions
    handshake = bytes([handshake_type]) + len(body).to_bytes(3, "big") + body
    return b"\x16" + bytes(version) + u16(len(handshake)) + handshake


def test_extracts_hostname():
    record = client_hello(other_extension() + sni_extension(b"example.com"))
    assert parse_tls_header(record) == "example.com"


def test_accepts_bytearray_and_session_id():
    record = client_hello(sni_extension(b"example.com"), session_id=b"\x01" * 32)
    assert parse_tls_header(bytearray(record)) == "example.com"


def test_trailing_data_after_record_is_ignored():
    record = client_hello(sni_extension(b"example.com"))
    assert parse_tls_header(record + b"garbage") == "example.com"


def test_protocol_default_port_and_parser():
    assert TLS_PROTOCOL.default_port == 443
    record = client_hello(sni_extension(b"example.org"))
    assert TLS_PROTOCOL.parse_packet(record) == "example.org"


def test_short_header_is_incomplete():
    with pytest.raises(IncompleteRequest):
        parse_tls_header(b"\x16\x03\x01")


def test_truncated_record_is_incomplete():
    record = client_hello(sni_extension(b"example.com"))
    with pytest.raises(IncompleteRequest):
        parse_tls_header(record[:-1])


def test_not_handshake_is_invalid():
    record = bytearray(client_hello(sni_extension(b"example.com")))
    record[0] = 0x17
    with pytest.raises(InvalidClientHello):
        parse_tls_header(bytes(record))


def test_ssl2_hello_has_no_hostname():
    with pytest.raises(NoHostname):
        parse_tls_header(b"\x80\x2e\x01\x03\x01" + b"\x00" * 10)


def test_old_ssl_version_has_no_hostname():
    with pytest.raises(NoHostname):
        parse_tls_header(b"\x16\x02\x00\x00\x00")


def test_not_client_hello_is_invalid():
    record = client_hello(sni_extension(b"example.com"), handshake_type=2)
    with pytest.raises(InvalidClientHello):
        parse_tls_header(record)


def test_ssl3_without_extensions_has_no_hostname():
    record = client_hello(version=(3, 0), with_ext_block=False)
    with pytest.raises(NoHostname):
        parse_tls_header(record)


def test_tls_without_extension_block_is_invalid():
    record = client_hello(version=(3, 1), with_ext_block=False)
    with pytest.raises(InvalidClientHello):
        parse_tls_header(record)


def test_no_sni_extension_has_no_hostname():
    record = client_hello(other_extension())
    with pytest.raises(NoHostname):
        parse_tls_header(record)


def test_empty_record_body_is_invalid():
    with pytest.raises(InvalidClientHello):
        parse_tls_header(b"\x16\x03\x01\x00\x00")


def test_parse_extensions_overrun_is_invalid():
    with pytest.raises(InvalidClientHello):
        parse_extensions(b"\x00\x00\x00\x10\x00")


def test_parse_extensions_trailing_bytes_is_invalid():
    with pytest.raises(InvalidClientHello):
        parse_extensions(other_extension() + b"\x00\x01")


def test_parse_extensions_empty_has_no_hostname():
    with pytest.raises(NoHostname):
        parse_extensions(b"")


def test_server_name_skips_unknown_types():
    entry_other = b"\x05" + u16(3) + b"abc"
    entry_host = b"\x00" + u16(11) + b"example.com"
    entries = entry_other + entry_host
    assert parse_server_name_extension(u16(len(entries)) + entries) == "example.com"


def test_server_name_only_unknown_types_has_no_hostname():
    with pytest.raises(NoHostname):
        parse_server_name_extension(sni_body(b"abc", name_type=7))


def test_server_name_overrun_is_invalid():
    with pytest.raises(InvalidClientHello):
        parse_server_name_extension(b"\x00\x10\x00\x00\x20abc")


def test_hostname_stops_at_nul():
    assert parse_server_name_extension(sni_body(b"host\x00tail")) == "host"


@pytest.mark.parametrize(
    "data, specific",
    [
        (b"\x16\x03\x01", IncompleteRequest),
        (b"\x16\x02\x00\x00\x00", NoHostname),
        (b"\x16\x03\x01\x00\x00", InvalidClientHello),
    ],
)
def test_errors_share_base_class(data, specific):
    assert issubclass(TlsError, ValueError)
    with pytest.raises(TlsError) as info:
        parse_tls_header(data)
    assert isinstance(info.value, specific)
    assert isinstance(info.value, ValueError)


@given(st.from_regex(r"[a-z0-9][a-z0-9.-]{0,60}", fullmatch=True))
def test_hostname_round_trip(name):
    record = client_hello(other_extension() + sni_extension(name.encode()))
    assert parse_tls_header(record) == name


@given(st.binary(max_size=200))
def test_arbitrary_input_yields_str_or_tls_error(data):
    try:
        result = parse_tls_header(data)
    except TlsError:
        return
    assert isinstance(result, str)
    assert "\x00" not in result
    assert len(result) < len(data)