import ipaddress

import pytest

from route_reconciler.codec import (
    MASK_PREFIXES,
    decode_hex,
    encode_hex,
    mask_to_prefix_length,
    prefix_length_to_mask,
)
from route_reconciler.errors import InvalidMask, MalformedAddress


def dotted_mask(prefix: int) -> str:
    return str(ipaddress.IPv4Address((0xFFFFFFFF << (32 - prefix)) & 0xFFFFFFFF))


@pytest.mark.parametrize("prefix", range(33))
def test_mask_to_prefix_length_canonical_masks(prefix: int):
    assert mask_to_prefix_length(dotted_mask(prefix)) == prefix


def test_mask_table_is_ordered_and_complete():
    assert list(MASK_PREFIXES.values()) == list(range(33))
    assert next(iter(MASK_PREFIXES)) == "0.0.0.0"
    assert list(MASK_PREFIXES)[-1] == "255.255.255.255"


@pytest.mark.parametrize(
    "mask",
    ["255.0.255.0", "255.255.255.1", "0.255.255.255", "", "not-a-mask", None],
)
def test_mask_to_prefix_length_rejects_non_canonical(mask):
    with pytest.raises(InvalidMask):
        mask_to_prefix_length(mask)


def test_prefix_length_to_mask():
    assert prefix_length_to_mask(24) == "255.255.255.0"
    assert prefix_length_to_mask(0) == "0.0.0.0"

    with pytest.raises(InvalidMask):
        prefix_length_to_mask(33)


def test_decode_hex_reverses_byte_order():
    assert decode_hex("0100000A") == "10.0.0.1"
    assert decode_hex("0102a8c0") == "192.168.2.1"
    assert decode_hex("00FFFFFF") == "255.255.255.0"


@pytest.mark.parametrize(
    "address", ["0.0.0.0", "127.0.0.1", "255.255.255.255", "10.0.0.1"]
)
def test_decode_hex_inverts_encode_hex(address: str):
    assert decode_hex(encode_hex(address)) == address


def test_encode_hex_matches_kernel_format():
    assert encode_hex("127.0.0.1") == "0100007F"


@pytest.mark.parametrize("raw", ["0100000", "0100000A00", "ZZ00000A", "", "01 0000A"])
def test_decode_hex_rejects_malformed_input(raw: str):
    with pytest.raises(MalformedAddress):
        decode_hex(raw)


def test_encode_hex_rejects_non_ipv4():
    with pytest.raises(MalformedAddress):
        encode_hex("fe80::1")
