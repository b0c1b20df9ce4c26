"""Address helpers for the kernel route table and dotted netmasks."""

from __future__ import annotations

import ipaddress
import re
from types import MappingProxyType
from typing import Mapping

from .errors import InvalidMask, MalformedAddress

_HEX_ADDRESS = re.compile(r"[0-9A-Fa-f]{8}")

# Ordered 0.0.0.0 -> 0 ... 255.255.255.255 -> 32.
MASK_PREFIXES: Mapping[str, int] = MappingProxyType(
    {
        str(ipaddress.IPv4Network(f"0.0.0.0/{prefix}").netmask): prefix
        for prefix in range(33)
    }
)
_PREFIX_MASKS: Mapping[int, str] = MappingProxyType(
    {prefix: mask for mask, prefix in MASK_PREFIXES.items()}
)


def decode_hex(raw: str) -> str:
    """Decode a ``/proc/net/route`` address field into dotted-quad text.

    The kernel prints each address as four byte pairs in host (little-endian)
    order, so ``0100000A`` is ``10.0.0.1``.
    """

    if not isinstance(raw, str) or not _HEX_ADDRESS.fullmatch(raw):
        raise MalformedAddress(f"'{raw}' is not an 8 digit hex address")

    pairs = [raw[i:i + 2] for i in range(0, 8, 2)]
    value = int("".join(reversed(pairs)), 16)
    return str(ipaddress.IPv4Address(value))


def encode_hex(address: str) -> str:
    """Inverse of :func:`decode_hex`, matching the kernel's upper-case form."""

    try:
        packed = ipaddress.IPv4Address(address).packed
    except ipaddress.AddressValueError as exc:
        raise MalformedAddress(f"'{address}' is not an IPv4 address") from exc
    return f"{int.from_bytes(packed, 'little'):08X}"


def mask_to_prefix_length(mask: str) -> int:
    """Return the prefix length for a canonical dotted netmask.

    Non-contiguous masks such as ``255.0.255.0`` are rejected rather than
    approximated.
    """

    try:
        return MASK_PREFIXES[mask]
    except (KeyError, TypeError):
        raise InvalidMask(f"'{mask}' is not a valid IPv4 netmask") from None


def prefix_length_to_mask(prefix: int) -> str:
    try:
        return _PREFIX_MASKS[int(prefix)]
    except (KeyError, TypeError, ValueError):
        raise InvalidMask(f"'{prefix}' is not a valid IPv4 prefix length") from None
