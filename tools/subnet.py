"""IPv4 subnet calculator.

Accepts an address plus either a prefix length ("24", "/24") or a dotted
netmask ("255.255.255.0") and derives the network, broadcast, host range
and a few classification flags.
"""

from __future__ import annotations

import re

from core.models.subnet import AddressFlags, SubnetInfo

_OCTET_RE = re.compile(r"[0-9]{1,3}")
_PREFIX_RE = re.compile(r"[0-9]{1,2}")
_ALL_ONES = 0xFFFFFFFF


def parse_ipv4(text: str) -> int | None:
    """Parse a dotted-quad address into a 32-bit integer, or None."""
    parts = text.strip().split(".")
    if len(parts) != 4:
        return None
    out = 0
    for part in parts:
        if not _OCTET_RE.fullmatch(part):
            return None
        octet = int(part)
        if octet > 255:
            return None
        out = (out << 8) | octet
    return out


def int_to_ipv4(n: int) -> str:
    n &= _ALL_ONES
    return ".".join(str((n >> shift) & 0xFF) for shift in (24, 16, 8, 0))


def prefix_to_mask(prefix: int) -> int:
    """Netmask integer for a prefix length."""
    if not 0 <= prefix <= 32:
        raise ValueError(f"Invalid prefix: {prefix!r}")
    return (_ALL_ONES << (32 - prefix)) & _ALL_ONES


def mask_to_prefix(text: str) -> int | None:
    """Prefix length of a dotted netmask, or None if the ones are not contiguous."""
    n = parse_ipv4(text)
    if n is None:
        return None
    prefix = bin(n).count("1")
    if prefix_to_mask(prefix) != n:
        return None
    return prefix


def parse_mask(text: str) -> tuple[int, int]:
    """Parse "/24", "24" or "255.255.255.0" into (prefix, mask_int)."""
    raw = text.strip()
    if not raw:
        raise ValueError("Empty mask")

    candidate = raw[1:] if raw.startswith("/") else raw
    if _PREFIX_RE.fullmatch(candidate):
        prefix = int(candidate)
        if prefix > 32:
            raise ValueError("Prefix length must be 0-32")
        return prefix, prefix_to_mask(prefix)

    prefix = mask_to_prefix(raw)
    if prefix is None:
        raise ValueError("Invalid dotted netmask (must be contiguous)")
    return prefix, prefix_to_mask(prefix)


def classify(ip: int) -> str:
    first = (ip >> 24) & 0xFF
    if first <= 127:
        return "A"
    if first <= 191:
        return "B"
    if first <= 223:
        return "C"
    if first <= 239:
        return "D"
    return "E"


def address_flags(ip: int) -> AddressFlags:
    return AddressFlags(
        is_private_rfc1918=(
            (ip & 0xFF000000) == 0x0A000000     # 10.0.0.0/8
            or (ip & 0xFFF00000) == 0xAC100000  # 172.16.0.0/12
            or (ip & 0xFFFF0000) == 0xC0A80000  # 192.168.0.0/16
        ),
        is_loopback=(ip & 0xFF000000) == 0x7F000000,
        is_link_local=(ip & 0xFFFF0000) == 0xA9FE0000,
        is_multicast=(ip & 0xF0000000) == 0xE0000000,
        is_reserved=(ip >> 24) in (0, 255),
    )


def compute_subnet(ip: str, mask: str) -> SubnetInfo:
    """Compute subnet details for an address and mask.

    Raises:
        ValueError: if the address or mask is invalid.
    """
    ip_int = parse_ipv4(ip)
    if ip_int is None:
        raise ValueError("Invalid IPv4 address")
    prefix, mask_int = parse_mask(mask)

    wildcard_int = ~mask_int & _ALL_ONES
    network = ip_int & mask_int
    broadcast = network | wildcard_int

    total = 2 ** (32 - prefix)
    if prefix == 32:
        usable = 1
    elif prefix == 31:
        usable = 2  # RFC 3021 point-to-point
    else:
        usable = max(total - 2, 0)

    point_to_point = prefix >= 31
    first_host = network if point_to_point else network + 1
    last_host = broadcast if point_to_point else broadcast - 1

    if point_to_point:
        host_range = f"{int_to_ipv4(network)} - {int_to_ipv4(broadcast)}"
    else:
        host_range = f"{int_to_ipv4(first_host)} - {int_to_ipv4(last_host)}"

    return SubnetInfo(
        input_ip=ip,
        input_mask=mask,
        ip=int_to_ipv4(ip_int),
        prefix=prefix,
        mask=int_to_ipv4(mask_int),
        wildcard=int_to_ipv4(wildcard_int),
        network=int_to_ipv4(network),
        broadcast=int_to_ipv4(broadcast),
        first_host=int_to_ipv4(first_host),
        last_host=int_to_ipv4(last_host),
        total=total,
        usable=usable,
        range=host_range,
        address_class=classify(ip_int),
        flags=address_flags(ip_int),
    )
