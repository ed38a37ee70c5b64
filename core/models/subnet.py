"""Subnet models -- the result of an IPv4 subnet calculation."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class AddressFlags(BaseModel):
    """Well-known address blocks the input address falls into."""

    is_private_rfc1918: bool
    is_loopback: bool
    is_link_local: bool
    is_multicast: bool
    is_reserved: bool


class SubnetInfo(BaseModel):
    """Everything the subnet widget displays for an address + mask pair."""

    input_ip: str
    input_mask: str
    ip: str
    prefix: int
    mask: str
    wildcard: str
    network: str
    broadcast: str
    first_host: str
    last_host: str
    total: int
    usable: int
    range: str  # first - last host, or network - broadcast for /31 and /32
    address_class: Literal["A", "B", "C", "D", "E"]
    flags: AddressFlags
