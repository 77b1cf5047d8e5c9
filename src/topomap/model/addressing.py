"""IP addressing utilities.

Parses IPv4 addresses and CIDR blocks into unsigned 32-bit integers
and answers containment questions with longest-prefix-match semantics.
Nothing here raises on bad input: a value that does not parse is
reported as ``None`` (or ``False``) and the caller treats it as
"no address information".
"""

import re
from dataclasses import dataclass
from ipaddress import IPv4Address, IPv4Network
from typing import Iterable

from topomap.model.topology import Node

ALL_ONES = 0xFFFFFFFF

_OCTET_PATTERN = re.compile(r"[0-9]+")
_BLOCK_PATTERN = re.compile(r"([0-9]+\.[0-9]+\.[0-9]+\.[0-9]+)/([0-9]+)")
_LIST_SEPARATORS = re.compile(r"[,;\s]+")


@dataclass(frozen=True)
class CIDRBlock:
    """A parsed CIDR block.

    ``network`` is always already masked, so two spellings of the same
    block (``10.1.2.3/8`` and ``10.0.0.0/8``) compare equal.
    """

    network: int
    prefix: int
    mask: int

    @classmethod
    def from_prefix(cls, address: int, prefix: int) -> "CIDRBlock":
        mask = prefix_mask(prefix)
        return cls(network=address & mask, prefix=prefix, mask=mask)

    def __str__(self) -> str:
        return f"{format_address(self.network)}/{self.prefix}"

    def to_network(self) -> IPv4Network:
        """The same block as an ``ipaddress`` network."""
        return IPv4Network((self.network, self.prefix))


def prefix_mask(prefix: int) -> int:
    """Netmask for a prefix length as an unsigned 32-bit int.

    Example:
        >>> hex(prefix_mask(24))
        '0xffffff00'
    """
    if prefix == 0:
        return 0
    return (ALL_ONES << (32 - prefix)) & ALL_ONES


def parse_address(value: str | None) -> int | None:
    """Parse a dotted-quad IPv4 address.

    Exactly four decimal octets in [0, 255] are accepted, leading
    zeros included (``010.0.0.1`` is 10.0.0.1). Any other shape
    (missing octets, signs, surrounding whitespace, CIDR suffix) is
    rejected.

    Returns:
        The address as an unsigned 32-bit int, or None if invalid
    """
    if not isinstance(value, str):
        return None
    parts = value.split(".")
    if len(parts) != 4:
        return None

    address = 0
    for part in parts:
        if not _OCTET_PATTERN.fullmatch(part):
            return None
        octet = int(part)
        if octet > 255:
            return None
        address = (address << 8) | octet
    return address


def format_address(value: int) -> str:
    """Format an unsigned 32-bit int as a canonical dotted quad."""
    return str(IPv4Address(value & ALL_ONES))


def parse_block(value: str | None) -> CIDRBlock | None:
    """Parse ``<address>/<prefix>`` into a CIDRBlock.

    Netmask spellings (``10.0.0.0/255.0.0.0``) and prefixes outside
    [0, 32] are rejected.
    """
    if not isinstance(value, str):
        return None
    match = _BLOCK_PATTERN.fullmatch(value)
    if match is None:
        return None

    prefix = int(match.group(2))
    if prefix > 32:
        return None

    address = parse_address(match.group(1))
    if address is None:
        return None

    return CIDRBlock.from_prefix(address, prefix)


def address_in_block(address: int, block: CIDRBlock) -> bool:
    """Check whether an address falls inside a block."""
    return (address & block.mask) == block.network


def block_contains(child: CIDRBlock, parent: CIDRBlock) -> bool:
    """Check whether ``child`` is a strictly more specific part of ``parent``.

    Blocks with equal prefix length never contain each other, even when
    identical, so a block can never be its own parent.
    """
    if child.prefix <= parent.prefix:
        return False
    return (child.network & parent.mask) == parent.network


def is_block(value: str | None) -> bool:
    """True if the value is CIDR notation."""
    return parse_block(value) is not None


def is_address(value: str | None) -> bool:
    """True if the value is a single IPv4 address."""
    return parse_address(value) is not None


def extract_address(value: str | None) -> str | None:
    """Return the address part of an address or CIDR string.

    Example:
        >>> extract_address("192.168.1.0/24")
        '192.168.1.0'
    """
    if not value:
        return None
    match = _BLOCK_PATTERN.fullmatch(value)
    if match is not None:
        return match.group(1) if is_address(match.group(1)) else None
    return value if is_address(value) else None


def split_address_tokens(value: str) -> list[str]:
    """Split free text on commas, semicolons and whitespace."""
    return [token for token in _LIST_SEPARATORS.split(value) if token]


def parse_address_list(value: str | Iterable[str] | None) -> list[str]:
    """Extract valid addresses from free text or a list.

    Invalid tokens are dropped; duplicates keep their first position.

    Example:
        >>> parse_address_list("10.0.0.1, 10.0.0.2;bogus 10.0.0.1")
        ['10.0.0.1', '10.0.0.2']
    """
    if not value:
        return []
    tokens = split_address_tokens(value) if isinstance(value, str) else list(value)
    return list(dict.fromkeys(t for t in tokens if is_address(t)))


def node_addresses(node: Node) -> list[str]:
    """All addresses of a node, from ``ip_or_cidr`` then ``ips``."""
    addresses = parse_address_list(node.data.ip_or_cidr)
    addresses.extend(parse_address_list(node.data.ips))
    return list(dict.fromkeys(addresses))


def node_block(node: Node) -> CIDRBlock | None:
    """The CIDR block a node stands for.

    The address field is checked first, then the label.
    """
    for candidate in (node.data.ip_or_cidr, node.data.label):
        block = parse_block(candidate)
        if block is not None:
            return block
    return None
