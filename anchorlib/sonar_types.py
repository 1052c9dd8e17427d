"""Attribute definitions and error counters shared by SONAR endpoints."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field, fields
from enum import IntFlag

MAX_ATTRIBUTE_ID = 0xFFF


class AttributeOps(IntFlag):
    """Operations an attribute supports: read, write and notify."""

    R = 0x1000
    W = 0x2000
    N = 0x4000
    RW = R | W
    RN = R | N
    WN = W | N
    RWN = R | W | N


@dataclass(frozen=True)
class Attribute:
    """A SONAR attribute: a 12-bit ID, a maximum size and supported ops."""

    attribute_id: int
    max_size: int
    ops: AttributeOps

    def __post_init__(self) -> None:
        if not 0 <= self.attribute_id <= MAX_ATTRIBUTE_ID:
            raise ValueError(f"attribute_id must fit in 12 bits: {self.attribute_id:#x}")
        if self.max_size < 0:
            raise ValueError("max_size must not be negative")
        ops = AttributeOps(self.ops)
        if not ops or ops & ~AttributeOps.RWN:
            raise ValueError(f"invalid attribute ops: {self.ops!r}")
        object.__setattr__(self, "ops", ops)

    def supports(self, ops: AttributeOps) -> bool:
        """Whether every operation in ``ops`` is supported."""
        return (self.ops & ops) == ops


def _zero_counters(counters: object) -> None:
    for f in fields(counters):
        setattr(counters, f.name, 0)


@dataclass
class LinkLayerReceiveErrors:
    """Error counters for the receiving side of the link layer."""

    invalid_header: int = 0
    invalid_crc: int = 0
    buffer_overflow: int = 0
    invalid_escape_sequence: int = 0

    def clear(self) -> None:
        """Reset every counter to zero."""
        _zero_counters(self)


@dataclass
class LinkLayerErrors:
    """Error counters for the link layer protocol."""

    invalid_packet: int = 0
    unexpected_packet: int = 0
    invalid_sequence_number: int = 0
    retries: int = 0

    def clear(self) -> None:
        """Reset every counter to zero."""
        _zero_counters(self)


@dataclass
class SonarErrors:
    """All error counters of one SONAR endpoint."""

    link_layer_receive: LinkLayerReceiveErrors = field(default_factory=LinkLayerReceiveErrors)
    link_layer: LinkLayerErrors = field(default_factory=LinkLayerErrors)

    def get_and_clear(self) -> "SonarErrors":
        """Return a snapshot of the counters and reset them."""
        snapshot = copy.deepcopy(self)
        self.link_layer_receive.clear()
        self.link_layer.clear()
        return snapshot