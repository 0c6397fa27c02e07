"""
ChainTrace Product Primitive — Immutable Product Descriptor
=============================================================
Engine: Core Primitives

RULES (NON-NEGOTIABLE):
- Created exactly once, by a Manufacturer
- Cost in integer minor units (no floats)
- `custodian` is the manufacturer's identity, written once.
  Current custody is derived from the provenance trail, never
  from this field.

This file contains NO persistence logic.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ProductRecord:
    """
    Canonical product descriptor.

    Fields:
        product_id:      Sequential id assigned at creation (from 0).
        model_number:    Manufacturer model number.
        part_number:     Manufacturer part number.
        serial_number:   Unit serial number.
        custodian:       Network identity of the creating manufacturer.
        cost:            Manufacturing cost (minor units).
        manufactured_at: Creation timestamp (UTC).
    """
    product_id: int
    model_number: str
    part_number: str
    serial_number: str
    custodian: str
    cost: int
    manufactured_at: datetime

    def __post_init__(self):
        if not isinstance(self.product_id, int) or self.product_id < 0:
            raise ValueError("product_id must be non-negative integer.")
        if not self.custodian or not isinstance(self.custodian, str):
            raise ValueError("custodian must be non-empty string.")
        if not isinstance(self.cost, int) or isinstance(self.cost, bool):
            raise ValueError("cost must be integer (minor units).")
        if self.cost < 0:
            raise ValueError("cost must not be negative.")
        if not isinstance(self.manufactured_at, datetime):
            raise ValueError("manufactured_at must be datetime.")

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "model_number": self.model_number,
            "part_number": self.part_number,
            "serial_number": self.serial_number,
            "custodian": self.custodian,
            "cost": self.cost,
            "manufactured_at": self.manufactured_at.isoformat(),
        }
