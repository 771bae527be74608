"""
CRC — domain/entities.py

Name
- Domain Entities (orders + authenticated principal)

Responsibilities
- Define the order record as the bot sees it (read-only projection).
- Define the authenticated principal returned by a successful login.

Collaborators
- infrastructure.repositories.postgres.order: maps rows -> Order
- application.order_formatting: renders Order for chat
- application.usecases.authenticate_user: builds AuthenticatedUser

Constraints
- Pure data: no SQL, no transport, no formatting.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Union

from ..identity.users import UserId

Amount = Union[Decimal, int, float]


@dataclass(frozen=True, slots=True)
class Order:
    """R: Order owned by exactly one sales officer."""

    id: object
    order_number: str
    customer_name: str
    total_amount: Amount | None
    status: str
    created_at: datetime | None
    product_type: str | None
    unit: str | None
    quantity: Amount | None
    price: Amount | None
    sales_officer_id: UserId


@dataclass(frozen=True, slots=True)
class AuthenticatedUser:
    """R: Principal resolved by a successful login."""

    user_id: UserId
    display_name: str
    role: str
