"""
===============================================================================
USE CASE: List Recent Orders
===============================================================================

Business Goal:
    Mostrar al sales officer autenticado sus órdenes más recientes.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    ListRecentOrdersUseCase

Responsibilities:
    - Consultar las órdenes del officer (más recientes primero, cap `limit`).
    - Garantizar ownership, cap y orden aunque el repositorio se equivoque.
    - Reportar fallas de DB como resultado (sin resultados parciales).

Collaborators:
    - OrderRepository.list_recent_orders(sales_officer_id, limit=...)

-------------------------------------------------------------------------------
INPUTS / OUTPUTS
-------------------------------------------------------------------------------
Inputs:
    ListRecentOrdersInput:
      - user_id: UserId

Outputs:
    ListRecentOrdersResult:
      - orders: list[Order]
      - unavailable: bool
===============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List

from ...crosscutting.exceptions import DatabaseError
from ...domain.entities import Order
from ...domain.repositories import OrderRepository
from ...identity.users import UserId

logger = logging.getLogger(__name__)

DEFAULT_ORDERS_LIMIT = 10

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _sort_key(order: Order) -> datetime:
    created = order.created_at
    if created is None:
        return _OLDEST
    if created.tzinfo is None:
        return created.replace(tzinfo=timezone.utc)
    return created


@dataclass(frozen=True)
class ListRecentOrdersInput:
    user_id: UserId


@dataclass(frozen=True)
class ListRecentOrdersResult:
    orders: List[Order] = field(default_factory=list)
    unavailable: bool = False


class ListRecentOrdersUseCase:
    """Use Case (Query): órdenes recientes del officer autenticado."""

    def __init__(
        self, order_repository: OrderRepository, *, limit: int = DEFAULT_ORDERS_LIMIT
    ) -> None:
        if limit <= 0:
            raise ValueError("limit must be > 0")
        self._orders = order_repository
        self._limit = limit

    def execute(self, input_data: ListRecentOrdersInput) -> ListRecentOrdersResult:
        try:
            rows = self._orders.list_recent_orders(input_data.user_id, limit=self._limit)
        except DatabaseError as exc:
            logger.error("Error fetching orders. error_id=%s", exc.error_id)
            return ListRecentOrdersResult(unavailable=True)

        owner = str(input_data.user_id)
        owned = [o for o in rows if str(o.sales_officer_id) == owner]
        if len(owned) != len(rows):
            logger.warning(
                "Dropped orders not owned by requester. user_id=%s dropped=%d",
                input_data.user_id,
                len(rows) - len(owned),
            )

        owned.sort(key=_sort_key, reverse=True)
        return ListRecentOrdersResult(orders=owned[: self._limit])
