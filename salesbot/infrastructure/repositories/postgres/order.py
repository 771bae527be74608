"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/order.py
============================================================
Class: PostgresOrderRepository

Responsibilities:
  - Listar las órdenes más recientes de un sales officer.
  - Mapear filas crudas -> entidad `Order`.

Collaborators:
  - PostgresRepository (pool + helpers de ejecución)
  - domain.entities.Order
  - Tabla: orders (esquema del back office, pre-existente)

Constraints / Notes:
  - Ownership en SQL: WHERE sales_officer_id = %s (nunca se filtra en Python).
  - Orden: created_at DESC; cap por LIMIT parametrizado.
  - limit <= 0 => [] sin consultar.
============================================================
"""

from __future__ import annotations

from typing import List

from ....domain.entities import Order
from ....identity.users import UserId
from ._base import PostgresRepository

_ORDER_COLUMNS = """
    id, order_number, customer_name, total_amount, status, created_at,
    product_type, unit, quantity, price, sales_officer_id
"""


class PostgresOrderRepository(PostgresRepository):
    """R: Implementación PostgreSQL del repositorio de órdenes."""

    @staticmethod
    def _row_to_order(row: tuple) -> Order:
        (
            order_id,
            order_number,
            customer_name,
            total_amount,
            status,
            created_at,
            product_type,
            unit,
            quantity,
            price,
            sales_officer_id,
        ) = row
        return Order(
            id=order_id,
            order_number=order_number,
            customer_name=customer_name,
            total_amount=total_amount,
            status=status,
            created_at=created_at,
            product_type=product_type,
            unit=unit,
            quantity=quantity,
            price=price,
            sales_officer_id=sales_officer_id,
        )

    def list_recent_orders(self, sales_officer_id: UserId, *, limit: int) -> List[Order]:
        """Órdenes del officer, más recientes primero."""
        if limit <= 0:
            return []

        rows = self._fetchall(
            query=f"""
                SELECT {_ORDER_COLUMNS}
                FROM orders
                WHERE sales_officer_id = %s
                ORDER BY created_at DESC
                LIMIT %s
            """,
            params=(sales_officer_id, limit),
            context_msg="PostgresOrderRepository: list_recent_orders failed",
            extra={"sales_officer_id": str(sales_officer_id), "limit": limit},
        )
        return [self._row_to_order(r) for r in rows]
