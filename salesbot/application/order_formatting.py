"""
===============================================================================
MÓDULO: Formato de órdenes para chat (Markdown de Telegram)
===============================================================================

Responsabilidades:
  - Mapear status -> glifo (approved ✅, pending ⏳, otro ❌).
  - Renderizar montos con sufijo de moneda y fechas como fecha de calendario.
  - Escapar valores dinámicos para el Markdown "legacy" de Telegram.
  - Armar el mensaje completo numerado (1..N) con encabezado.

Colaboradores:
  - domain.entities.Order
  - application.replies (encabezado)
  - interfaces.chat.dispatcher (consumidor)

Notas:
  - Funciones puras: sin I/O, fáciles de testear.
===============================================================================
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Final, Iterable

from ..domain.entities import Order
from .replies import ORDERS_HEADER

_STATUS_GLYPHS: Final[dict[str, str]] = {
    "approved": "✅",
    "pending": "⏳",
}
_FALLBACK_GLYPH: Final[str] = "❌"

# Caracteres con significado en parse_mode=Markdown (legacy).
_MARKDOWN_SPECIAL_RE = re.compile(r"([_*`\[])")


def status_glyph(status: str | None) -> str:
    return _STATUS_GLYPHS.get((status or "").strip().lower(), _FALLBACK_GLYPH)


def escape_markdown(value: object) -> str:
    """Escapa un valor dinámico para que no rompa el Markdown del mensaje."""
    return _MARKDOWN_SPECIAL_RE.sub(r"\\\1", "" if value is None else str(value))


def bold_text(value: object) -> str:
    """Texto dentro de `*...*`: ahí no hay escapes, solo se quita el `*`."""
    return ("" if value is None else str(value)).replace("*", "")


def format_amount(amount: object, currency_suffix: str) -> str:
    text = "0" if amount is None else str(amount)
    return f"{text} {currency_suffix}".rstrip()


def format_order_date(created_at: datetime | date | None, date_format: str) -> str:
    """Fecha de calendario (la hora del día se descarta)."""
    if created_at is None:
        return "-"
    if isinstance(created_at, datetime):
        created_at = created_at.date()
    return created_at.strftime(date_format)


def format_order_entry(
    index: int, order: Order, *, currency_suffix: str, date_format: str
) -> str:
    lines = [
        f"{index}. {status_glyph(order.status)} *{bold_text(order.order_number)}*",
        f"   Customer: {escape_markdown(order.customer_name)}",
        f"   Product: {escape_markdown(order.product_type)} ({escape_markdown(order.unit)})",
        f"   Quantity: {escape_markdown(order.quantity)}",
        f"   Amount: {escape_markdown(format_amount(order.total_amount, currency_suffix))}",
        f"   Status: {escape_markdown(order.status)}",
        f"   Date: {format_order_date(order.created_at, date_format)}",
    ]
    return "\n".join(lines)


def format_orders_message(
    orders: Iterable[Order], *, currency_suffix: str = "ETB", date_format: str = "%m/%d/%Y"
) -> str:
    """
    Mensaje completo: encabezado + entradas numeradas separadas por línea en blanco.

    El caller garantiza que `orders` no está vacío (el caso vacío tiene su
    propio texto: replies.NO_ORDERS).
    """
    entries = [
        format_order_entry(
            i, order, currency_suffix=currency_suffix, date_format=date_format
        )
        for i, order in enumerate(orders, start=1)
    ]
    return ORDERS_HEADER + "\n\n" + "\n\n".join(entries)
