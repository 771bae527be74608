"""
===============================================================================
TARJETA CRC — identity/users.py
===============================================================================

Módulo:
    Modelos de Usuario (login por chat)

Responsabilidades:
    - Definir el estado de aprobación de usuarios (solo APPROVED autentica).
    - Definir el dataclass User que mapea la tabla `users` del back office.
    - Exponer el nombre para mostrar usado en el saludo post-login.

Colaboradores:
    - infrastructure/repositories/postgres/user.py: mapea filas -> User.
    - application/usecases/authenticate_user.py: valida credenciales.

Notas:
    - Este módulo NO contiene lógica de negocio: solo "shapes" de datos.
    - El id es opaco (int o str según el esquema del back office).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

UserId = Union[int, str]


class UserStatus(str, Enum):
    """Estados de aprobación del back office."""

    APPROVED = "approved"
    PENDING = "pending"
    REJECTED = "rejected"


@dataclass(frozen=True, slots=True)
class User:
    """Registro de usuario (solo lectura desde el bot)."""

    id: UserId
    username: str
    password_hash: str
    status: str
    first_name: str
    last_name: str
    role: str

    @property
    def display_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p).strip()
