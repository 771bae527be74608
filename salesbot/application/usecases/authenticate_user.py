"""
===============================================================================
USE CASE: Authenticate User (login por chat)
===============================================================================

Business Goal:
    Validar las credenciales que un sales officer envía por chat contra los
    usuarios del back office, para abrir una sesión en esa conversación.

Security:
    - Solo usuarios con status "approved" son elegibles (filtro en la query).
    - La comparación del password la hace la primitiva de hashing.
    - Sin reintentos: una falla de DB se reporta como UNAVAILABLE.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    AuthenticateUserUseCase

Responsibilities:
    - Buscar un único usuario por username exacto + status approved.
    - Verificar el password contra el hash almacenado.
    - Devolver AuthenticateUserResult (status + principal si hubo éxito).

Collaborators:
    - UserRepository.get_user_by_username(username, status=...)
    - identity.passwords.verify_password

-------------------------------------------------------------------------------
INPUTS / OUTPUTS
-------------------------------------------------------------------------------
Inputs:
    AuthenticateUserInput:
      - username: str
      - password: str

Outputs:
    AuthenticateUserResult:
      - status: AuthStatus
      - user: AuthenticatedUser | None

Error Mapping:
    - INVALID_CREDENTIALS: no existe usuario aprobado con ese username
    - INVALID_PASSWORD:    el hash no verifica
    - UNAVAILABLE:         DatabaseError al consultar
===============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from ...crosscutting.exceptions import DatabaseError
from ...domain.entities import AuthenticatedUser
from ...domain.repositories import UserRepository
from ...identity.passwords import verify_password
from ...identity.users import UserStatus

logger = logging.getLogger(__name__)


class AuthStatus(str, Enum):
    SUCCESS = "success"
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID_PASSWORD = "invalid_password"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class AuthenticateUserInput:
    """DTO de entrada: credenciales tal como llegaron por chat."""

    username: str
    password: str


@dataclass(frozen=True)
class AuthenticateUserResult:
    """DTO de salida: status tipado + principal si hubo éxito."""

    status: AuthStatus
    user: AuthenticatedUser | None = None

    @property
    def ok(self) -> bool:
        return self.status is AuthStatus.SUCCESS


class AuthenticateUserUseCase:
    """
    Use Case (Application Service / Query):
        Valida credenciales. No toca el Session Store (eso lo hace el caller).
    """

    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, input_data: AuthenticateUserInput) -> AuthenticateUserResult:
        try:
            user = self._users.get_user_by_username(
                input_data.username, status=UserStatus.APPROVED.value
            )
        except DatabaseError as exc:
            logger.error(
                "Authentication unavailable. error_id=%s", exc.error_id
            )
            return AuthenticateUserResult(status=AuthStatus.UNAVAILABLE)

        if user is None:
            logger.info("Authentication failed: unknown or unapproved username")
            return AuthenticateUserResult(status=AuthStatus.INVALID_CREDENTIALS)

        if not verify_password(input_data.password, user.password_hash):
            logger.info("Authentication failed: password mismatch. user_id=%s", user.id)
            return AuthenticateUserResult(status=AuthStatus.INVALID_PASSWORD)

        logger.info("Authentication succeeded. user_id=%s role=%s", user.id, user.role)
        return AuthenticateUserResult(
            status=AuthStatus.SUCCESS,
            user=AuthenticatedUser(
                user_id=user.id,
                display_name=user.display_name,
                role=user.role,
            ),
        )
