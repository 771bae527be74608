"""
===============================================================================
TARJETA CRC — identity/passwords.py
===============================================================================

Módulo:
    Hash/verificación de passwords

Responsabilidades:
    - Verificar un password en texto plano contra el hash almacenado.
    - Soportar los hashes bcrypt que escribe el back office ($2a$/$2b$/$2y$).
    - Soportar hashes Argon2 ($argon2...) y generarlos para seeds/tests.

Colaboradores:
    - argon2.PasswordHasher
    - bcrypt.checkpw
    - application/usecases/authenticate_user.py

Decisiones de diseño:
    - La comparación la hace la primitiva de hashing (tiempo constante).
    - Hash con formato desconocido => False (nunca excepción hacia arriba).
    - No loguear passwords ni hashes.
===============================================================================
"""

from __future__ import annotations

import bcrypt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

_BCRYPT_PREFIXES: tuple[str, ...] = ("$2a$", "$2b$", "$2y$")
_ARGON2_PREFIX: str = "$argon2"
# R: bcrypt solo mira los primeros 72 bytes; bcrypt>=5 rechaza entradas más largas.
_BCRYPT_MAX_BYTES = 72

_password_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    """Hashea un password usando Argon2."""
    return _password_hasher.hash(password)


def _verify_bcrypt(password: str, password_hash: str) -> bool:
    try:
        secret = password.encode("utf-8")[:_BCRYPT_MAX_BYTES]
        return bcrypt.checkpw(secret, password_hash.encode("utf-8"))
    except ValueError:
        # R: salt inválido / hash corrupto.
        return False


def _verify_argon2(password: str, password_hash: str) -> bool:
    try:
        return _password_hasher.verify(password_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


def verify_password(password: str, password_hash: str | None) -> bool:
    """Verifica password vs hash almacenado."""
    if not password_hash or password is None:
        return False

    if password_hash.startswith(_BCRYPT_PREFIXES):
        return _verify_bcrypt(password, password_hash)
    if password_hash.startswith(_ARGON2_PREFIX):
        return _verify_argon2(password, password_hash)
    return False
