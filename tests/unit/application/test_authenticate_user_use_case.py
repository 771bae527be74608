"""
Name: AuthenticateUserUseCase Tests

Responsibilities:
  - Success iff the user is approved and the password verifies
  - Unknown, unapproved and wrong-password cases return typed statuses
  - Database failures map to UNAVAILABLE (no exception escapes)
"""

from dataclasses import replace
from unittest.mock import Mock

import pytest


@pytest.mark.unit
class TestAuthenticateUserUseCase:
    def test_success_returns_principal(self, user_repository, alice_password):
        from salesbot.application.usecases import (
            AuthenticateUserInput,
            AuthenticateUserUseCase,
            AuthStatus,
        )

        result = AuthenticateUserUseCase(user_repository).execute(
            AuthenticateUserInput(username="alice", password=alice_password)
        )

        assert result.ok
        assert result.status is AuthStatus.SUCCESS
        assert result.user.user_id == 7
        assert result.user.display_name == "Alice Tesfaye"
        assert result.user.role == "sales_officer"

    def test_queries_only_approved_users(self, user_repository, alice_password):
        from salesbot.application.usecases import (
            AuthenticateUserInput,
            AuthenticateUserUseCase,
        )

        AuthenticateUserUseCase(user_repository).execute(
            AuthenticateUserInput(username="alice", password=alice_password)
        )

        assert user_repository.calls == [("alice", "approved")]

    def test_wrong_password(self, user_repository):
        from salesbot.application.usecases import (
            AuthenticateUserInput,
            AuthenticateUserUseCase,
            AuthStatus,
        )

        result = AuthenticateUserUseCase(user_repository).execute(
            AuthenticateUserInput(username="alice", password="nope")
        )

        assert not result.ok
        assert result.status is AuthStatus.INVALID_PASSWORD
        assert result.user is None

    def test_unknown_user(self, user_repository):
        from salesbot.application.usecases import (
            AuthenticateUserInput,
            AuthenticateUserUseCase,
            AuthStatus,
        )

        result = AuthenticateUserUseCase(user_repository).execute(
            AuthenticateUserInput(username="bob", password="x")
        )

        assert result.status is AuthStatus.INVALID_CREDENTIALS

    @pytest.mark.parametrize("status", ["pending", "rejected"])
    def test_unapproved_user_is_not_authenticated(
        self, alice, alice_password, user_repository_factory, status
    ):
        from salesbot.application.usecases import (
            AuthenticateUserInput,
            AuthenticateUserUseCase,
            AuthStatus,
        )

        repo = user_repository_factory([replace(alice, status=status)])
        result = AuthenticateUserUseCase(repo).execute(
            AuthenticateUserInput(username="alice", password=alice_password)
        )

        assert result.status is AuthStatus.INVALID_CREDENTIALS

    def test_corrupt_hash_is_a_password_failure(
        self, alice, alice_password, user_repository_factory
    ):
        from salesbot.application.usecases import (
            AuthenticateUserInput,
            AuthenticateUserUseCase,
            AuthStatus,
        )

        repo = user_repository_factory([replace(alice, password_hash="not-a-hash")])
        result = AuthenticateUserUseCase(repo).execute(
            AuthenticateUserInput(username="alice", password=alice_password)
        )

        assert result.status is AuthStatus.INVALID_PASSWORD

    def test_database_error_is_unavailable(self, db_error):
        from salesbot.application.usecases import (
            AuthenticateUserInput,
            AuthenticateUserUseCase,
            AuthStatus,
        )

        repo = Mock()
        repo.get_user_by_username.side_effect = db_error

        result = AuthenticateUserUseCase(repo).execute(
            AuthenticateUserInput(username="alice", password="x")
        )

        assert result.status is AuthStatus.UNAVAILABLE
        assert result.user is None
