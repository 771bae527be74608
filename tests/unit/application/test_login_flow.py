"""
Name: Login State Machine Tests

Responsibilities:
  - AwaitingUsername -> AwaitingPassword -> credentials submitted
  - No active dialogue when nothing was started or after clear()
"""

import pytest


@pytest.fixture
def flow():
    from salesbot.application.login_flow import LoginStateMachine
    from salesbot.infrastructure.repositories import InMemoryLoginDialogueStore

    return LoginStateMachine(InMemoryLoginDialogueStore())


@pytest.mark.unit
class TestLoginStateMachine:
    def test_no_dialogue_without_begin(self, flow):
        from salesbot.domain.login_dialogue import NoActiveDialogue

        assert flow.state("c1") is None
        assert isinstance(flow.advance("c1", "alice"), NoActiveDialogue)
        assert flow.state("c1") is None

    def test_username_then_password(self, flow):
        from salesbot.domain.login_dialogue import (
            AwaitingPassword,
            CredentialsSubmitted,
            PasswordRequested,
        )

        flow.begin("c1")

        step = flow.advance("c1", "alice")
        assert step == PasswordRequested(username="alice")
        assert flow.state("c1") == AwaitingPassword(username="alice")

        step = flow.advance("c1", "s3cret")
        assert step == CredentialsSubmitted(username="alice", password="s3cret")

    def test_begin_restarts_dialogue(self, flow):
        from salesbot.domain.login_dialogue import AwaitingUsername

        flow.begin("c1")
        flow.advance("c1", "alice")

        flow.begin("c1")

        assert flow.state("c1") == AwaitingUsername()

    def test_clear_ends_dialogue(self, flow):
        from salesbot.domain.login_dialogue import NoActiveDialogue

        flow.begin("c1")
        flow.clear("c1")
        flow.clear("c1")

        assert isinstance(flow.advance("c1", "x"), NoActiveDialogue)

    def test_unknown_state_is_rejected(self):
        from salesbot.application.login_flow import LoginStateMachine
        from salesbot.infrastructure.repositories import InMemoryLoginDialogueStore

        store = InMemoryLoginDialogueStore()
        store.set("c1", object())

        with pytest.raises(TypeError):
            LoginStateMachine(store).advance("c1", "x")
