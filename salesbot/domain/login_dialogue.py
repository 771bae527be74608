"""
CRC — domain/login_dialogue.py

Name
- Login Dialogue State (tagged variant)

Responsibilities
- Model the login sub-protocol step of one conversation as an explicit variant:
    AwaitingUsername  -> AwaitingPassword(username) -> (removed)
- Keep transitions pure so the state machine can be tested without I/O.

Collaborators
- application.login_flow.LoginStateMachine (owns the per-conversation map)

Notes
- There is no "terminal" variant: finishing the dialogue removes the state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True, slots=True)
class AwaitingUsername:
    """Dialogue started by /start; next text is the username."""


@dataclass(frozen=True, slots=True)
class AwaitingPassword:
    """Username captured; next text is the password."""

    username: str


LoginDialogueState = Union[AwaitingUsername, AwaitingPassword]


@dataclass(frozen=True, slots=True)
class PasswordRequested:
    """Outcome: username stored, ask for the password."""

    username: str


@dataclass(frozen=True, slots=True)
class CredentialsSubmitted:
    """Outcome: both steps done, authentication must run."""

    username: str
    password: str


@dataclass(frozen=True, slots=True)
class NoActiveDialogue:
    """Outcome: free text without a dialogue in progress."""


LoginStep = Union[PasswordRequested, CredentialsSubmitted, NoActiveDialogue]
