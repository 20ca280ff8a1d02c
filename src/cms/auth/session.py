# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from itsdangerous import BadSignature, BadTimeSignature, URLSafeTimedSerializer

from cms.config import secret_key, session_max_age, session_salt

WELCOME_MESSAGE = "Welcome!"
SIGNED_OUT_MESSAGE = "You have been signed out."


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(secret_key=secret_key(), salt=session_salt())


@dataclass
class Session:
    """Per-browser state: the signed-in username and a one-shot flash message."""

    username: Optional[str] = None
    message: Optional[str] = None
    modified: bool = field(default=False, compare=False)

    @property
    def signed_in(self) -> bool:
        return bool(self.username)


def sign_session(session: Session) -> str:
    return _serializer().dumps({"u": session.username, "m": session.message})


def load_session(token: str, *, max_age: Optional[int] = None) -> Session:
    if not token:
        return Session()
    try:
        data = _serializer().loads(token, max_age=max_age or session_max_age())
    except (BadSignature, BadTimeSignature):
        return Session()
    if not isinstance(data, dict):
        return Session()
    username = str(data.get("u") or "").strip() or None
    message = data.get("m") or None
    return Session(username=username, message=message)


def flash(session: Session, message: str) -> None:
    session.message = message
    session.modified = True


def pop_message(session: Session) -> Optional[str]:
    message = session.message
    if message is not None:
        session.message = None
        session.modified = True
    return message


def sign_in(session: Session, username: str) -> None:
    session.username = username
    flash(session, WELCOME_MESSAGE)


def sign_out(session: Session) -> None:
    session.username = None
    flash(session, SIGNED_OUT_MESSAGE)
