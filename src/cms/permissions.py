# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from fastapi import Request

from cms.auth.session import Session, flash
from cms.config import env_flag
from cms.core.errors import AuthRequired

SIGNED_IN_REQUIRED_MESSAGE = "You must be signed in to do that."


def current_session(request: Request) -> Session:
    session = getattr(request.state, "session", None)
    if session is None:
        session = Session()
        request.state.session = session
    return session


def require_signed_in(request: Request) -> str:
    """Gate a route on a signed-in session; runs before the handler body."""
    session = current_session(request)
    if session.signed_in:
        return session.username
    flash(session, SIGNED_IN_REQUIRED_MESSAGE)
    raise AuthRequired(SIGNED_IN_REQUIRED_MESSAGE, redirect_to="/")


def cookie_settings() -> dict:
    secure = env_flag("CMS_COOKIE_SECURE")
    return {"httponly": True, "samesite": "lax", "secure": secure}
