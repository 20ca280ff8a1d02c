# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI, Form, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from cms.auth.session import flash, load_session, pop_message, sign_in, sign_out, sign_session
from cms.auth.users import load_users, verify
from cms.config import cookie_name, data_path, session_max_age, users_path
from cms.core.errors import AuthRequired, DocumentNameError, StorageError, UnsupportedDocumentType
from cms.infra.document_repo import DocumentStore, FileDocumentStore
from cms.permissions import cookie_settings, current_session, require_signed_in
from cms.services.document_service import create_document, delete_document, update_document
from cms.services.render_service import DocumentKind, render_document

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent

INVALID_CREDENTIALS_MESSAGE = "Invalid Credentials"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Credentials are required to serve sign-ins; a bad file aborts startup.
    users = load_users(users_path())
    logger.info("Loaded %d user(s) from %s", len(users), users_path())
    store = get_store_for_app(app)
    if isinstance(store, FileDocumentStore):
        store.ensure()
        logger.info("Serving documents from %s", store.root)
    yield


app = FastAPI(lifespan=lifespan)

app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))


def get_store_for_app(application: FastAPI) -> DocumentStore:
    store = getattr(application.state, "store", None)
    if store is None:
        store = FileDocumentStore(data_path())
    return store


def get_store(request: Request) -> DocumentStore:
    return get_store_for_app(request.app)


@app.middleware("http")
async def _session_middleware(request: Request, call_next):
    session = load_session(request.cookies.get(cookie_name(), ""))
    request.state.session = session
    # Listing snapshot: taken once, before routing, and used for every
    # existence check made while handling this request.
    request.state.files = get_store(request).list()

    response = await call_next(request)

    if session.modified:
        response.set_cookie(
            cookie_name(),
            sign_session(session),
            max_age=session_max_age(),
            **cookie_settings(),
        )
    return response


@app.exception_handler(AuthRequired)
async def _auth_required(request: Request, exc: AuthRequired):
    logger.info("Blocked %s %s: not signed in", request.method, request.url.path)
    return RedirectResponse(url=exc.redirect_to, status_code=302)


@app.exception_handler(StorageError)
@app.exception_handler(UnsupportedDocumentType)
async def _server_error(request: Request, exc: Exception):
    logger.error("Failed %s %s", request.method, request.url.path, exc_info=exc)
    return PlainTextResponse("Internal Server Error", status_code=500)


def _render(request: Request, template_name: str, ctx: dict, status_code: int = 200):
    """TemplateResponse wrapper: injects the signed-in user and consumes the flash message."""
    session = current_session(request)
    base_ctx = {
        "current_user": session.username,
        "message": pop_message(session),
    }
    merged = {**base_ctx, **(ctx or {})}
    return templates.TemplateResponse(request, template_name, merged, status_code=status_code)


def _redirect_home() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=302)


# ------------------ Routes ------------------


@app.get("/", response_class=HTMLResponse)
def home(request: Request):
    session = current_session(request)
    files = request.state.files
    if session.signed_in:
        return _render(request, "index.html", {"files": files, "editable": True, "username": session.username})
    return _render(request, "signed_out.html", {"files": files, "editable": False})


@app.get("/users/signin", response_class=HTMLResponse)
def signin_get(request: Request):
    if current_session(request).signed_in:
        return _redirect_home()
    return _render(request, "signin.html", {"username": ""})


@app.post("/users/signin")
def signin_post(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
):
    session = current_session(request)
    user = verify(username, password, path=users_path())
    if not user:
        logger.warning("Failed sign-in for %r", username)
        flash(session, INVALID_CREDENTIALS_MESSAGE)
        return _render(request, "signin.html", {"username": username}, status_code=422)
    sign_in(session, user)
    logger.info("User %s signed in", user)
    return _redirect_home()


@app.post("/users/signout")
def signout_post(request: Request):
    session = current_session(request)
    username = session.username
    sign_out(session)
    if username:
        logger.info("User %s signed out", username)
    return _redirect_home()


@app.get("/new", response_class=HTMLResponse)
def new_get(request: Request, user: str = Depends(require_signed_in)):
    return _render(request, "new.html", {"filename": ""})


@app.post("/new")
def new_post(
    request: Request,
    user: str = Depends(require_signed_in),
    filename: str = Form(""),
    store: DocumentStore = Depends(get_store),
):
    session = current_session(request)
    try:
        create_document(store, filename)
    except DocumentNameError as e:
        flash(session, e.message)
        return _render(request, "new.html", {"filename": filename}, status_code=422)
    flash(session, f"{filename} was created.")
    return _redirect_home()


@app.get("/{filename}")
def view_document(request: Request, filename: str, store: DocumentStore = Depends(get_store)):
    if not store.exists(filename, request.state.files):
        flash(current_session(request), f"{filename} does not exist.")
        return _redirect_home()

    content = render_document(filename, store.read(filename))
    if content.kind is DocumentKind.PLAIN_TEXT:
        return Response(content=content.body, media_type=content.media_type)
    return _render(request, "document.html", {"filename": filename, "html": content.body})


@app.get("/{filename}/edit", response_class=HTMLResponse)
def edit_get(
    request: Request,
    filename: str,
    user: str = Depends(require_signed_in),
    store: DocumentStore = Depends(get_store),
):
    contents = store.read(filename).decode("utf-8", errors="replace")
    return _render(request, "edit_file.html", {"filename": filename, "contents": contents})


@app.post("/{filename}/edit")
def edit_post(
    request: Request,
    filename: str,
    user: str = Depends(require_signed_in),
    contents: str = Form(""),
    store: DocumentStore = Depends(get_store),
):
    update_document(store, filename, contents)
    flash(current_session(request), f"{filename} has been updated.")
    return _redirect_home()


@app.post("/{filename}/delete")
def delete_post(
    request: Request,
    filename: str,
    user: str = Depends(require_signed_in),
    store: DocumentStore = Depends(get_store),
):
    delete_document(store, filename)
    flash(current_session(request), f"{filename} has been deleted.")
    return _redirect_home()
