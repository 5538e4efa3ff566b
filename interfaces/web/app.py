from __future__ import annotations

import html
import logging
from typing import Iterable

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from starlette.concurrency import run_in_threadpool

from application.forms import FormError, parse_registration_form, parse_transfer_form
from application.services import list_clients, register_client, transfer_money
from domain.errors import BankError
from domain.repositories import ClientRepository


logger = logging.getLogger(__name__)

TRANSFER_OK = "The transaction was successful"
TRANSFER_REJECTED = "transaction rejected"
REGISTRATION_OK = "Add client successful"
REGISTRATION_REJECTED = "Client not add"

_PAGE = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>{title}</title></head>
<body>
{body}
</body>
</html>
"""

_REGISTRATION_FORM = """<h1>Registration</h1>
<form method="post" action="/registration">
  <label>Name <input type="text" name="name"></label><br>
  <label>Password <input type="password" name="password"></label><br>
  <label>Money <input type="number" name="money" min="0"></label><br>
  <input type="submit" value="Register">
</form>"""

_TRANSFER_FORM = """<h1>Money transfer</h1>
<form method="post" action="/transaction">
  <label>Your name <input type="text" name="senderName"></label><br>
  <label>Your password <input type="password" name="senderPass"></label><br>
  <label>Amount <input type="number" name="count" min="1"></label><br>
  <label>Recipient <input type="text" name="nameTo"></label><br>
  <input type="submit" value="Send">
</form>"""


def _page(title: str, body: str, status_code: int = 200) -> HTMLResponse:
    return HTMLResponse(_PAGE.format(title=html.escape(title), body=body), status_code=status_code)


def _result_page(message: str, status_code: int = 200) -> HTMLResponse:
    return _page("Result", f"<p>{html.escape(message)}</p>", status_code)


def _client_rows(clients: Iterable) -> str:
    return "\n".join(
        f"<tr><td>{html.escape(c.name)}</td><td>{c.balance}</td></tr>" for c in clients
    )


def create_app(client_repo: ClientRepository) -> FastAPI:
    """
    Configure and return the HTTP front end wired to the application layer.

    Only HTTP concerns live here: reading form fields and rendering pages.
    Every failure is shown to the user as the same generic rejection; the
    precise reason is logged.
    """

    app = FastAPI(title="Bank clients", docs_url=None, redoc_url=None)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.get("/registration", response_class=HTMLResponse)
    async def registration_page():
        return _page("Registration", _REGISTRATION_FORM)

    @app.post("/registration", response_class=HTMLResponse)
    async def registration_submit(request: Request):
        data = await request.form()
        try:
            form = parse_registration_form(data)
        except FormError as exc:
            logger.info("Registration form rejected: %s", exc)
            return _result_page(REGISTRATION_REJECTED)

        try:
            result = await run_in_threadpool(
                register_client, form.name, form.password, form.balance, client_repo
            )
        except BankError:
            return _result_page(REGISTRATION_REJECTED, status_code=500)

        return _result_page(REGISTRATION_OK if result.success else REGISTRATION_REJECTED)

    @app.get("/transaction", response_class=HTMLResponse)
    async def transaction_page():
        return _page("Money transfer", _TRANSFER_FORM)

    @app.post("/transaction", response_class=HTMLResponse)
    async def transaction_submit(request: Request):
        data = await request.form()
        try:
            form = parse_transfer_form(data)
        except FormError as exc:
            logger.info("Transfer form rejected: %s", exc)
            return _result_page(TRANSFER_REJECTED)

        try:
            result = await run_in_threadpool(
                transfer_money,
                form.sender_name,
                form.sender_password,
                form.recipient_name,
                form.amount,
                client_repo,
            )
        except BankError:
            return _result_page(TRANSFER_REJECTED, status_code=500)

        return _result_page(TRANSFER_OK if result.success else TRANSFER_REJECTED)

    @app.get("/clients", response_class=HTMLResponse)
    async def clients_page():
        result = await run_in_threadpool(list_clients, client_repo)
        if not result.clients:
            return _page("Clients", "<p>No clients yet.</p>")

        body = (
            "<h1>Clients</h1>\n<table>\n<tr><th>Name</th><th>Balance</th></tr>\n"
            f"{_client_rows(result.clients)}\n</table>\n"
            f"<p>Total balance: {result.total_balance}</p>"
        )
        return _page("Clients", body)

    return app
