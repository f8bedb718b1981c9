"""API Dependencies — hands the composed Services to routes.

Works for both HTTP requests and WebSockets (HTTPConnection is their common base).
admin_pin reads X-Pin-Code; a missing, non-numeric or out-of-range value is
401 before any lookup happens.
"""

from fastapi import Header
from starlette.requests import HTTPConnection

from chorehub.core.errors import UnauthorizedError
from chorehub.schemas.household import PIN_MAX
from chorehub.services.composition import Services


def get_services(connection: HTTPConnection) -> Services:
    return connection.app.state.services


def admin_pin(x_pin_code: str | None = Header(None)) -> int:
    if x_pin_code is None or not x_pin_code.strip().isdigit():
        raise UnauthorizedError()
    pin = int(x_pin_code.strip())
    if pin > PIN_MAX:
        raise UnauthorizedError()
    return pin
