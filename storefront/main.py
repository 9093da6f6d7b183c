"""
STOREFRONT APP
==============
FastAPI application with the customer-area gate in front of its pages.
"""

# FLOW:
# - SessionMiddleware (outermost) loads request.session.
# - CustomerAreaGateMiddleware guards the customer area.
# - Landing pages report whether an auth_error marker reached them.

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from starlette.middleware.sessions import SessionMiddleware

from gatekeeper.error_handling import register_error_handlers
from gatekeeper.gate_config import GATE_SETTINGS
from gatekeeper.gate_middleware import CustomerAreaGateMiddleware


def _auth_error(request: Request) -> dict:
    flag_name = GATE_SETTINGS["GATE_AUTH_ERROR_PARAM"]
    session = request.scope.get("session") or {}
    return {
        "query": request.query_params.get(flag_name) == "true",
        # one-shot marker, consumed by the page that shows it
        "session": session.pop(flag_name, None) == "true",
    }


def register_storefront_routes(app: FastAPI) -> None:
    @app.get("/")
    def root_redirect():
        return RedirectResponse("/login", status_code=303)

    @app.get("/login")
    def login_page(request: Request):
        return {"page": "login", "auth_error": _auth_error(request)}

    @app.get("/customer/{page:path}")
    def customer_page(page: str):
        return {"page": f"customer/{page}"}

    @app.get("/shoppingCart")
    def shopping_cart():
        return {"page": "shoppingCart"}

    @app.get("/WishlistController")
    def wishlist():
        return {"page": "wishlist"}

    @app.get("/orders")
    def orders(request: Request):
        return {"page": "orders", "auth_error": _auth_error(request)}

    # manager/admin redirects mark the request only, so these report false after a gate redirect
    @app.get("/manager/home")
    def manager_home(request: Request):
        return {"page": "manager/home", "auth_error": _auth_error(request)}

    @app.get("/admin/accounts")
    def admin_accounts(request: Request):
        return {"page": "admin/accounts", "auth_error": _auth_error(request)}


def create_app() -> FastAPI:
    app = FastAPI()
    # add_middleware wraps: the last one added runs first
    app.add_middleware(CustomerAreaGateMiddleware)
    app.add_middleware(SessionMiddleware, secret_key=GATE_SETTINGS["SESSION_SECRET_KEY"])
    register_storefront_routes(app)
    register_error_handlers(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("storefront.main:app", host="127.0.0.1", port=8000)
