# storefront/api/__init__.py
from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from storefront.api.routers import admin, cart, health, orders, products, seller, users
from storefront.utils.settings import SECRET_KEY, SESSION_MAX_AGE


def create_app(lifespan=None) -> FastAPI:
    app = FastAPI(
        title="Storefront",
        version="1.0.0",
        lifespan=lifespan,
    )

    # signed cookie session, holds the visitor id and the logged in user; carts live in session_carts
    app.add_middleware(
        SessionMiddleware,
        secret_key=SECRET_KEY,
        max_age=SESSION_MAX_AGE,
        same_site="lax",
        https_only=False,
    )

    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(products.router)
    app.include_router(cart.router)
    app.include_router(orders.router)
    app.include_router(seller.router)
    app.include_router(admin.router)

    return app
