# app/api/__init__.py
from app.api.routers import health, products, carts, orders, events

ROUTERS = [
    health.router,
    products.router,
    carts.router,
    orders.router,
    events.router,
]
