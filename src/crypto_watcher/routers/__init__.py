"""API routers.

Includes routes for:
- /health - Liveness and uptime
- /accounts - Exchange accounts: transactions, positions, open orders (ccxt)
- /watchers - Price alert watchers (in-memory) and their current spot price
"""
from crypto_watcher.routers.accounts import router as accounts_router
from crypto_watcher.routers.health import router as health_router
from crypto_watcher.routers.watchers import router as watchers_router

__all__ = [
    "accounts_router",
    "health_router",
    "watchers_router",
]
