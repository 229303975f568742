"""StockDash: simulated stock prices pushed to subscribed browser sessions.

Public API:
    Settings          - Environment-driven configuration
    DashboardService  - Owner of sessions, prices, streams and the tick loop
    create_app        - FastAPI application factory
"""

from .config import Settings
from .main import create_app
from .service import DashboardService

__all__ = ["DashboardService", "Settings", "create_app"]

__version__ = "0.1.0"
