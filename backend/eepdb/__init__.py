# backend/eepdb/__init__.py
"""
Import ORM models from each app so that:

- Alembic and Base.metadata.create_all() see all tables.
- String relationships ("Part", "User") resolve whichever module loads first.

The actual model classes are kept in eepdb/apps/*/models.py.
"""

from .apps.accounts import models as accounts_models            # users
from .apps.inventory import models as inventory_models          # parts + stock ledger
from .apps.orders import models as orders_models                # part orders
from .apps.notifications import models as notifications_models  # stock / risk alerts

__all__ = [
    "accounts_models",
    "inventory_models",
    "orders_models",
    "notifications_models",
]
