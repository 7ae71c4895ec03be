"""Mini README: Application root wiring settings, storage and the ledger.

Structure:
    * create_ledger - build the ``FinanceLedger`` the presentation layer owns.

The ledger is an explicit object handed to whichever UI owns it; nothing in
the package keeps a process-wide instance.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from .configuration import BudgetBadgesSettings, get_settings
from .finance import FinanceLedger
from .logging_utils import configure_root_logger, get_logger
from .storage import REGISTRY

LOGGER = get_logger(__name__)


def create_ledger(
    settings: Optional[BudgetBadgesSettings] = None,
    *,
    clock: Optional[Callable[[], datetime]] = None,
) -> FinanceLedger:
    """Create a ledger backed by the storage backend named in the settings."""

    settings = settings or get_settings()
    configure_root_logger(settings.log_level)
    storage = REGISTRY.create(settings.storage_backend, directory=settings.data_directory)
    LOGGER.info(
        "Opening ledger (%s) with storage %s",
        settings.environment,
        storage.metadata(),
    )
    return FinanceLedger(storage, clock=clock)
