from __future__ import annotations

import logging
import threading
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Dict, Optional, Tuple

from sales_dashboard.core.models import Transaction
from sales_dashboard.loaders import BaseLoader, FetchError
from sales_dashboard.utils import dedupe_transactions

logger = logging.getLogger(__name__)


@dataclass
class FetchStatus:
    status: str
    timestamp: str
    count: int
    error: Optional[str] = None


class DataProvider:
    """Owns the fetched catalog together with its loading and error state.

    The catalog is fetched once; readers always get a complete tuple, swapped
    in when a fetch finishes. A failed fetch leaves an empty catalog behind.
    """

    def __init__(self, loader: BaseLoader, source: str) -> None:
        self.loader = loader
        self.source = source
        self._lock = threading.Lock()
        self._transactions: Tuple[Transaction, ...] = ()
        self._last_status: Optional[FetchStatus] = None

    @property
    def is_loading(self) -> bool:
        return self._lock.locked()

    @property
    def transactions(self) -> Tuple[Transaction, ...]:
        return self._transactions

    @property
    def last_status(self) -> Optional[FetchStatus]:
        return self._last_status

    @property
    def error(self) -> Optional[str]:
        return self._last_status.error if self._last_status else None

    def load(self) -> FetchStatus:
        if not self._lock.acquire(blocking=False):
            raise RuntimeError("Transaction fetch already in progress")

        try:
            timestamp = datetime.now(timezone.utc).isoformat()
            try:
                fetched = dedupe_transactions(self.loader.load(self.source))
            except FetchError as exc:
                logger.error("Fetch error: %s", exc)
                self._transactions = ()
                status = FetchStatus(status="failure", timestamp=timestamp, count=0, error=str(exc))
            except Exception as exc:
                logger.exception("Unexpected error while loading %s", self.source)
                self._transactions = ()
                status = FetchStatus(
                    status="failure", timestamp=timestamp, count=0,
                    error=f"Failed to fetch transactions: {exc}",
                )
            else:
                self._transactions = tuple(fetched)
                logger.info("Loaded %d transaction(s) from %s", len(fetched), self.source)
                status = FetchStatus(status="success", timestamp=timestamp, count=len(fetched))
            self._last_status = status
            return status
        finally:
            self._lock.release()

    def ensure_loaded(self) -> Optional[FetchStatus]:
        """Fetch unless a fetch already happened or is running right now."""
        if self._last_status is not None or self.is_loading:
            return self._last_status
        try:
            return self.load()
        except RuntimeError:
            # another request started the fetch between the check and the lock
            return self._last_status

    def status_payload(self) -> Dict[str, object]:
        return {
            "loading": self.is_loading,
            "source": self.source,
            "last_fetch": asdict(self._last_status) if self._last_status else None,
        }
