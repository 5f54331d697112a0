# sales_dashboard/loaders/base.py
import logging
from abc import ABC, abstractmethod

from sales_dashboard.core.models import transaction_from_record

logger = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """The transaction catalog could not be retrieved or decoded."""


class BaseLoader(ABC):
    @abstractmethod
    def load(self, source: str):
        """
        Yield Transaction instances read from source.
        Raise FetchError when source cannot be read at all.
        """
        pass

    def _convert(self, records, source):
        if not isinstance(records, list):
            raise FetchError(f"Expected a list of transactions from {source}, got {type(records).__name__}")
        for position, record in enumerate(records):
            try:
                yield transaction_from_record(record)
            except ValueError as exc:
                # One broken record must not hide the rest of the catalog.
                logger.warning("Skipping record %d from %s: %s", position, source, exc)
