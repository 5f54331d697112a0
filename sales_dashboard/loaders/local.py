# sales_dashboard/loaders/local.py
import json
import logging
from decimal import Decimal
from pathlib import Path

import pandas as pd

from sales_dashboard.loaders.base import BaseLoader, FetchError

logger = logging.getLogger(__name__)


class FileLoader(BaseLoader):
    """Read a saved catalog: the JSON array as served, or a CSV export of it."""

    def __init__(self, config=None):
        self.config = config or {}

    def load(self, source):
        path = Path(source)
        if not path.is_file():
            raise FetchError(f"Transactions file not found: {source}")
        logger.info("Reading transactions from %s", path)

        if path.suffix.lower() == '.csv':
            records = self._read_csv(path)
        else:
            try:
                with path.open('r', encoding='utf-8') as f:
                    records = json.load(f, parse_float=Decimal)
            except (UnicodeDecodeError, json.JSONDecodeError) as exc:
                raise FetchError(f"Invalid JSON in {source}: {exc}") from exc

        yield from self._convert(records, source)

    def _read_csv(self, path):
        # Keep every column as text; conversion happens per record.
        try:
            df = pd.read_csv(path, dtype=str, keep_default_na=False)
        except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as exc:
            raise FetchError(f"Invalid CSV in {path}: {exc}") from exc
        missing = {'id', 'price', 'dateOfSale'} - set(df.columns)
        if missing:
            raise FetchError(f"Missing required column(s) {sorted(missing)} in {path}")
        return df.to_dict(orient='records')
