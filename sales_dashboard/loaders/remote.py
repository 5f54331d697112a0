# sales_dashboard/loaders/remote.py
import json
import logging
import urllib.error
import urllib.request
from decimal import Decimal

from sales_dashboard.loaders.base import BaseLoader, FetchError

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT = 30


class RemoteJSONLoader(BaseLoader):
    """Fetch the whole catalog with a single GET of a JSON array."""

    def __init__(self, config=None):
        config = config or {}
        self.timeout = float(config.get('timeout', _DEFAULT_TIMEOUT))

    def _get(self, url):
        logger.info("Fetching transactions from %s", url)
        req = urllib.request.Request(url, method="GET")
        req.add_header("Accept", "application/json")
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                payload = resp.read()
        except urllib.error.HTTPError as exc:
            raise FetchError(f"HTTP error! status: {exc.code}") from exc
        except (urllib.error.URLError, TimeoutError, OSError) as exc:
            reason = getattr(exc, "reason", exc)
            raise FetchError(f"Failed to fetch transactions: {reason}") from exc
        try:
            raw = payload.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise FetchError(f"Invalid JSON from {url}: response is not UTF-8 text") from exc
        logger.debug("Received %d bytes from %s", len(raw), url)
        return raw

    def load(self, source):
        raw = self._get(source)
        try:
            records = json.loads(raw, parse_float=Decimal)
        except json.JSONDecodeError as exc:
            raise FetchError(f"Invalid JSON from {source}: {exc}") from exc
        yield from self._convert(records, source)
