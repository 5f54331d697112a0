# sales_dashboard/outputs/base.py
from abc import ABC, abstractmethod

from sales_dashboard.core.aggregation import DEFAULT_PRICE_THRESHOLDS, aggregate


class BaseOutput(ABC):
    def __init__(self, config):
        self.config = config
        self.thresholds = config.get('price_thresholds', DEFAULT_PRICE_THRESHOLDS)

    @abstractmethod
    def append(self, transactions, month=None):
        """Write the month report (or one per month present) to the chosen sink."""
        pass

    def _report_months(self, transactions, month):
        if month is not None:
            return [month]
        return sorted({tx.month for tx in transactions if tx.month is not None})

    def _monthly(self, transactions, month):
        """Yield (month, MonthlyAggregate) for every month the report covers."""
        snapshot = tuple(transactions)
        for m in self._report_months(snapshot, month):
            yield m, aggregate(snapshot, m, self.thresholds)
