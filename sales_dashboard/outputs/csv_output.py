# sales_dashboard/outputs/csv_output.py

import os
import csv
import calendar
from decimal import Decimal
from sales_dashboard.outputs.base import BaseOutput


class CSVOutput(BaseOutput):
    """
    Writes the price-range histogram to PriceRanges.csv and the sales totals
    to SalesStats.csv, one block of rows per reported month.
    """
    RANGES_FILE = 'PriceRanges.csv'
    STATS_FILE = 'SalesStats.csv'

    def __init__(self, config):
        super().__init__(config)
        self.output_dir = config.get('output_dir', 'data')
        os.makedirs(self.output_dir, exist_ok=True)

    def append(self, transactions, month=None):
        reports = list(self._monthly(transactions, month))
        if not reports:
            print("No transactions to write.")
            return

        ranges_path = os.path.join(self.output_dir, self.RANGES_FILE)
        with open(ranges_path, 'w', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(['month', 'range', 'count'])
            for m, monthly in reports:
                for bucket in monthly.price_ranges:
                    writer.writerow([calendar.month_name[m], bucket.label, bucket.count])

        stats_path = os.path.join(self.output_dir, self.STATS_FILE)
        with open(stats_path, 'w', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(['month', 'total_sale', 'total_sold', 'total_not_sold'])
            for m, monthly in reports:
                summary = monthly.summary
                writer.writerow([
                    calendar.month_name[m],
                    f"{summary.total_sale.quantize(Decimal('0.01'))}",
                    summary.total_sold,
                    summary.total_not_sold,
                ])

        print(f"Written {len(reports)} month(s) to {ranges_path} and {stats_path}")
