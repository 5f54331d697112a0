# sales_dashboard/outputs/html_output.py

import calendar
import os
from html import escape

from sales_dashboard.core.aggregation import format_currency
from sales_dashboard.outputs.base import BaseOutput

_CHART_HEIGHT = 240


class HTMLOutput(BaseOutput):
    """Generate a static HTML report: a price-range bar chart and stats per month."""

    FILENAME = 'SalesDashboard.html'

    def __init__(self, config):
        super().__init__(config)
        self.output_dir = config.get('output_dir', 'data')
        os.makedirs(self.output_dir, exist_ok=True)

    def append(self, transactions, month=None):
        reports = list(self._monthly(transactions, month))
        if not reports:
            print("No transactions to write.")
            return

        html_parts = [
            "<html><head><meta charset='UTF-8'>",
            "<style>"
            "body{font-family:sans-serif;background:#1f2937;color:#e5e7eb;}"
            ".chart{display:flex;align-items:flex-end;gap:8px;height:%dpx;border-bottom:1px solid #e5e5e5;margin-bottom:4px;}"
            ".bar{flex:1;background:#7FDBDA;text-align:center;color:#111;font-size:12px;}"
            ".labels{display:flex;gap:8px;margin-bottom:16px;}.labels span{flex:1;text-align:center;font-size:12px;}"
            ".stats{background:#111827;border-radius:8px;padding:12px;width:16rem;margin-bottom:32px;}"
            ".stats div{display:flex;justify-content:space-between;}"
            "</style>" % _CHART_HEIGHT,
            "</head><body>",
            "<h1>Transaction Dashboard</h1>",
        ]

        for m, monthly in reports:
            html_parts.append(f"<h2>Bar Chart Stats - {escape(calendar.month_name[m])}</h2>")
            html_parts.extend(self._chart(monthly.price_ranges))
            summary = monthly.summary
            html_parts.append("<div class='stats'><h3>Sales Stats</h3>")
            html_parts.append(f"<div><span>Total Sale:</span><span>{format_currency(summary.total_sale)}</span></div>")
            html_parts.append(f"<div><span>Total Items Sold:</span><span>{summary.total_sold}</span></div>")
            html_parts.append(f"<div><span>Total Items Not Sold:</span><span>{summary.total_not_sold}</span></div>")
            html_parts.append("</div>")

        html_parts.append("</body></html>")

        out_path = os.path.join(self.output_dir, self.FILENAME)
        with open(out_path, 'w', encoding='utf-8') as f:
            f.write("\n".join(html_parts))

        print(f"Written {len(reports)} month(s) to {out_path}")

    def _chart(self, price_ranges):
        peak = max((bucket.count for bucket in price_ranges), default=0)
        bars = []
        for bucket in price_ranges:
            height = round(_CHART_HEIGHT * bucket.count / peak) if peak else 0
            bars.append(
                f"<div class='bar' style='height:{height}px' title='{escape(bucket.label)}'>{bucket.count}</div>"
            )
        labels = "".join(f"<span>{escape(bucket.label)}</span>" for bucket in price_ranges)
        return ["<div class='chart'>", *bars, "</div>", f"<div class='labels'>{labels}</div>"]
