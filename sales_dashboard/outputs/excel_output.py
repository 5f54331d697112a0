# sales_dashboard/outputs/excel_output.py

"""Excel output module backed by XlsxWriter.

Each reported month gets its own worksheet holding the month's
transactions, the price-range table with a native column chart drawn from
it, and the sales totals. A ``Summary`` worksheet lists the totals of every
reported month side by side.
"""

from __future__ import annotations

import calendar
import os
import xlsxwriter

from sales_dashboard.outputs.base import BaseOutput


class ExcelOutput(BaseOutput):
    """Generate a local Excel workbook with one chart per month."""

    SUMMARY = "Summary"
    FILENAME = "SalesDashboard.xlsx"
    HEADERS = ["id", "title", "category", "price", "sold", "date_of_sale"]

    def __init__(self, config: dict):
        super().__init__(config)
        self.output_dir = config.get("output_dir", "data")
        os.makedirs(self.output_dir, exist_ok=True)

    def append(self, transactions, month=None):
        snapshot = tuple(transactions)
        reports = list(self._monthly(snapshot, month))
        if not reports:
            print("No transactions to write.")
            return

        out_path = os.path.join(self.output_dir, self.FILENAME)
        workbook = xlsxwriter.Workbook(out_path)
        amount_fmt = workbook.add_format({"num_format": "$#,##0.00"})
        bold = workbook.add_format({"bold": True})

        summary_rows = []
        for m, monthly in reports:
            sheet_name = calendar.month_name[m]
            ws = workbook.add_worksheet(sheet_name)
            ws.freeze_panes(1, 0)
            ws.write_row(0, 0, self.HEADERS)

            month_rows = [tx for tx in snapshot if tx.month == m]
            for row_idx, tx in enumerate(month_rows, start=1):
                ws.write_row(row_idx, 0, [tx.id, tx.title, tx.category])
                if tx.price is not None:
                    ws.write_number(row_idx, 3, float(tx.price), amount_fmt)
                ws.write(row_idx, 4, "Sold" if tx.sold else "Not Sold")
                ws.write(row_idx, 5, tx.date_of_sale.isoformat() if tx.date_of_sale else "")
            ws.set_column(3, 3, None, amount_fmt)
            ws.add_table(0, 0, max(len(month_rows), 1), len(self.HEADERS) - 1, {
                "columns": [{"header": h} for h in self.HEADERS]
            })

            # Price-range table and chart to the right of the transactions
            ws.write_row(0, 8, ["range", "count"], bold)
            for offset, bucket in enumerate(monthly.price_ranges, start=1):
                ws.write(offset, 8, bucket.label)
                ws.write_number(offset, 9, bucket.count)
            self._insert_chart(workbook, ws, len(monthly.price_ranges), sheet_name)

            stats_row = len(monthly.price_ranges) + 2
            summary = monthly.summary
            ws.write(stats_row, 8, "Total Sale", bold)
            ws.write_number(stats_row, 9, float(summary.total_sale), amount_fmt)
            ws.write(stats_row + 1, 8, "Total Items Sold", bold)
            ws.write_number(stats_row + 1, 9, summary.total_sold)
            ws.write(stats_row + 2, 8, "Total Items Not Sold", bold)
            ws.write_number(stats_row + 2, 9, summary.total_not_sold)

            summary_rows.append([sheet_name, float(summary.total_sale), summary.total_sold, summary.total_not_sold])

        summary_ws = workbook.add_worksheet(self.SUMMARY)
        summary_ws.freeze_panes(1, 0)
        summary_ws.write_row(0, 0, ["month", "total_sale", "total_sold", "total_not_sold"])
        for idx, row in enumerate(summary_rows, start=1):
            summary_ws.write(idx, 0, row[0])
            summary_ws.write_number(idx, 1, row[1], amount_fmt)
            summary_ws.write_number(idx, 2, row[2])
            summary_ws.write_number(idx, 3, row[3])
        summary_ws.set_column(1, 1, None, amount_fmt)

        workbook.close()
        print(f"Written Excel workbook {out_path}")

    def _insert_chart(self, workbook, ws, bucket_count, title):
        chart = workbook.add_chart({"type": "column"})
        chart.add_series({
            "categories": [ws.name, 1, 8, bucket_count, 8],
            "values": [ws.name, 1, 9, bucket_count, 9],
            "name": "count",
            "fill": {"color": "#7FDBDA"},
        })
        chart.set_title({"name": f"Price ranges - {title}"})
        chart.set_legend({"position": "bottom"})
        chart.set_y_axis({"min": 0, "major_gridlines": {"visible": True}})
        ws.insert_chart(0, 11, chart, {"x_offset": 0, "y_offset": 0})
