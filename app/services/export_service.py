import csv
import io
import logging

from app.utils.months import month_end, month_start

logger = logging.getLogger(__name__)

CSV_HEADER = ["Date", "Amount", "Category", "Description", "Payment Method"]


class ExportService:
    """Renders a month of expenses for download"""

    def __init__(self, record_source):
        self.record_source = record_source

    def export_month_to_csv(self, month: str) -> str:
        expenses = self.record_source.fetch_by_date_range(month_start(month), month_end(month))
        names = {category.id: category.name for category in self.record_source.list_categories()}

        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")
        writer.writerow(CSV_HEADER)

        for expense in expenses:
            writer.writerow([
                expense.date.isoformat(),
                f"{expense.amount:.2f}",
                names.get(expense.category, expense.category),
                expense.description,
                expense.payment_method,
            ])

        logger.info(f"Exported {len(expenses)} expenses for {month} as CSV")
        return output.getvalue()
