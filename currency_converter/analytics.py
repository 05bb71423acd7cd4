"""Read-only dashboard over the conversion log store."""
from __future__ import annotations

from dataclasses import dataclass
from html import escape
from typing import List

from currency_converter.database.log_store import ConversionLogStore
from currency_converter.models import ConversionLogEntry
from currency_converter.utils.errors import PersistenceError, UpstreamError
from currency_converter.utils.logging import get_logger


logger = get_logger(__name__)

LOG_COLUMNS = (
    "Timestamp",
    "User Agent",
    "From",
    "To",
    "Amount",
    "Converted Amount",
    "Response Time (ms)",
)


@dataclass(frozen=True)
class DashboardReport:
    """Summary statistics and the full log listing."""
    total_requests: int
    average_response_time_ms: float
    most_common_from_currency: str
    entries: List[ConversionLogEntry]


class AnalyticsView:
    """Builds dashboard reports; never writes to the store."""

    def __init__(self, store: ConversionLogStore):
        self.store = store

    def build_report(self) -> DashboardReport:
        """Read every statistic and entry, or fail as a whole with UpstreamError."""
        try:
            report = DashboardReport(
                total_requests=self.store.count(),
                average_response_time_ms=self.store.average_response_time(),
                most_common_from_currency=self.store.most_common("from_currency"),
                entries=list(self.store.list_all()),
            )
        except PersistenceError as e:
            logger.error(f"Failed to load conversion logs: {e}")
            raise UpstreamError("Failed to load conversion logs") from e
        return report

    def render(self) -> str:
        return render_dashboard(self.build_report())


def render_dashboard(report: DashboardReport) -> str:
    """Render a report as a standalone HTML document."""
    html = ["<html><head><title>Dashboard</title></head><body>"]
    html.append("<h1>Currency Conversion Dashboard</h1>")

    html.append("<h2>Analytics</h2>")
    html.append("<ul>")
    html.append(f"<li>Total Requests: {report.total_requests}</li>")
    html.append(f"<li>Average Response Time (ms): {report.average_response_time_ms:.2f}</li>")
    html.append(f"<li>Most Common Source Currency: {escape(report.most_common_from_currency)}</li>")
    html.append("</ul>")

    html.append("<h2>Logs</h2>")
    html.append("<table border='1'>")
    html.append("<tr>" + "".join(f"<th>{escape(column)}</th>" for column in LOG_COLUMNS) + "</tr>")
    for entry in report.entries:
        cells = (
            entry.timestamp.isoformat(),
            entry.client_agent or "",
            entry.from_currency,
            entry.to_currency,
            f"{entry.amount}",
            f"{entry.converted_amount}",
            f"{entry.response_time_ms}",
        )
        html.append("<tr>" + "".join(f"<td>{escape(cell)}</td>" for cell in cells) + "</tr>")
    html.append("</table>")

    html.append("</body></html>")
    return "".join(html)
