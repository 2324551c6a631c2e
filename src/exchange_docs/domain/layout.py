"""Page layout for receipts and financial reports.

The engine walks a fixed sequence of page regions and records drawing
operations into a ``PageSet``; it never touches a PDF library directly.

Financial report regions, top to bottom:
    1. Header (company block, optional logo; modern banner or classic text)
    2. Title and period
    3. Summary (four metric cards, or one bordered block)
    4. Transaction table (paginated grid, or manual rows capped at 20)
    5. Comparison with the previous period (only with prior aggregates)
    6. Footer on every page

Receipt regions: header with receipt badge, client block, two detail boxes,
summary box, terms, footer.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from ..exceptions import RenderError
from ..ports.images import LogoLoaderPort
from .formatting import (
    format_amount,
    format_currency,
    format_date,
    format_percentage,
    format_rate,
    parse_date,
)
from .models import (
    CompanyInfo,
    DocumentKind,
    GenerationOptions,
    LogoImage,
    MetricComparison,
    PeriodSummary,
    ReceiptRequest,
    ReportRequest,
    TransactionRecord,
)
from .pages import (
    A4_WIDTH,
    DocumentInfo,
    ImageOp,
    LineOp,
    Page,
    PageSet,
    RectOp,
    TableOp,
    TextOp,
)
from .summary import compare_periods, summarize

logger = logging.getLogger(__name__)

PRIMARY = (59, 130, 246)
SECONDARY = (16, 185, 129)
ACCENT = (139, 92, 246)
LIGHT_BLUE = (239, 246, 255)
LIGHT_GRAY = (245, 247, 250)
BORDER = (220, 220, 220)
TEXT = (60, 60, 60)
MUTED = (100, 100, 100)
FAINT = (150, 150, 150)
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)

MARGIN_X = 15.0
CONTENT_WIDTH = 180.0
CENTER_X = A4_WIDTH / 2
BANNER_HEIGHT = 42.0
LOGO_WIDTH = 30.0
PAGE_BOTTOM = 280.0  # rows must end above this line
FOOTER_Y = 287.0
CONTINUATION_TOP = 20.0
ROW_HEIGHT = 8.0
TABLE_TOP = 110.0

MANUAL_TABLE_MAX_ROWS = 20
TABLE_COL_WIDTHS = (25.0, 40.0, 20.0, 25.0, 20.0, 25.0, 25.0)
COMPARISON_COL_WIDTHS = (48.0, 33.0, 33.0, 33.0, 33.0)

CURRENCY_NAMES = {
    "EUR": "Euros",
    "VES": "Bolívares",
    "USD": "Dólares",
    "GBP": "Libras",
}

TERMS = (
    "Este recibo es un comprobante de la transacción realizada. La empresa no se hace responsable",
    "por información incorrecta proporcionada por el cliente.",
    "Para cualquier consulta relacionada con esta transacción, por favor contacte a nuestro",
    "servicio de atención al cliente mencionando el número de recibo.",
)


def _fit(text: str, width: float, font_size: float = 8) -> str:
    """Truncate text to roughly fit a column of the given width (mm)."""
    max_chars = max(int(width / (font_size * 0.19)), 4)
    if len(text) <= max_chars:
        return text
    return text[: max_chars - 3] + "..."


def _signed(text: str, value: float) -> str:
    return f"+{text}" if value > 0 else text


class LayoutEngine:
    """Lays out documents as renderer-independent page sets."""

    def __init__(
        self,
        logo_loader: LogoLoaderPort | None = None,
        table_support: bool = True,
        received_currency: str = "EUR",
        delivered_currency: str = "VES",
        locale: str = "es-ES",
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.logo_loader = logo_loader
        self.table_support = table_support
        self.received_currency = received_currency
        self.delivered_currency = delivered_currency
        self.locale = locale
        self.clock = clock

    def layout(
        self,
        kind: DocumentKind | str,
        data: ReportRequest | ReceiptRequest,
        options: GenerationOptions | None = None,
    ) -> PageSet:
        """Lay out a document. Raises RenderError on any drawing failure."""
        options = options or GenerationOptions()
        try:
            kind = DocumentKind(kind)
            if kind == DocumentKind.RECEIPT:
                return self._layout_receipt(data, options)
            return self._layout_report(data, options)
        except RenderError:
            raise
        except Exception as e:
            raise RenderError(f"Failed to lay out {kind}: {e}") from e

    def layout_summary(self, document: dict[str, Any]) -> PageSet:
        """Minimal single-page rendering of a structured summary."""
        try:
            return self._layout_summary(document)
        except Exception as e:
            raise RenderError(f"Failed to lay out summary: {e}") from e

    # Formatting helpers

    def _money(self, amount: float, currency: str) -> str:
        return format_currency(amount, currency, self.locale)

    def _rate(self, rate: float) -> str:
        return format_rate(rate, self.received_currency, self.delivered_currency)

    def _currency_name(self, currency: str) -> str:
        return CURRENCY_NAMES.get(currency, currency)

    # Shared regions

    def _load_logo(self, company: CompanyInfo) -> LogoImage | None:
        if not company.logo or self.logo_loader is None:
            return None
        try:
            return self.logo_loader.load(company.logo)
        except Exception as e:
            logger.warning(f"Continuing without logo: {e}")
            return None

    def _draw_company_header(
        self,
        page: Page,
        company: CompanyInfo,
        logo: LogoImage | None,
        modern: bool,
        text_x: float,
        name_size: float,
    ) -> None:
        if modern:
            page.ops.append(RectOp(0, 0, A4_WIDTH, BANNER_HEIGHT, fill=PRIMARY))
            name_color = detail_color = WHITE
            logo_y = 8.0
        else:
            name_color, detail_color = PRIMARY, MUTED
            logo_y = 15.0

        if logo is not None:
            width = LOGO_WIDTH
            height = width * logo.height / logo.width if logo.width else width
            max_height = BANNER_HEIGHT - 2 * logo_y if modern else 30.0
            if height > max_height:
                width, height = width * max_height / height, max_height
            page.ops.append(ImageOp(MARGIN_X, logo_y, width, height, logo.data))
        else:
            text_x = MARGIN_X

        page.ops.append(
            TextOp(text_x, 20, company.name, size=name_size, color=name_color, bold=True)
        )

        contact = " | ".join(
            part
            for part in (
                f"Tel: {company.phone}" if company.phone else "",
                f"Email: {company.email}" if company.email else "",
            )
            if part
        )
        details = [
            company.address,
            contact,
            f"NIF: {company.tax_id}" if company.tax_id else "",
        ]
        y = 26.0
        for line in details:
            if line:
                page.ops.append(TextOp(text_x, y, line, size=9, color=detail_color))
                y += 5

    def _draw_manual_table(
        self,
        page: Page,
        header: tuple[str, ...],
        rows: list[tuple[str, ...]],
        widths: tuple[float, ...],
        top: float,
        max_rows: int | None = None,
    ) -> float:
        """Fixed-width rows drawn with plain text; returns the next free y."""
        y = top
        page.ops.append(RectOp(MARGIN_X, y, CONTENT_WIDTH, ROW_HEIGHT, fill=PRIMARY))
        x = MARGIN_X
        for label, width in zip(header, widths):
            page.ops.append(TextOp(x + 2, y + 5.5, label, size=8, color=WHITE, bold=True))
            x += width
        y += ROW_HEIGHT

        visible = rows if max_rows is None else rows[:max_rows]
        for index, row in enumerate(visible):
            if index % 2 == 0:
                page.ops.append(
                    RectOp(MARGIN_X, y, CONTENT_WIDTH, ROW_HEIGHT, fill=LIGHT_GRAY)
                )
            x = MARGIN_X
            for value, width in zip(row, widths):
                page.ops.append(TextOp(x + 2, y + 5.5, _fit(value, width), size=8, color=TEXT))
                x += width
            y += ROW_HEIGHT

        hidden = len(rows) - len(visible)
        if hidden > 0:
            page.ops.append(
                TextOp(CENTER_X, y + 4, f"... y {hidden} registros más", size=8,
                       color=MUTED, align="center")
            )
            y += ROW_HEIGHT
        return y

    # Financial report

    def _layout_report(self, report: ReportRequest, options: GenerationOptions) -> PageSet:
        company = report.company_info
        start = format_date(report.start_date)
        end = format_date(report.end_date)
        totals = summarize(report.transactions)

        page_set = PageSet(
            info=DocumentInfo(
                title=f"Reporte Financiero {start} - {end}",
                subject=f"Reporte financiero del período {start} - {end}",
                author=company.name,
                keywords=["reporte", "financiero", "transacciones"],
            )
        )
        page = page_set.new_page()

        logo = self._load_logo(company)
        self._draw_company_header(
            page, company, logo, options.modern_design, text_x=60, name_size=18
        )

        page.ops.append(
            TextOp(CENTER_X, 52, "Reporte Financiero", size=16, color=ACCENT,
                   align="center", bold=True)
        )
        page.ops.append(
            TextOp(CENTER_X, 60, f"Período: {start} - {end}", size=12, color=MUTED,
                   align="center")
        )

        if options.modern_design:
            self._draw_summary_cards(page, totals)
        else:
            self._draw_summary_block(page, totals)

        page.ops.append(
            TextOp(MARGIN_X, 105, "Detalle de Transacciones", size=12, color=SECONDARY,
                   bold=True)
        )
        rows = [self._transaction_row(t) for t in report.transactions]
        if not rows:
            page.ops.append(
                TextOp(MARGIN_X, TABLE_TOP + 6, "No hay transacciones en el período seleccionado",
                       size=9, color=MUTED)
            )
            y = TABLE_TOP + ROW_HEIGHT
        elif self.table_support:
            page, y = self._draw_transaction_table(page_set, page, rows)
        else:
            logger.warning("Table drawing unavailable, using manual rows")
            y = self._draw_manual_table(
                page, self._table_header(), rows, TABLE_COL_WIDTHS, TABLE_TOP,
                max_rows=MANUAL_TABLE_MAX_ROWS,
            )

        if report.previous_summary is not None:
            self._draw_comparison(page_set, page, y + 10, totals, report.previous_summary)

        self._draw_report_footers(page_set, company)
        return page_set

    def _draw_summary_cards(self, page: Page, totals: PeriodSummary) -> None:
        cards = (
            (f"Total Recibido ({self.received_currency})",
             self._money(totals.total_received, self.received_currency), PRIMARY),
            (f"Total Entregado ({self.delivered_currency})",
             self._money(totals.total_delivered, self.delivered_currency), SECONDARY),
            ("Beneficio Total",
             self._money(totals.total_profit, self.received_currency), ACCENT),
            ("Rentabilidad Media",
             format_percentage(totals.avg_profit_percentage), PRIMARY),
        )
        width, gap, top, height = 42.0, 4.0, 66.0, 26.0
        for index, (label, value, color) in enumerate(cards):
            x = MARGIN_X + index * (width + gap)
            page.ops.append(
                RectOp(x, top, width, height, fill=LIGHT_GRAY, stroke=BORDER, radius=3)
            )
            page.ops.append(RectOp(x, top, width, 2, fill=color))
            page.ops.append(TextOp(x + 3, top + 9, label, size=7, color=MUTED))
            page.ops.append(
                TextOp(x + 3, top + 18, _fit(value, width - 6, 10), size=10, color=color,
                       bold=True)
            )
        page.ops.append(
            TextOp(MARGIN_X, 98, f"Total de transacciones: {totals.count}", size=9,
                   color=MUTED)
        )

    def _draw_summary_block(self, page: Page, totals: PeriodSummary) -> None:
        page.ops.append(
            RectOp(MARGIN_X, 65, CONTENT_WIDTH, 30, fill=LIGHT_GRAY, stroke=BORDER, radius=3)
        )
        page.ops.append(
            TextOp(20, 73, "Resumen Financiero", size=12, color=PRIMARY, bold=True)
        )
        page.ops.append(
            TextOp(190, 73, f"Transacciones: {totals.count}", size=10, color=TEXT,
                   align="right")
        )
        received = self._currency_name(self.received_currency)
        delivered = self._currency_name(self.delivered_currency)
        lines = (
            (20, 81, f"Total {received} Recibidos: "
                     f"{self._money(totals.total_received, self.received_currency)}"),
            (110, 81, f"Total {delivered} Entregados: "
                      f"{self._money(totals.total_delivered, self.delivered_currency)}"),
            (20, 88, f"Beneficio Total: "
                     f"{self._money(totals.total_profit, self.received_currency)}"),
            (110, 88, f"Rentabilidad Promedio: "
                      f"{format_percentage(totals.avg_profit_percentage)}"),
        )
        for x, y, text in lines:
            page.ops.append(TextOp(x, y, text, size=10, color=TEXT))

    def _table_header(self) -> tuple[str, ...]:
        return (
            "Fecha",
            "Cliente",
            self.received_currency,
            self.delivered_currency,
            "Tasa",
            "Beneficio",
            "% Benef.",
        )

    def _transaction_row(self, t: TransactionRecord) -> tuple[str, ...]:
        return (
            format_date(t.date),
            _fit(t.client.name, TABLE_COL_WIDTHS[1]),
            format_amount(t.amount_received, self.locale),
            format_amount(t.amount_delivered, self.locale),
            f"{t.exchange_rate:.2f}",
            format_amount(t.profit or 0, self.locale),
            format_percentage(t.profit_percentage),
        )

    def _draw_transaction_table(
        self, page_set: PageSet, page: Page, rows: list[tuple[str, ...]]
    ) -> tuple[Page, float]:
        """Grid table split across pages with a repeated header."""
        header = self._table_header()
        remaining = rows
        y = TABLE_TOP
        while True:
            capacity = int((PAGE_BOTTOM - y - ROW_HEIGHT) // ROW_HEIGHT)
            chunk, remaining = remaining[:capacity], remaining[capacity:]
            page.ops.append(
                TableOp(MARGIN_X, y, header, tuple(chunk), TABLE_COL_WIDTHS,
                        row_height=ROW_HEIGHT)
            )
            y += ROW_HEIGHT * (len(chunk) + 1)
            if not remaining:
                return page, y
            page = page_set.new_page()
            y = CONTINUATION_TOP

    def _comparison_row(self, item: MetricComparison) -> tuple[str, ...]:
        if item.label == "transactions":
            label = "Transacciones"
            current, previous = str(int(item.current)), str(int(item.previous))
            delta = _signed(str(int(item.delta)), item.delta)
        else:
            currency = (
                self.delivered_currency if item.label == "delivered"
                else self.received_currency
            )
            label = {
                "received": f"Recibido ({currency})",
                "delivered": f"Entregado ({currency})",
                "profit": f"Beneficio ({currency})",
            }[item.label]
            current = self._money(item.current, currency)
            previous = self._money(item.previous, currency)
            delta = _signed(self._money(item.delta, currency), item.delta)

        if item.delta_percentage is None:
            change = "N/A"
        else:
            change = f"{item.delta_percentage:+.2f}%"
        return (label, current, previous, delta, change)

    def _draw_comparison(
        self,
        page_set: PageSet,
        page: Page,
        top: float,
        current: PeriodSummary,
        previous: PeriodSummary,
    ) -> None:
        rows = [self._comparison_row(c) for c in compare_periods(current, previous)]
        needed = 6 + ROW_HEIGHT * (len(rows) + 1)
        if top + needed > PAGE_BOTTOM:
            page = page_set.new_page()
            top = CONTINUATION_TOP

        page.ops.append(
            TextOp(MARGIN_X, top, "Comparativa con el Período Anterior", size=12,
                   color=SECONDARY, bold=True)
        )
        header = ("Métrica", "Actual", "Anterior", "Diferencia", "Variación")
        if self.table_support:
            page.ops.append(
                TableOp(MARGIN_X, top + 4, header, tuple(rows), COMPARISON_COL_WIDTHS,
                        row_height=ROW_HEIGHT)
            )
        else:
            self._draw_manual_table(page, header, rows, COMPARISON_COL_WIDTHS, top + 4)

    def _draw_report_footers(self, page_set: PageSet, company: CompanyInfo) -> None:
        generated = self.clock()
        stamp = f"{format_date(generated)} {generated:%H:%M}"
        total = len(page_set.pages)
        for number, page in enumerate(page_set.pages, start=1):
            page.ops.append(
                TextOp(CENTER_X, FOOTER_Y,
                       f"Generado el {stamp} | {company.name} | Página {number} de {total}",
                       size=8, color=FAINT, align="center")
            )

    # Receipt

    def _layout_receipt(self, receipt: ReceiptRequest, options: GenerationOptions) -> PageSet:
        company, client, tx = receipt.company_info, receipt.client, receipt.transaction
        tx_date = format_date(tx.date)

        page_set = PageSet(
            info=DocumentInfo(
                title=f"Recibo {tx.receipt_id}",
                subject=f"Recibo de transacción - {tx_date}",
                author=company.name,
                keywords=["recibo", "transacción", "envío"],
            )
        )
        page = page_set.new_page()

        logo = self._load_logo(company)
        self._draw_company_header(
            page, company, logo, options.modern_design, text_x=50, name_size=16
        )
        self._draw_receipt_badge(page, tx, tx_date, options.modern_design)
        if not options.modern_design:
            page.ops.append(LineOp(MARGIN_X, 45, 195, 45))

        self._draw_client_block(page, client)
        self._draw_receipt_details(page, tx)
        self._draw_receipt_summary(page, tx)

        page.ops.append(
            TextOp(MARGIN_X, 210, "Términos y Condiciones:", size=8, color=MUTED, bold=True)
        )
        for offset, line in enumerate(TERMS):
            page.ops.append(TextOp(MARGIN_X, 215 + offset * 5, line, size=8, color=MUTED))

        generated = self.clock()
        footer = (
            f"Este recibo fue generado el {format_date(generated)} a las {generated:%H:%M:%S}",
            f"ID de Transacción: {tx.id} | IP: {tx.ip_address or 'N/D'}",
            f"© {generated.year} {company.name}. Todos los derechos reservados.",
        )
        for offset, line in enumerate(footer):
            page.ops.append(
                TextOp(CENTER_X, 245 + offset * 5, line, size=8, color=(120, 120, 120),
                       align="center")
            )
        return page_set

    def _draw_receipt_badge(
        self, page: Page, tx: TransactionRecord, tx_date: str, modern: bool
    ) -> None:
        x, width = 140.0, 55.0
        center = x + width / 2
        page.ops.append(
            RectOp(x, 10 if modern else 15, width, 25, fill=WHITE if modern else LIGHT_BLUE,
                   radius=3)
        )
        top = 17 if modern else 22
        page.ops.append(
            TextOp(center, top, "RECIBO", size=11, color=PRIMARY, align="center", bold=True)
        )
        page.ops.append(
            TextOp(center, top + 6, f"ID: {tx.receipt_id}", size=9, color=TEXT,
                   align="center")
        )
        page.ops.append(
            TextOp(center, top + 12, f"Fecha: {tx_date}", size=9, color=TEXT, align="center")
        )

    def _draw_client_block(self, page: Page, client: Any) -> None:
        page.ops.append(
            TextOp(MARGIN_X, 55, "Información del Cliente", size=12, color=SECONDARY,
                   bold=True)
        )
        lines = [f"Nombre: {client.name}", f"Email: {client.email}"]
        if client.phone:
            lines.append(f"Teléfono: {client.phone}")
        if client.dni:
            lines.append(f"DNI/NIE: {client.dni}")

        y = 62.0
        for line in lines:
            page.ops.append(TextOp(MARGIN_X, y, line, size=10, color=TEXT))
            y += 6

        if client.address:
            address = f"Dirección: {client.address}"
            if client.city:
                address += f", {client.city}"
            if client.postal_code:
                address += f" {client.postal_code}"
            if client.country:
                address += f", {client.country}"

            if len(address) > 60:
                first, _, rest = address.partition(", ")
                page.ops.append(TextOp(MARGIN_X, y, first, size=10, color=TEXT))
                page.ops.append(TextOp(25, y + 6, rest, size=10, color=TEXT))
            else:
                page.ops.append(TextOp(MARGIN_X, y, address, size=10, color=TEXT))

    def _draw_receipt_details(self, page: Page, tx: TransactionRecord) -> None:
        page.ops.append(
            TextOp(MARGIN_X, 105, "Detalles de la Transacción", size=12, color=SECONDARY,
                   bold=True)
        )
        page.ops.append(RectOp(MARGIN_X, 110, 85, 40, fill=LIGHT_GRAY, radius=3))
        page.ops.append(RectOp(110, 110, 85, 40, fill=LIGHT_GRAY, radius=3))

        received = self._currency_name(self.received_currency)
        delivered = self._currency_name(self.delivered_currency)
        amounts = (
            (f"{received} Recibidos:",
             self._money(tx.amount_received, self.received_currency)),
            (f"{delivered} Entregados:",
             self._money(tx.amount_delivered, self.delivered_currency)),
            ("Tasa de Cambio:", self._rate(tx.exchange_rate)),
        )
        payment = (
            ("Método de Pago:", "Transferencia Bancaria", TEXT),
            ("Estado:", "Completado", SECONDARY),
            ("Referencia:", tx.receipt_id, TEXT),
        )
        for offset, (label, value) in enumerate(amounts):
            y = 118 + offset * 8
            page.ops.append(TextOp(20, y, label, size=9, color=TEXT))
            page.ops.append(TextOp(95, y, value, size=9, color=TEXT, align="right"))
        for offset, (label, value, color) in enumerate(payment):
            y = 118 + offset * 8
            page.ops.append(TextOp(115, y, label, size=9, color=TEXT))
            page.ops.append(TextOp(190, y, value, size=9, color=color, align="right"))

    def _draw_receipt_summary(self, page: Page, tx: TransactionRecord) -> None:
        page.ops.append(
            TextOp(MARGIN_X, 165, "Resumen", size=12, color=SECONDARY, bold=True)
        )
        page.ops.append(RectOp(MARGIN_X, 170, CONTENT_WIDTH, 30, fill=LIGHT_BLUE, radius=3))
        page.ops.append(TextOp(20, 178, "Monto Enviado:", size=9, color=TEXT))
        page.ops.append(
            TextOp(190, 178, self._money(tx.amount_received, self.received_currency),
                   size=9, color=TEXT, align="right")
        )
        page.ops.append(TextOp(20, 186, "Monto Recibido:", size=9, color=TEXT))
        page.ops.append(
            TextOp(190, 186, self._money(tx.amount_delivered, self.delivered_currency),
                   size=9, color=TEXT, align="right")
        )
        page.ops.append(LineOp(20, 190, 190, 190, color=PRIMARY))
        page.ops.append(
            TextOp(20, 196, "Tasa de Cambio Aplicada:", size=10, color=PRIMARY, bold=True)
        )
        page.ops.append(
            TextOp(190, 196, self._rate(tx.exchange_rate), size=10, color=PRIMARY,
                   align="right", bold=True)
        )

    # Degraded summary

    def _layout_summary(self, document: dict[str, Any]) -> PageSet:
        company = document["company_info"]["name"]
        totals = document["summary"]
        is_receipt = document["kind"] == DocumentKind.RECEIPT.value

        if is_receipt:
            title = "Recibo de Transacción"
            subtitle = f"Recibo #: {document['receipt_id']}"
        else:
            title = "Reporte Financiero"
            period = document["period"]
            subtitle = (
                f"Período: {format_date(period['start_date'])} - "
                f"{format_date(period['end_date'])}"
            )

        page_set = PageSet(
            info=DocumentInfo(title=title, subject=subtitle, author=company,
                              keywords=["resumen"])
        )
        page = page_set.new_page()
        page.ops.append(TextOp(CENTER_X, 20, title, size=18, color=BLACK, align="center",
                               bold=True))
        page.ops.append(TextOp(CENTER_X, 30, subtitle, size=12, color=BLACK, align="center"))
        page.ops.append(TextOp(20, 42, "Resumen", size=14, color=BLACK, bold=True))

        lines = (
            f"Total Transacciones: {totals['transaction_count']}",
            f"Total Recibido: "
            f"{self._money(totals['total_received'], self.received_currency)}",
            f"Total Entregado: "
            f"{self._money(totals['total_delivered'], self.delivered_currency)}",
            f"Beneficio Total: "
            f"{self._money(totals['total_profit'], self.received_currency)}",
            f"Rentabilidad Media: {format_percentage(totals['avg_profit_percentage'])}",
        )
        for offset, line in enumerate(lines):
            page.ops.append(TextOp(20, 52 + offset * 10, line, size=10, color=BLACK))

        page.ops.append(
            TextOp(CENTER_X, 110, "Este es un documento simplificado generado en el servidor.",
                   size=9, color=MUTED, align="center")
        )
        page.ops.append(
            TextOp(CENTER_X, 116,
                   "Para el documento completo, genérelo en un entorno con renderizado completo.",
                   size=9, color=MUTED, align="center")
        )

        generated = self.clock()
        page.ops.append(
            TextOp(CENTER_X, 180, f"Generado el {format_date(generated)} {generated:%H:%M}",
                   size=10, color=BLACK, align="center")
        )
        page.ops.append(TextOp(CENTER_X, 190, company, size=10, color=BLACK, align="center"))
        return page_set
