"""PDF rendering of quotes, receipts and reports with reportlab platypus."""

import base64
import binascii
import io
import logging
from datetime import datetime
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.platypus import (
    Flowable,
    Image,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from bizdesk.application.interfaces import DocumentRenderer
from bizdesk.domain.entities import (
    ORDER_STATUS_LABELS,
    Client,
    ClientOrdersReport,
    ClientsReport,
    CompanySettings,
    Order,
    OrdersReport,
    ProductItem,
    Quote,
    ServiceItem,
)
from bizdesk.domain.validators import format_currency, format_document, format_phone, only_digits

logger = logging.getLogger(__name__)

_HEADER_BG = colors.HexColor("#1f3a5f")
_ZEBRA_BG = colors.HexColor("#f2f5f9")
_TOTAL_BG = colors.HexColor("#dde6f0")


def _date(value: datetime) -> str:
    return value.strftime("%d/%m/%Y")


def _text(value: str) -> str:
    return escape(value or "")


def _table_style(total_row: bool = False) -> TableStyle:
    commands = [
        ("BACKGROUND", (0, 0), (-1, 0), _HEADER_BG),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, _ZEBRA_BG]),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ]
    if total_row:
        commands += [
            ("BACKGROUND", (0, -1), (-1, -1), _TOTAL_BG),
            ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
        ]
    return TableStyle(commands)


class ReportLabDocumentRenderer(DocumentRenderer):
    """Builds A4 PDFs in memory. Text is Portuguese, money is formatted as BRL."""

    def __init__(self) -> None:
        styles = getSampleStyleSheet()
        self._title = styles["Title"]
        self._heading = styles["Heading2"]
        self._normal = styles["Normal"]
        self._small = ParagraphStyle(name="Small", parent=styles["Normal"], fontSize=8)
        self._right = ParagraphStyle(name="Right", parent=styles["Normal"], alignment=2)
        self._footer = ParagraphStyle(
            name="Footer", fontSize=7, textColor=colors.grey, alignment=1
        )

    # ── Documents ───────────────────────────────────────────────────

    def render_quote(self, quote: Quote, company: CompanySettings | None) -> bytes:
        elements = self._company_header(company)
        elements.append(Paragraph(f"Orçamento {_text(quote.number)}", self._title))
        elements.append(
            Paragraph(
                f"<b>Data:</b> {_date(quote.created_at)} &nbsp;&nbsp; "
                f"<b>Válido até:</b> {quote.valid_until.strftime('%d/%m/%Y')}",
                self._normal,
            )
        )
        elements.append(Spacer(1, 4 * mm))
        elements += self._client_block(quote.client)
        elements += self._item_tables(quote.services, quote.products)

        totals = [
            ["Subtotal", format_currency(quote.subtotal)],
            ["Desconto", format_currency(quote.discount)],
            ["Total", format_currency(quote.total)],
        ]
        table = Table(totals, colWidths=[40 * mm, 40 * mm], hAlign="RIGHT")
        table.setStyle(TableStyle([
            ("ALIGN", (1, 0), (1, -1), "RIGHT"),
            ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
            ("LINEABOVE", (0, -1), (-1, -1), 0.5, colors.black),
        ]))
        elements += [Spacer(1, 4 * mm), table]

        if quote.notes:
            elements += [
                Spacer(1, 6 * mm),
                Paragraph("Observações", self._heading),
                Paragraph(_text(quote.notes).replace("\n", "<br/>"), self._normal),
            ]
        return self._build(elements, f"Orçamento {quote.number}")

    def render_receipt(self, order: Order, company: CompanySettings | None) -> bytes:
        elements = self._company_header(company)
        elements.append(Paragraph(f"Recibo do Pedido {_text(order.number)}", self._title))
        when = order.completed_at or order.created_at
        elements.append(
            Paragraph(
                f"<b>Data:</b> {_date(when)} &nbsp;&nbsp; "
                f"<b>Status:</b> {ORDER_STATUS_LABELS[order.status]}",
                self._normal,
            )
        )
        elements.append(Spacer(1, 4 * mm))
        elements += self._client_block(order.client)
        elements += self._item_tables(order.services, order.products)
        elements += [
            Spacer(1, 4 * mm),
            Paragraph(f"<b>Valor total: {format_currency(order.total)}</b>", self._right),
            Spacer(1, 20 * mm),
        ]

        issuer = company.company_name if company else ""
        receiver = order.client.name if order.client else ""
        signatures = Table(
            [
                ["_" * 38, "_" * 38],
                [issuer, receiver],
                ["Prestador", "Cliente"],
            ],
            colWidths=[85 * mm, 85 * mm],
        )
        signatures.setStyle(TableStyle([
            ("ALIGN", (0, 0), (-1, -1), "CENTER"),
            ("FONTSIZE", (0, 1), (-1, -1), 8),
        ]))
        elements.append(signatures)
        return self._build(elements, f"Recibo {order.number}")

    # ── Reports ─────────────────────────────────────────────────────

    def render_orders_report(
        self, report: OrdersReport, company: CompanySettings | None, filter_lines: list[str]
    ) -> bytes:
        elements = self._report_header("Relatório de Pedidos", company, report.generated_at, filter_lines)

        rows = [["Pedido", "Cliente", "Cidade/UF", "Status", "Data", "Itens", "Total"]]
        for order in report.orders:
            rows.append([
                order.number,
                Paragraph(_text(order.client.name if order.client else "N/A"), self._small),
                order.client.location if order.client else "N/A",
                ORDER_STATUS_LABELS[order.status],
                _date(order.reference_date),
                str(order.item_count),
                format_currency(order.total),
            ])
        rows.append(["Total", "", "", "", "", str(report.item_count), format_currency(report.total_value)])

        table = Table(rows, repeatRows=1, colWidths=[20 * mm, 45 * mm, 30 * mm, 22 * mm, 20 * mm, 12 * mm, 26 * mm])
        table.setStyle(_table_style(total_row=True))
        elements.append(table)

        elements += [
            Spacer(1, 6 * mm),
            Paragraph("Resumo", self._heading),
            Paragraph(f"Quantidade de pedidos: {len(report.orders)}", self._normal),
            Paragraph(f"Valor total: {format_currency(report.total_value)}", self._normal),
            Paragraph(f"Ticket médio: {format_currency(report.average_value)}", self._normal),
        ]
        return self._build(elements, "Relatório de Pedidos")

    def render_clients_report(
        self, report: ClientsReport, company: CompanySettings | None, filter_lines: list[str]
    ) -> bytes:
        elements = self._report_header("Relatório de Clientes", company, report.generated_at, filter_lines)

        rows = [["Nome", "Documento", "E-mail", "Telefone", "Cidade/UF"]]
        for client in report.clients:
            rows.append([
                Paragraph(_text(client.name), self._small),
                format_document(client.document, client.type),
                Paragraph(_text(client.email), self._small),
                format_phone(client.phone),
                client.location,
            ])
        table = Table(rows, repeatRows=1, colWidths=[50 * mm, 35 * mm, 45 * mm, 25 * mm, 25 * mm])
        table.setStyle(_table_style())
        elements.append(table)

        elements += [
            Spacer(1, 6 * mm),
            Paragraph("Resumo", self._heading),
            Paragraph(f"Total de clientes: {len(report.clients)}", self._normal),
            Paragraph(f"Pessoas físicas: {report.individuals}", self._normal),
            Paragraph(f"Pessoas jurídicas: {report.organizations}", self._normal),
        ]
        return self._build(elements, "Relatório de Clientes")

    def render_client_orders_report(
        self, report: ClientOrdersReport, company: CompanySettings | None, filter_lines: list[str]
    ) -> bytes:
        elements = self._report_header(
            "Relatório de Serviços por Cliente", company, report.generated_at, filter_lines
        )

        for group in report.groups:
            client = group.client
            elements.append(Paragraph(_text(client.name), self._heading))
            elements.append(
                Paragraph(
                    f"{client.document_label}: {format_document(client.document, client.type)}"
                    f" &nbsp;&nbsp; {client.location}",
                    self._small,
                )
            )
            rows = [["Pedido", "Concluído em", "Itens", "Total"]]
            for order in group.orders:
                rows.append([
                    order.number,
                    _date(order.reference_date),
                    str(order.item_count),
                    format_currency(order.total),
                ])
            rows.append(["Subtotal", "", "", format_currency(group.subtotal)])
            table = Table(rows, colWidths=[40 * mm, 40 * mm, 30 * mm, 40 * mm])
            table.setStyle(_table_style(total_row=True))
            elements += [table, Spacer(1, 5 * mm)]

        elements.append(
            Paragraph(
                f"<b>Total geral ({report.order_count} pedidos): "
                f"{format_currency(report.grand_total)}</b>",
                self._right,
            )
        )
        return self._build(elements, "Relatório de Serviços por Cliente")

    # ── Building blocks ─────────────────────────────────────────────

    def _company_header(self, company: CompanySettings | None) -> list[Flowable]:
        if company is None:
            return []
        elements: list[Flowable] = []
        logo = self._logo(company.logo)
        if logo is not None:
            elements.append(logo)

        lines = [f"<b>{_text(company.company_name)}</b>"]
        if company.tax_id:
            kind = "CNPJ" if len(only_digits(company.tax_id)) == 14 else "CPF"
            lines.append(f"{kind}: {_text(company.tax_id)}")
        address = ", ".join(p for p in (company.address, company.neighborhood) if p)
        if address:
            lines.append(_text(address))
        if company.city or company.state:
            lines.append(_text(f"{company.city}/{company.state} {company.zip_code}".strip()))
        whatsapp = f"WhatsApp {format_phone(company.whatsapp)}" if company.whatsapp else ""
        contacts = " | ".join(p for p in (format_phone(company.phone), whatsapp, company.email) if p)
        if contacts:
            lines.append(_text(contacts))
        elements.append(Paragraph("<br/>".join(lines), self._small))
        elements.append(Spacer(1, 6 * mm))
        return elements

    def _logo(self, logo: str | None) -> Image | None:
        if not logo:
            return None
        payload = logo.split(",", 1)[1] if logo.startswith("data:") else logo
        try:
            raw = base64.b64decode(payload, validate=True)
            width, height = ImageReader(io.BytesIO(raw)).getSize()
        except binascii.Error as exc:
            logger.warning("Company logo is not valid base64: %s", exc)
            return None
        except Exception as exc:
            logger.warning("Ignoring unreadable company logo: %s", exc)
            return None
        # Fit into 40x20 mm keeping the aspect ratio
        scale = min(40 * mm / width, 20 * mm / height)
        return Image(io.BytesIO(raw), width=width * scale, height=height * scale, hAlign="LEFT")

    def _client_block(self, client: Client | None) -> list[Flowable]:
        if client is None:
            return [Paragraph("<b>Cliente:</b> N/A", self._normal), Spacer(1, 4 * mm)]
        address = ", ".join(p for p in (client.address, client.number, client.neighborhood) if p)
        lines = [
            f"<b>Cliente:</b> {_text(client.name)}",
            f"<b>{client.document_label}:</b> {format_document(client.document, client.type)}",
        ]
        if address:
            lines.append(f"<b>Endereço:</b> {_text(address)} - {_text(client.location)}")
        if client.email or client.phone:
            lines.append(f"<b>Contato:</b> {_text(client.email)} {format_phone(client.phone)}".rstrip())
        return [Paragraph("<br/>".join(lines), self._normal), Spacer(1, 4 * mm)]

    def _item_tables(
        self, services: list[ServiceItem], products: list[ProductItem]
    ) -> list[Flowable]:
        elements: list[Flowable] = []
        if services:
            rows = [["Serviço", "Horas", "Valor/hora", "Total"]]
            rows += [
                [
                    Paragraph(_text(s.description), self._small),
                    f"{s.hours:g}",
                    format_currency(s.hourly_rate),
                    format_currency(s.total),
                ]
                for s in services
            ]
            table = Table(rows, colWidths=[90 * mm, 20 * mm, 30 * mm, 30 * mm])
            table.setStyle(_table_style())
            elements += [Paragraph("Serviços", self._heading), table]
        if products:
            rows = [["Produto", "Qtd.", "Valor unit.", "Total"]]
            rows += [
                [
                    Paragraph(_text(p.description), self._small),
                    f"{p.quantity:g}",
                    format_currency(p.unit_price),
                    format_currency(p.total),
                ]
                for p in products
            ]
            table = Table(rows, colWidths=[90 * mm, 20 * mm, 30 * mm, 30 * mm])
            table.setStyle(_table_style())
            elements += [Paragraph("Produtos", self._heading), table]
        return elements

    def _report_header(
        self,
        title: str,
        company: CompanySettings | None,
        generated_at: datetime,
        filter_lines: list[str],
    ) -> list[Flowable]:
        elements = self._company_header(company)
        elements.append(Paragraph(title, self._title))
        elements.append(
            Paragraph(f"Gerado em {generated_at.strftime('%d/%m/%Y %H:%M')}", self._small)
        )
        if filter_lines:
            elements.append(Paragraph("<b>Filtros:</b> " + _text("; ".join(filter_lines)), self._small))
        elements.append(Spacer(1, 5 * mm))
        return elements

    def _build(self, elements: list[Flowable], title: str) -> bytes:
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            title=title,
            leftMargin=15 * mm,
            rightMargin=15 * mm,
            topMargin=15 * mm,
            bottomMargin=15 * mm,
        )
        elements.append(Spacer(1, 8 * mm))
        elements.append(
            Paragraph(f"Documento gerado em {datetime.now().strftime('%d/%m/%Y %H:%M')}", self._footer)
        )
        doc.build(elements)
        content = buffer.getvalue()
        buffer.close()
        logger.debug("Built PDF '%s' (%d bytes)", title, len(content))
        return content
