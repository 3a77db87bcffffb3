"""Product list spreadsheet export.

Renders a customer's product lists as a SpreadsheetML 2003 workbook,
stores it and e-mails it to the configured recipient.
"""

from dataclasses import dataclass
from pathlib import Path
from xml.sax.saxutils import escape

import structlog

from productlists.domain.entities import ProductList
from productlists.infrastructure.config import Settings
from productlists.infrastructure.files import FileStore, LocalFileStore
from productlists.infrastructure.mailer import Mailer, SmtpMailer

logger = structlog.get_logger()

WORKBOOK_MEDIA_TYPE = "application/vnd.ms-excel"

WORKBOOK_HEADER = (
    '<?xml version="1.0"?><?mso-application progid="Excel.Sheet"?>'
    '<Workbook xmlns="urn:schemas-microsoft-com:office:spreadsheet" '
    'xmlns:o="urn:schemas-microsoft-com:office:office" '
    'xmlns:x="urn:schemas-microsoft-com:office:excel" '
    'xmlns:ss="urn:schemas-microsoft-com:office:spreadsheet" '
    'xmlns:html="http://www.w3.org/TR/REC-html40">'
    "<Styles>"
    '<Style ss:ID="s63">'
    '<Font x:CharSet="204" ss:Size="12" ss:Color="#000000" ss:Bold="1" ss:Underline="Single"/>'
    "</Style>"
    "</Styles>"
    '<Worksheet ss:Name="Sheet1">'
)

WORKBOOK_FOOTER = "</Table></Worksheet></Workbook>"


@dataclass
class ExportResult:
    """Result of exporting product lists."""

    file_id: str
    recipient: str
    attachment_id: str
    list_count: int


def _cell(value: object, style_id: str | None = None) -> str:
    style = f' ss:StyleID="{style_id}"' if style_id else ""
    text = "" if value is None else escape(str(value))
    return f'<Cell{style}><Data ss:Type="String">{text}</Data></Cell>'


class ProductListExporter:
    """Exports product lists as a spreadsheet attached to an e-mail.

    Example usage:
        exporter = ProductListExporter(
            file_store=LocalFileStore(Path("./exports")),
            mailer=SmtpMailer("localhost", 25, sender="no-reply@example.com"),
            recipient="sales@example.com",
        )
        result = exporter.export(product_lists)
    """

    def __init__(
        self,
        file_store: FileStore,
        mailer: Mailer,
        recipient: str,
        subject: str = "Wishlist export",
        file_name: str = "ProductLists.xls",
        attachment_file_id: str | None = None,
    ) -> None:
        """Initialize exporter.

        Args:
            file_store: Where generated workbooks are stored.
            mailer: Mailer used to send the export.
            recipient: Address receiving every export.
            subject: E-mail subject.
            file_name: Name of the generated workbook.
            attachment_file_id: Stored file attached instead of the generated
                workbook, when set.
        """
        self.file_store = file_store
        self.mailer = mailer
        self.recipient = recipient
        self.subject = subject
        self.file_name = file_name
        self.attachment_file_id = attachment_file_id

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProductListExporter":
        """Build an exporter with a local file store and an SMTP mailer.

        Args:
            settings: Application settings.

        Returns:
            Configured exporter.
        """
        return cls(
            file_store=LocalFileStore(Path(settings.export_directory)),
            mailer=SmtpMailer(
                host=settings.smtp_host,
                port=settings.smtp_port,
                sender=settings.export_sender,
                username=settings.smtp_username,
                password=settings.smtp_password,
                use_tls=settings.smtp_use_tls,
                timeout=settings.smtp_timeout_seconds,
            ),
            recipient=settings.export_recipient,
            subject=settings.export_subject,
            file_name=settings.export_file_name,
            attachment_file_id=settings.export_attachment_file_id,
        )

    def build_workbook(self, product_lists: list[ProductList]) -> str:
        """Render the lists as SpreadsheetML.

        Each list contributes a styled row with its name followed by one
        row per line: item display name, item id and quantity.

        Args:
            product_lists: Lists to render.

        Returns:
            Workbook XML.
        """
        rows = []
        for product_list in product_lists:
            rows.append(f"<Row>{_cell(product_list.name, 's63')}</Row>")
            for line in product_list.items:
                rows.append(
                    "<Row>"
                    + _cell(line.item.displayname)
                    + _cell(line.item.internalid)
                    + _cell(line.quantity)
                    + "</Row>"
                )
        return WORKBOOK_HEADER + "<Table>" + "".join(rows) + WORKBOOK_FOOTER

    def build_body(self, product_lists: list[ProductList]) -> str:
        """Plain-text summary: each list name followed by its item names."""
        lines: list[str] = []
        for product_list in product_lists:
            lines.append(product_list.name or "")
            lines.extend(f"  {line.item.displayname}" for line in product_list.items)
        return "\n".join(lines)

    def export(self, product_lists: list[ProductList]) -> ExportResult:
        """Store the workbook and e-mail it.

        Storage and delivery errors propagate to the caller.

        Args:
            product_lists: Lists to export.

        Returns:
            Export result with the stored file id.
        """
        workbook = self.build_workbook(product_lists)
        file_id = self.file_store.save(
            self.file_name,
            workbook.encode("utf-8"),
            WORKBOOK_MEDIA_TYPE,
        )
        logger.info("Product list workbook stored", file_id=file_id)

        attachment_id = self.attachment_file_id or file_id
        attachment = self.file_store.load(attachment_id)

        self.mailer.send(
            self.recipient,
            self.subject,
            self.build_body(product_lists),
            attachments=[attachment],
        )

        return ExportResult(
            file_id=file_id,
            recipient=self.recipient,
            attachment_id=attachment_id,
            list_count=len(product_lists),
        )
