"""
Statement parsing for document import.

Turns CSV, Excel and text-bearing PDF statements, or the text read from a
scanned image, into a list of ParsedTransaction. Amounts are always
positive; the sign only decides the type.
"""

import csv
import io
import logging
import math
import re
import zipfile
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Optional, Sequence

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from shared.models import EntryType

from .exceptions import DocumentParseError, UnsupportedDocumentError
from .models import ParsedTransaction

logger = logging.getLogger(__name__)

MAX_DESCRIPTION = 200
DEFAULT_DESCRIPTION = "Imported transaction"
# Less text than this means the PDF is a scan
MIN_PDF_TEXT = 20
CSV_DELIMITERS = (";", "\t", ",")


class DocumentKind(str, Enum):
    CSV = "CSV"
    EXCEL = "Excel"
    PDF = "PDF"
    IMAGE = "Image"


EXTENSIONS = {
    ".csv": DocumentKind.CSV,
    ".xlsx": DocumentKind.EXCEL,
    ".pdf": DocumentKind.PDF,
    ".jpg": DocumentKind.IMAGE,
    ".jpeg": DocumentKind.IMAGE,
    ".png": DocumentKind.IMAGE,
    ".webp": DocumentKind.IMAGE,
    ".gif": DocumentKind.IMAGE,
}

MEDIA_TYPES = {
    "text/csv": DocumentKind.CSV,
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": DocumentKind.EXCEL,
    "application/pdf": DocumentKind.PDF,
    "image/jpeg": DocumentKind.IMAGE,
    "image/jpg": DocumentKind.IMAGE,
    "image/png": DocumentKind.IMAGE,
    "image/webp": DocumentKind.IMAGE,
    "image/gif": DocumentKind.IMAGE,
}

IMAGE_MEDIA_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
    ".gif": "image/gif",
}

# Header names seen on Spanish and English bank exports, matched as substrings
DATE_COLUMNS = (
    "fecha", "date", "data", "datum", "dia", "day", "f. valor", "f. operación",
)
AMOUNT_COLUMNS = (
    "importe", "monto", "amount", "valor", "value", "total", "cantidad",
    "euros", "precio", "price", "cargo", "abono",
)
DESCRIPTION_COLUMNS = (
    "descripcion", "descripción", "description", "concepto", "detalle",
    "detail", "comentario", "observaciones", "nota", "notes",
)

INCOME_KEYWORDS = (
    "ingreso", "salario", "deposito", "abono", "nomina", "transferencia recibida",
    "salary", "deposit", "payroll",
)
EXPENSE_KEYWORDS = (
    "pago", "compra", "cargo", "retiro", "transferencia enviada",
    "payment", "purchase", "withdrawal",
)

YEAR_FIRST = re.compile(r"\b(\d{4})[-/](\d{1,2})[-/](\d{1,2})\b")
DAY_FIRST = re.compile(r"\b(\d{1,2})[-/](\d{1,2})[-/](\d{2,4})\b")
MONTH_NAME = re.compile(r"\b(\d{1,2})\s+([a-z]{3})[a-z]*\.?\s+(\d{2,4})\b", re.IGNORECASE)
MONTHS = {
    "ene": 1, "jan": 1, "feb": 2, "mar": 3, "abr": 4, "apr": 4, "may": 5,
    "jun": 6, "jul": 7, "ago": 8, "aug": 8, "sep": 9, "oct": 10, "nov": 11,
    "dic": 12, "dec": 12,
}
# Excel stores dates as days since 1899-12-30
EXCEL_EPOCH = date(1899, 12, 30)

AMOUNT_IN_TEXT = re.compile(r"-?\d+(?:[.,]\d{3})*[.,]\d{2}(?!\d)")
PLAIN_AMOUNT = re.compile(r"[+-]?\d+(?:\.\d+)?")
AMOUNT_CELL = re.compile(r"^[€$]?\s*-?\d{1,3}(?:[.,]?\d{3})*(?:[.,]\d{1,2})?\s*[€$]?$")

BANK_LABELS = re.compile(
    r"\b(Compras|Otros gastos|Ingresos|Transferencias|Pagos|Recibos)\b", re.IGNORECASE
)
BANK_PREFIXES = re.compile(r"\b(Pago en|Recibo|Transferencia (de|a))\s+", re.IGNORECASE)


def detect_kind(filename: str, content_type: Optional[str]) -> DocumentKind:
    """Pick a parser from the file extension, falling back to the media type."""
    extension = _extension(filename)
    if extension in EXTENSIONS:
        return EXTENSIONS[extension]
    media_type = (content_type or "").split(";")[0].strip().lower()
    if media_type in MEDIA_TYPES:
        return MEDIA_TYPES[media_type]
    raise UnsupportedDocumentError(filename)


def image_media_type(filename: str, content_type: Optional[str]) -> str:
    media_type = (content_type or "").split(";")[0].strip().lower()
    if media_type == "image/jpg":
        return "image/jpeg"
    if media_type in MEDIA_TYPES and media_type.startswith("image/"):
        return media_type
    return IMAGE_MEDIA_TYPES.get(_extension(filename), "image/jpeg")


def _extension(filename: str) -> str:
    dot = filename.rfind(".")
    return filename[dot:].lower() if dot != -1 else ""


def parse_amount(value: Any) -> Optional[float]:
    """Read ``1.234,56``, ``1,234.56``, ``12,50 €`` and plain numbers alike."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None

    text = re.sub(r"[€$\s]", "", str(value))
    if "," in text and "." in text:
        if text.rfind(",") > text.rfind("."):
            text = text.replace(".", "").replace(",", ".")
        else:
            text = text.replace(",", "")
    elif "," in text:
        text = text.replace(",", ".", 1)

    if not PLAIN_AMOUNT.fullmatch(text):
        return None
    return float(text)


def _make_date(year: int, month: int, day: int) -> Optional[str]:
    if year < 100:
        year += 2000
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None


def normalize_date(value: Any) -> Optional[str]:
    """ISO ``YYYY-MM-DD`` for a date cell or string, or None if unreadable."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return _excel_serial(float(value))

    text = str(value).strip()
    match = YEAR_FIRST.search(text)
    if match:
        return _make_date(int(match[1]), int(match[2]), int(match[3]))
    match = DAY_FIRST.search(text)
    if match:
        return _make_date(int(match[3]), int(match[2]), int(match[1]))
    match = MONTH_NAME.search(text)
    if match:
        month = MONTHS.get(match[2].lower())
        return _make_date(int(match[3]), month, int(match[1])) if month else None
    if PLAIN_AMOUNT.fullmatch(text):
        return _excel_serial(float(text))
    return None


def _excel_serial(serial: float) -> Optional[str]:
    if not 1000 < serial < 100_000:
        return None
    return (EXCEL_EPOCH + timedelta(days=int(serial))).isoformat()


def infer_type(text: str, amount: float) -> EntryType:
    lowered = text.lower()
    if any(keyword in lowered for keyword in INCOME_KEYWORDS):
        return EntryType.INCOME
    if any(keyword in lowered for keyword in EXPENSE_KEYWORDS):
        return EntryType.EXPENSE
    return EntryType.EXPENSE if amount < 0 else EntryType.INCOME


def _clean_description(text: str) -> str:
    text = BANK_PREFIXES.sub("", BANK_LABELS.sub("", text))
    text = re.sub(r"\([^)]*\)", " ", text)
    text = re.sub(r"[|;€$]", " ", text)
    text = re.sub(r"\s+", " ", text).strip(" -")
    if len(text) < 3:
        return DEFAULT_DESCRIPTION
    return text[:MAX_DESCRIPTION]


def _date_in_line(line: str) -> tuple[Optional[str], Optional[re.Match]]:
    for pattern in (YEAR_FIRST, DAY_FIRST, MONTH_NAME):
        match = pattern.search(line)
        if match:
            parsed = normalize_date(match[0])
            if parsed:
                return parsed, match
    return None, None


def extract_from_text(text: str) -> list[ParsedTransaction]:
    """
    Find transactions in free text, one per line.

    A line counts when it holds a date and an amount with two decimals;
    what remains of the line becomes the description.
    """
    transactions = []
    for line in text.splitlines():
        if len(line.strip()) < 5:
            continue

        parsed_date, date_match = _date_in_line(line)
        if parsed_date is None:
            continue
        rest = line[: date_match.start()] + " " + line[date_match.end():]

        amount_match = AMOUNT_IN_TEXT.search(rest)
        if amount_match is None:
            continue
        amount = parse_amount(amount_match[0])
        if amount is None:
            continue

        description = rest[: amount_match.start()] + " " + rest[amount_match.end():]
        transactions.append(
            ParsedTransaction(
                date=parsed_date,
                amount=abs(amount),
                description=_clean_description(description),
                type=infer_type(line, amount),
            )
        )

    logger.debug(f"Found {len(transactions)} transactions in {len(text)} chars of text")
    return transactions


def _find_column(headers: list[str], names: Sequence[str]) -> Optional[int]:
    for name in names:
        for index, header in enumerate(headers):
            if name in header:
                return index
    return None


def _cell(row: Sequence[Any], index: Optional[int]) -> Any:
    if index is None or index >= len(row):
        return None
    return row[index]


def _row_transaction(date_value: Any, amount_value: Any, description: Any) -> Optional[ParsedTransaction]:
    if date_value in (None, "") or amount_value in (None, "", 0):
        return None
    parsed_date = normalize_date(date_value)
    amount = parse_amount(amount_value)
    if parsed_date is None or amount is None:
        return None
    text = str(description).strip() if description not in (None, "") else ""
    return ParsedTransaction(
        date=parsed_date,
        amount=abs(amount),
        description=text[:MAX_DESCRIPTION] or DEFAULT_DESCRIPTION,
        type=EntryType.EXPENSE if amount < 0 else EntryType.INCOME,
    )


def rows_to_transactions(rows: Sequence[Sequence[Any]]) -> list[ParsedTransaction]:
    """
    Read tabular rows whose first row is a header.

    Columns are found by header name; when no date or amount header is
    recognised, column types are guessed from the first data row.
    """
    if len(rows) < 2:
        return []

    headers = [str(h).strip().lower() if h is not None else "" for h in rows[0]]
    date_index = _find_column(headers, DATE_COLUMNS)
    amount_index = _find_column(headers, AMOUNT_COLUMNS)
    description_index = _find_column(headers, DESCRIPTION_COLUMNS)

    if date_index is None or amount_index is None:
        logger.debug(f"No date/amount headers in {headers}; guessing columns")
        return _rows_without_headers(rows)

    transactions = []
    for row in rows[1:]:
        transaction = _row_transaction(
            _cell(row, date_index), _cell(row, amount_index), _cell(row, description_index)
        )
        if transaction is not None:
            transactions.append(transaction)
    return transactions


def _column_kind(value: Any) -> str:
    if value in (None, ""):
        return "unknown"
    if isinstance(value, (datetime, date)):
        return "date"
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return "date" if 40_000 < value < 50_000 else "amount"
    text = str(value).strip()
    if YEAR_FIRST.search(text) or DAY_FIRST.search(text):
        return "date"
    if AMOUNT_CELL.match(text):
        return "amount"
    return "text"


def _rows_without_headers(rows: Sequence[Sequence[Any]]) -> list[ParsedTransaction]:
    kinds = [_column_kind(value) for value in rows[1]]
    if "date" not in kinds or "amount" not in kinds:
        logger.debug(f"Could not guess date/amount columns from {kinds}")
        return []

    date_index = kinds.index("date")
    amount_index = kinds.index("amount")
    text_indexes = [i for i, kind in enumerate(kinds) if kind == "text"]
    # Headerless files start with data
    first = 0 if _column_kind(_cell(rows[0], date_index)) == "date" else 1

    transactions = []
    for row in rows[first:]:
        parts = [str(_cell(row, i)).strip() for i in text_indexes if _cell(row, i) not in (None, "")]
        transaction = _row_transaction(
            _cell(row, date_index), _cell(row, amount_index), " - ".join(parts)
        )
        if transaction is not None:
            transactions.append(transaction)
    return transactions


def read_csv(data: bytes) -> list[list[str]]:
    """
    Rows of a CSV file.

    The delimiter is whichever of semicolon, tab or comma the header line
    uses most, since European exports write decimal commas in the body.
    """
    text = data.decode("utf-8-sig", errors="replace")
    header = next((line for line in text.splitlines() if line.strip()), "")
    delimiter = max(CSV_DELIMITERS, key=header.count)
    rows = csv.reader(io.StringIO(text), delimiter=delimiter)
    return [row for row in rows if any(cell.strip() for cell in row)]


def read_excel(data: bytes) -> list[list[Any]]:
    """Rows of the first worksheet of an .xlsx workbook."""
    try:
        workbook = openpyxl.load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as e:
        logger.warning(f"Unreadable Excel upload: {e}")
        raise DocumentParseError("Could not read the Excel file", DocumentKind.EXCEL.value) from e

    try:
        if not workbook.worksheets:
            raise DocumentParseError("The Excel file has no sheets", DocumentKind.EXCEL.value)
        sheet = workbook.worksheets[0]
        return [
            list(row)
            for row in sheet.iter_rows(values_only=True)
            if any(cell not in (None, "") for cell in row)
        ]
    finally:
        workbook.close()


def read_pdf_text(data: bytes) -> str:
    """Selectable text of every page. Scanned PDFs yield little or nothing."""
    try:
        reader = PdfReader(io.BytesIO(data))
        pages = [page.extract_text() or "" for page in reader.pages]
    except PdfReadError as e:
        logger.warning(f"Unreadable PDF upload: {e}")
        raise DocumentParseError("Could not read the PDF file", DocumentKind.PDF.value) from e
    return "\n".join(pages)
