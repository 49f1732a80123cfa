"""
Statement import.

An uploaded statement is parsed into a preview of transactions and each
one is given a category from the user's own list: first by asking the
chat model, then by keyword matching for anything it left out. Nothing is
saved here; the client posts the rows the user keeps.
"""

import json
import logging
import re
from typing import Optional

from modules.categories.interfaces import ICategoryService
from shared.models import EntryType

from .exceptions import (
    AIConfigurationError,
    AIRateLimitedError,
    AIServiceError,
    DocumentParseError,
    DocumentTooLargeError,
)
from .interfaces import IChatProvider, IDocumentImporter, ITextExtractor
from .models import ChatMessage, ChatRole, DocumentImport, ImportMetadata, ParsedTransaction
from .parsers import (
    MIN_PDF_TEXT,
    DocumentKind,
    detect_kind,
    extract_from_text,
    image_media_type,
    read_csv,
    read_excel,
    read_pdf_text,
    rows_to_transactions,
)

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 10 * 1024 * 1024

CATEGORIZE_PROMPT = """You assign categories to bank transactions.

Reply ONLY with valid JSON, no other text, in this exact format:
{"categorizations": [{"index": 0, "category": "Food & Dining"}]}

Rules:
- "index" is the number of the transaction in the list, starting at 0
- "category" must be EXACTLY one of the available category names
- Leave out transactions you can't place
"""

# Default category name -> words that suggest it
CATEGORY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "Food & Dining": (
        "restaurante", "restaurant", "comida", "supermercado", "supermarket",
        "mercadona", "carrefour", "lidl", "aldi", "eroski", "alcampo", "mercado",
        "bar", "cafe", "cafeteria", "pizza", "burger", "mcdonalds", "kfc",
        "telepizza", "dominos", "subway", "starbucks", "panaderia", "bakery",
    ),
    "Shopping": (
        "tienda", "shop", "ropa", "zara", "primark", "bershka", "mango", "amazon",
        "ebay", "aliexpress", "ikea", "decathlon", "mediamarkt", "fnac",
        "el corte ingles",
    ),
    "Transport": (
        "gasolina", "combustible", "fuel", "repsol", "cepsa", "bp", "shell", "galp",
        "taxi", "uber", "cabify", "bolt", "metro", "autobus", "bus", "renfe",
        "parking", "aparcamiento", "peaje", "toll", "taller", "itv",
    ),
    "Bills & Utilities": (
        "luz", "agua", "gas", "electricidad", "electricity", "telefono", "phone",
        "internet", "vodafone", "movistar", "orange", "endesa", "iberdrola",
        "naturgy", "factura", "recibo", "alquiler", "rent", "hipoteca", "mortgage",
    ),
    "Entertainment": (
        "cine", "cinema", "teatro", "theatre", "concierto", "concert", "spotify",
        "netflix", "hbo", "disney", "youtube", "steam", "playstation", "xbox",
        "nintendo", "ocio",
    ),
    "Healthcare": (
        "farmacia", "pharmacy", "medico", "doctor", "hospital", "clinica", "clinic",
        "sanitas", "adeslas", "dentista", "dentist", "optica",
    ),
    "Education": (
        "universidad", "university", "colegio", "escuela", "school", "curso",
        "course", "libro", "book", "academia", "matricula", "tuition",
    ),
    "Salary": ("nomina", "salario", "sueldo", "salary", "payroll"),
    "Freelance": ("freelance", "autonomo", "honorarios", "invoice"),
    "Investments": ("dividendo", "dividend", "interes", "interest", "inversion"),
}


def categorize_with_keywords(
    transactions: list[ParsedTransaction],
    category_names: list[str],
) -> list[ParsedTransaction]:
    """
    Fill in missing categories by matching description words.

    Transactions nothing matches fall into the user's "other" category
    for their type, when there is one.
    """
    available = set(category_names)
    result = []
    for transaction in transactions:
        if transaction.category:
            result.append(transaction)
            continue

        description = transaction.description.lower()
        category: Optional[str] = None
        for name, keywords in CATEGORY_KEYWORDS.items():
            if name in available and any(
                re.search(rf"\b{re.escape(keyword)}\b", description) for keyword in keywords
            ):
                category = name
                break

        if category is None:
            category = _other_category(category_names, transaction.type)
        result.append(transaction.model_copy(update={"category": category}))
    return result


def _other_category(category_names: list[str], entry_type: Optional[EntryType]) -> Optional[str]:
    for name in category_names:
        lowered = name.lower()
        if "other" not in lowered:
            continue
        if ("income" in lowered) == (entry_type == EntryType.INCOME):
            return name
    return None


def _parse_categorizations(reply: str) -> list[dict]:
    """Pull the categorization list out of a model reply, tolerating stray text."""
    match = re.search(r"\{.*\}", reply, re.DOTALL)
    if match is None:
        return []
    # Models sometimes leave trailing commas
    cleaned = re.sub(r",(\s*[}\]])", r"\1", match.group(0))
    try:
        parsed = json.loads(cleaned)
    except ValueError:
        logger.warning("Categorization reply was not valid JSON")
        return []
    items = parsed.get("categorizations", []) if isinstance(parsed, dict) else []
    return [item for item in items if isinstance(item, dict)]


class DocumentImporter(IDocumentImporter):
    """IDocumentImporter over the statement parsers, an OCR step and the chat model."""

    def __init__(
        self,
        provider: IChatProvider,
        text_extractor: ITextExtractor,
        categories: ICategoryService,
        max_file_size: int = MAX_FILE_SIZE,
    ):
        self._provider = provider
        self._text_extractor = text_extractor
        self._categories = categories
        self._max_file_size = max_file_size

    async def import_document(
        self,
        user_id: str,
        filename: str,
        content_type: Optional[str],
        data: bytes,
    ) -> DocumentImport:
        kind = detect_kind(filename, content_type)
        if len(data) > self._max_file_size:
            raise DocumentTooLargeError(len(data), self._max_file_size)

        transactions, method = await self._parse(kind, filename, content_type, data)
        if not transactions:
            raise DocumentParseError("No transactions found in the document", kind.value)

        category_names = [c.name for c in await self._categories.list_categories(user_id)]
        transactions, categorized_by = await self.categorize(transactions, category_names)

        logger.info(
            f"Imported {len(transactions)} transactions from {kind.value} "
            f"for user {user_id} (categorized by {categorized_by})"
        )
        return DocumentImport(
            transactions=transactions,
            metadata=ImportMetadata(
                total_transactions=len(transactions),
                file_type=kind.value,
                parsing_method=method,
                categorized_by=categorized_by,
            ),
        )

    async def _parse(
        self,
        kind: DocumentKind,
        filename: str,
        content_type: Optional[str],
        data: bytes,
    ) -> tuple[list[ParsedTransaction], str]:
        if kind is DocumentKind.CSV:
            return rows_to_transactions(read_csv(data)), "csv"
        if kind is DocumentKind.EXCEL:
            return rows_to_transactions(read_excel(data)), "xlsx"
        if kind is DocumentKind.PDF:
            text = read_pdf_text(data)
            if len(text.strip()) < MIN_PDF_TEXT:
                raise DocumentParseError(
                    "Scanned PDFs are not supported. Please upload a JPG or PNG image instead",
                    kind.value,
                )
            return extract_from_text(text), "text-extraction"

        text = await self._text_extractor.extract_text(data, image_media_type(filename, content_type))
        return extract_from_text(text), "ocr"

    async def categorize(
        self,
        transactions: list[ParsedTransaction],
        category_names: list[str],
    ) -> tuple[list[ParsedTransaction], str]:
        """
        Categorize with the chat model, then keywords for the rest.

        Model failures are logged and leave keyword matching to do all
        the work; the preview is still useful without AI.
        """
        categorized_by = "keywords"
        try:
            transactions = await self._categorize_with_model(transactions, category_names)
            categorized_by = "ai"
        except (AIConfigurationError, AIRateLimitedError, AIServiceError) as e:
            logger.warning(f"AI categorization unavailable, using keywords: {e.message}")
        return categorize_with_keywords(transactions, category_names), categorized_by

    async def _categorize_with_model(
        self,
        transactions: list[ParsedTransaction],
        category_names: list[str],
    ) -> list[ParsedTransaction]:
        listing = "\n".join(
            f"{i}. {t.description} - {t.amount:.2f} ({t.type.value if t.type else 'unknown'})"
            for i, t in enumerate(transactions)
        )
        question = (
            f"Transactions:\n{listing}\n\n"
            f"Available categories:\n{', '.join(category_names)}"
        )
        reply = await self._provider.complete(
            CATEGORIZE_PROMPT, [ChatMessage(role=ChatRole.USER, content=question)]
        )

        available = set(category_names)
        result = list(transactions)
        for item in _parse_categorizations(reply):
            index = item.get("index")
            category = item.get("category")
            if (
                isinstance(index, int)
                and 0 <= index < len(result)
                and isinstance(category, str)
                and category in available
            ):
                result[index] = result[index].model_copy(update={"category": category})
        return result
