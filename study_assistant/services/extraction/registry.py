"""
Extractor registry and request-level text extraction
"""
import asyncio
import base64
from typing import List, Optional
from loguru import logger

from study_assistant.core.interfaces.text_extractor import TextExtractor
from study_assistant.models.requests import GenerateRequest
from .image_extractor import ImageExtractor
from .pdf_extractor import PDFExtractor
from .docx_extractor import DOCXExtractor
from .plain_text_extractor import PlainTextExtractor


def decode_file_data(file_data: str) -> bytes:
    """
    Decode a transport-encoded payload into raw bytes

    Accepts bare base64 or a ``data:<type>;base64,<payload>`` URL.
    """
    payload = file_data.split(",", 1)[1] if "," in file_data else file_data
    return base64.b64decode(payload)


class ExtractorRegistry:
    """
    Ordered registry of text extractors

    Extractors are tried in registration order and the first whose
    ``supports`` accepts the declared type / filename wins. Default order:
    image (Tesseract), PDF (PyMuPDF), DOCX (python-docx), plain text.
    """

    def __init__(self, extractors: Optional[List[TextExtractor]] = None):
        if extractors is None:
            extractors = [ImageExtractor(), PDFExtractor(), DOCXExtractor(), PlainTextExtractor()]
        self._extractors: List[TextExtractor] = list(extractors)

    def register_extractor(self, extractor: TextExtractor, index: Optional[int] = None):
        """
        Register a custom extractor

        Args:
            extractor: Extractor to add
            index: Position in the lookup order; appended when omitted
        """
        if index is None:
            self._extractors.append(extractor)
        else:
            self._extractors.insert(index, extractor)

    def get_extractor(self, file_type: Optional[str], filename: Optional[str]) -> Optional[TextExtractor]:
        """Return the first matching extractor, or None for unrecognized payloads"""
        file_type = file_type or ""
        for extractor in self._extractors:
            if extractor.supports(file_type, filename):
                return extractor
        return None

    def get_supported_extensions(self) -> List[str]:
        extensions = []
        for extractor in self._extractors:
            extensions.extend(extractor.get_supported_extensions())
        return extensions


class TextExtractionService:
    """
    Turns a GenerateRequest into plain text

    File payloads are decoded and handed to the matching extractor in a worker
    thread so OCR and document parsing never block the event loop. Requests
    without a file, or with an unrecognized file type, fall back to the raw
    ``content`` field.
    """

    def __init__(self, registry: Optional[ExtractorRegistry] = None, timeout_seconds: Optional[float] = None):
        self.registry = registry or ExtractorRegistry()
        self.timeout_seconds = timeout_seconds

    async def extract_text(self, request: GenerateRequest) -> str:
        fallback = request.content or ""

        if not request.file_data:
            return fallback

        data = decode_file_data(request.file_data)
        extractor = self.registry.get_extractor(request.file_type, request.file_name)

        if extractor is None:
            logger.info(
                f"No extractor for type={request.file_type!r} name={request.file_name!r}, using raw content"
            )
            return fallback

        logger.info(f"🔍 Extracting {len(data)} bytes with {type(extractor).__name__}")
        return await asyncio.wait_for(
            asyncio.to_thread(extractor.extract, data, request.file_name),
            timeout=self.timeout_seconds,
        )
