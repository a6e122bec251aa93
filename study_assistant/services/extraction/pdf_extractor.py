"""
PDF text extraction using PyMuPDF
"""
from typing import List, Optional
import fitz  # PyMuPDF
from loguru import logger

from study_assistant.core.interfaces.text_extractor import TextExtractor


class PDFExtractor(TextExtractor):
    """
    PDF extractor reading the embedded text layer with PyMuPDF

    Scanned PDFs without a text layer produce an empty string rather than an
    error; OCR is not attempted on PDF pages.
    """

    MEDIA_TYPE = "application/pdf"

    def __init__(self):
        self.supported_extensions = ["pdf"]

    def extract(self, data: bytes, filename: Optional[str] = None) -> str:
        pdf_doc = fitz.open(stream=data, filetype="pdf")
        try:
            total_pages = len(pdf_doc)
            logger.info(f"📄 Extracting PDF text with PyMuPDF: {filename} ({total_pages} pages)")

            pages = []
            for page_num in range(total_pages):
                page_text = pdf_doc[page_num].get_text()
                if page_text.strip():
                    pages.append(page_text)
        finally:
            pdf_doc.close()

        text = "\n".join(pages)
        if not text.strip():
            logger.warning(f"PDF {filename} has no text layer")
        return text

    def supports(self, file_type: Optional[str], filename: Optional[str]) -> bool:
        if file_type == self.MEDIA_TYPE:
            return True
        return bool(filename) and filename.endswith(".pdf")

    def get_supported_extensions(self) -> List[str]:
        return self.supported_extensions.copy()
