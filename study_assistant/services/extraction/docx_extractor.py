"""
Word document text extraction
"""
import io
from typing import List, Optional
from docx import Document
from docx.table import Table
from loguru import logger

from study_assistant.core.interfaces.text_extractor import TextExtractor


class DOCXExtractor(TextExtractor):
    """
    DOCX extractor that returns raw text from Word documents

    Paragraphs and tables are read in document order, table rows rendered
    as ``a | b | c``. All formatting is discarded.
    """

    MEDIA_TYPE_MARKER = "officedocument.wordprocessingml.document"

    def __init__(self):
        self.supported_extensions = ["docx"]

    def extract(self, data: bytes, filename: Optional[str] = None) -> str:
        doc = Document(io.BytesIO(data))
        logger.info(f"📄 Extracting DOCX text: {filename}")

        parts = []
        for block in doc.iter_inner_content():
            if isinstance(block, Table):
                text = self._extract_table_text(block).rstrip("\n")
            else:
                text = block.text
            if text.strip():
                parts.append(text)

        return "\n".join(parts)

    def supports(self, file_type: Optional[str], filename: Optional[str]) -> bool:
        if file_type and self.MEDIA_TYPE_MARKER in file_type:
            return True
        return bool(filename) and filename.endswith(".docx")

    def get_supported_extensions(self) -> List[str]:
        return self.supported_extensions.copy()

    def _extract_table_text(self, table) -> str:
        """
        Extract text from a table

        Args:
            table: Python-docx table object

        Returns:
            One line per non-empty row, cells joined by ``|``
        """
        table_text = ""

        for row in table.rows:
            row_text = [cell.text.strip() for cell in row.cells]
            if any(cell for cell in row_text):  # Skip empty rows
                table_text += " | ".join(row_text) + "\n"

        return table_text
