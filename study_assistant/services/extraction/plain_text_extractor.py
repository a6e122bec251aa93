"""
Plain text passthrough
"""
from typing import List, Optional

from study_assistant.core.interfaces.text_extractor import TextExtractor


class PlainTextExtractor(TextExtractor):
    """Decodes ``text/plain`` payloads as UTF-8, invalid bytes become U+FFFD"""

    MEDIA_TYPE = "text/plain"

    def __init__(self):
        self.supported_extensions = ["txt"]

    def extract(self, data: bytes, filename: Optional[str] = None) -> str:
        return data.decode("utf-8", errors="replace")

    def supports(self, file_type: Optional[str], filename: Optional[str]) -> bool:
        if file_type == self.MEDIA_TYPE:
            return True
        return bool(filename) and filename.endswith(".txt")

    def get_supported_extensions(self) -> List[str]:
        return self.supported_extensions.copy()
