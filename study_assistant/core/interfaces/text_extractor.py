"""
Abstract interface for text extractors
"""
from abc import ABC, abstractmethod
from typing import List, Optional


class TextExtractor(ABC):
    """
    Abstract base class for text extractors

    Each file type (image, PDF, DOCX, plain text) implements this interface.
    Implementations are synchronous and CPU bound; callers run them off the
    event loop.
    """

    @abstractmethod
    def extract(self, data: bytes, filename: Optional[str] = None) -> str:
        """
        Convert a raw file payload into plain text

        Args:
            data: Decoded file bytes
            filename: Original filename for logging

        Returns:
            Extracted text, possibly empty
        """
        pass

    @abstractmethod
    def supports(self, file_type: Optional[str], filename: Optional[str]) -> bool:
        """
        Check whether this extractor handles the payload

        Args:
            file_type: Declared media type, if any
            filename: Original filename, if any

        Returns:
            True if supported, False otherwise
        """
        pass

    @abstractmethod
    def get_supported_extensions(self) -> List[str]:
        """Get list of supported file extensions"""
        pass
