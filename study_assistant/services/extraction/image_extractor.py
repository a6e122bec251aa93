"""
Image OCR using Tesseract

Recognizes printed text in photographed or scanned pages. Output quality
depends entirely on the image; there is no confidence threshold.
"""
import io
import re
from typing import List, Optional
import pytesseract
from PIL import Image
from loguru import logger

from study_assistant.core.interfaces.text_extractor import TextExtractor


class ImageExtractor(TextExtractor):
    """
    Image extractor running Tesseract OCR over a Pillow image

    Features:
    - JPEG and PNG input
    - Optional language packs (e.g. ``eng+urd``)
    """

    IMAGE_NAME_PATTERN = re.compile(r"\.(jpg|jpeg|png)$", re.IGNORECASE)

    def __init__(self, languages: str = "eng"):
        """
        Initialize image extractor

        Args:
            languages: Tesseract language string passed as ``lang``
        """
        self.languages = languages
        self.supported_extensions = ["png", "jpg", "jpeg"]

    def extract(self, data: bytes, filename: Optional[str] = None) -> str:
        image = Image.open(io.BytesIO(data))
        logger.info(f"🖼️ Running OCR on {filename}: {image.size[0]}x{image.size[1]} {image.format} {image.mode}")

        text = pytesseract.image_to_string(image, lang=self.languages)
        if not text.strip():
            logger.warning(f"OCR returned no text for {filename}")
        else:
            logger.debug(f"📝 OCR extracted {len(text)} characters from {filename}")
        return text

    def supports(self, file_type: Optional[str], filename: Optional[str]) -> bool:
        if file_type and "image" in file_type:
            return True
        return bool(filename) and bool(self.IMAGE_NAME_PATTERN.search(filename))

    def get_supported_extensions(self) -> List[str]:
        return self.supported_extensions.copy()
