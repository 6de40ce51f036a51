"""
Base detector interface.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from img2ppt.models import SourceImage, TextElement


class BaseDetector(ABC):
    """Abstract base class for text detection and background cleaning services."""

    def __init__(self, config: Optional[dict] = None):
        self.config = config or {}
        self.name = self.__class__.__name__.replace("Detector", "").lower()

    @abstractmethod
    def detect(self, image: SourceImage) -> List[TextElement]:
        """
        Detect all text elements in a slide image.

        Args:
            image: Source slide image

        Returns:
            Text elements in paint order

        Raises:
            DetectionError: If the service fails
        """
        pass

    @abstractmethod
    def clean_background(self, image: SourceImage) -> bytes:
        """
        Produce a copy of the image with all text removed.

        Args:
            image: Source slide image

        Returns:
            Encoded image bytes (PNG)

        Raises:
            BackgroundCleaningError: If no background could be produced
        """
        pass
