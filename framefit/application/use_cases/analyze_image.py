from __future__ import annotations

from dataclasses import dataclass

from framefit.domain.entities.image_analysis import ImageAnalysis
from framefit.domain.entities.pixel_source import PixelSource
from framefit.domain.services.image_analyzer import ImageAnalyzer


@dataclass
class AnalyzeImageUseCase:
    """
    Analyze a decoded image without targeting any device.

    Decoding happens upstream (see ``decode_image_async``); this use case only
    sees pixels, so it never touches the network or disk.
    """

    analyzer: ImageAnalyzer

    def execute(self, source: PixelSource) -> ImageAnalysis:
        """
        Args:
            source: Decoded RGBA pixels plus encoded byte size and MIME type

        Returns:
            ImageAnalysis for the image

        Raises:
            DecodeError: If the pixel source has invalid dimensions or data
        """
        return self.analyzer.analyze(source)
