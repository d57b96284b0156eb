from abc import ABC, abstractmethod


class BaseContentExtractor(ABC):
    """Contract for all report content extraction adapters."""

    @abstractmethod
    def extract(self, data: bytes) -> str:
        """Convert raw report bytes into normalized content.

        Args:
            data: Raw file content.

        Returns:
            Content as a single normalized string (markup or plain text).

        Raises:
            ExtractionError: if extraction fails for any reason.
        """
