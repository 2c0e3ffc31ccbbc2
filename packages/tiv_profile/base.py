from abc import ABC, abstractmethod
from typing import Optional

from packages.tiv_core.dto import DocumentTextDTO


class IDocumentExtractor(ABC):
    """
    Abstract Base Class for resume text extraction.
    """

    @abstractmethod
    def extract(self, document_bytes: bytes, mime_type: Optional[str], filename: Optional[str] = None) -> DocumentTextDTO:
        """
        Extract plain text from an uploaded document.

        Args:
            document_bytes (bytes): Raw file content.
            mime_type (Optional[str]): Content type reported by the client.
            filename (Optional[str]): Original file name, used as a format hint.

        Returns:
            DocumentTextDTO: Extracted text and metadata.

        Raises:
            TIVBaseError: unsupported format, empty document or parser failure.
        """
        pass
