import io
import time
from typing import Optional

import docx
from pypdf import PdfReader

from packages.tiv_core.dto import DocumentTextDTO
from packages.tiv_core.errors import (
    TIVBaseError,
    UnsupportedDocumentError,
    EmptyDocumentError,
    DocumentProcessingError,
)
from packages.tiv_core.logging import get_logger
from packages.tiv_profile.base import IDocumentExtractor

PDF_MIME = "application/pdf"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class LocalDocumentExtractor(IDocumentExtractor):
    """
    Local resume text extractor.
    PDF through pypdf, DOCX through python-docx.
    """

    def __init__(self):
        self.logger = get_logger("TIV.provider.document.local")

    def extract(self, document_bytes: bytes, mime_type: Optional[str], filename: Optional[str] = None) -> DocumentTextDTO:
        start_time = time.time()
        kind = self._detect(mime_type, filename)

        try:
            if kind == "pdf":
                text, pages = self._extract_pdf(document_bytes)
            else:
                text, pages = self._extract_docx(document_bytes)
        except TIVBaseError:
            raise
        except Exception as e:
            self.logger.exception(f"Unexpected error during {kind} extraction. File: {filename}")
            raise DocumentProcessingError() from e

        if not text.strip():
            self.logger.warning(f"Document Validation Failed: no text found. File: {filename}")
            raise EmptyDocumentError()

        latency_ms = int((time.time() - start_time) * 1000)
        self.logger.info(f"Document Extraction Success. Kind: {kind}, Chars: {len(text)}, Time: {latency_ms}ms")

        return DocumentTextDTO(
            text=text,
            mime_type=PDF_MIME if kind == "pdf" else DOCX_MIME,
            metadata={
                "pages": pages,
                "file_size_bytes": len(document_bytes),
                "extraction_method": "pypdf" if kind == "pdf" else "python-docx",
                "latency_ms": latency_ms,
            },
        )

    @staticmethod
    def _detect(mime_type: Optional[str], filename: Optional[str]) -> str:
        if mime_type == PDF_MIME:
            return "pdf"
        if mime_type == DOCX_MIME or (filename or "").lower().endswith(".docx"):
            return "docx"
        raise UnsupportedDocumentError(mime_type)

    @staticmethod
    def _extract_pdf(document_bytes: bytes):
        reader = PdfReader(io.BytesIO(document_bytes))
        if reader.is_encrypted:
            raise DocumentProcessingError("Encrypted PDF files are not supported.")
        texts = [(page.extract_text() or "").strip() for page in reader.pages]
        return "\n".join(t for t in texts if t), len(reader.pages)

    @staticmethod
    def _extract_docx(document_bytes: bytes):
        document = docx.Document(io.BytesIO(document_bytes))
        return "\n".join(p.text for p in document.paragraphs), None
