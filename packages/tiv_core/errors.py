from typing import Optional, Dict, Any


class TIVBaseError(Exception):
    """
    Root exception for the interview backend.
    Every custom exception must inherit from this class.

    Attributes:
        code (str): machine readable error code (e.g. 'SESSION_NOT_FOUND')
        message (str): human readable message
        status_code (int): HTTP status the API layer maps this error to
        details (Dict[str, Any]): extra debugging information
    """
    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_SERVER_ERROR",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(f"[{code}] {message}")


class ConfigurationError(TIVBaseError):
    """Raised when environment configuration cannot be loaded or validated."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONF_ERROR", status_code=500, details=details)


class NotFoundError(TIVBaseError):
    """The referenced candidate has no session."""
    def __init__(self, candidate_id: str):
        super().__init__(
            f"Candidate '{candidate_id}' not found",
            code="SESSION_NOT_FOUND",
            status_code=404,
            details={"candidate_id": candidate_id},
        )


class MalformedInputError(TIVBaseError):
    """Missing or invalid caller supplied fields."""
    def __init__(self, message: str = "Missing fields", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="MALFORMED_INPUT", status_code=400, details=details)


class ConflictError(TIVBaseError):
    """The operation is not allowed in the session's current state."""
    def __init__(self, message: str = "Conflict occurred", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONFLICT", status_code=409, details=details)


class AnswerDeadlineExceededError(ConflictError):
    """A manual answer arrived after the question's server-side deadline."""
    def __init__(self, question_id: int, late_by_sec: float):
        super().__init__(
            f"Answer for question {question_id} arrived after its deadline",
            details={"question_id": question_id, "late_by_sec": round(late_by_sec, 1)},
        )
        self.code = "ANSWER_DEADLINE_EXCEEDED"


# -------------------------------------------------------------------------
# Document extraction errors
# -------------------------------------------------------------------------
class UnsupportedDocumentError(TIVBaseError):
    def __init__(self, mime_type: Optional[str]):
        super().__init__(
            "Unsupported file format",
            code="INVALID_FILE_FORMAT",
            status_code=400,
            details={"mime_type": mime_type},
        )


class DocumentTooLargeError(TIVBaseError):
    def __init__(self, limit_bytes: int):
        super().__init__(
            f"File exceeds {limit_bytes // (1024 * 1024)}MB limit",
            code="FILE_TOO_LARGE",
            status_code=400,
            details={"limit_bytes": limit_bytes},
        )


class EmptyDocumentError(TIVBaseError):
    def __init__(self):
        super().__init__(
            "Could not extract text from resume",
            code="NO_TEXT_FOUND",
            status_code=400,
        )


class DocumentProcessingError(TIVBaseError):
    def __init__(self, message: str = "Failed to parse resume"):
        super().__init__(message, code="DOCUMENT_PROCESSING_ERROR", status_code=500)
