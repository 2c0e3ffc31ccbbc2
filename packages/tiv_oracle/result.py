from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class OracleResult(Generic[T]):
    """
    Tagged outcome of one oracle interaction: ok(payload) or err(reason).
    Stages of the client never raise, they return err instead.
    """
    def __init__(self, payload: Optional[T], success: bool, error: Optional[str] = None):
        self.payload = payload
        self.success = success
        self.error = error

    @classmethod
    def ok(cls, payload: T) -> "OracleResult[T]":
        return cls(payload, True)

    @classmethod
    def err(cls, reason: str) -> "OracleResult[T]":
        return cls(None, False, reason)

    def unwrap_or(self, fallback: T) -> T:
        return self.payload if self.success else fallback

    def __repr__(self) -> str:
        if self.success:
            return f"OracleResult.ok({self.payload!r})"
        return f"OracleResult.err({self.error!r})"
