from enum import Enum
from abc import ABC, abstractmethod


class RegenerationMode(str, Enum):
    """
    What happens when question generation is requested again
    for a session that is already in progress.
    """
    REJECT = "REJECT"
    OVERWRITE = "OVERWRITE"


class SessionPolicy(ABC):
    """
    Defines "what is allowed" in a session.
    The engine consults the policy, the policy never changes engine state.
    """

    @abstractmethod
    def can_regenerate_questions(self) -> bool:
        """Can an in-progress session receive a fresh question set?"""
        pass

    @abstractmethod
    def enforces_deadlines(self) -> bool:
        """Are late manual answers rejected server-side?"""
        pass

    @property
    @abstractmethod
    def deadline_grace_sec(self) -> float:
        pass


class _BasePolicy(SessionPolicy):
    def __init__(self, enforce_deadlines: bool = False, deadline_grace_sec: float = 5.0):
        self._enforce_deadlines = enforce_deadlines
        self._grace = deadline_grace_sec

    def enforces_deadlines(self) -> bool:
        return self._enforce_deadlines

    @property
    def deadline_grace_sec(self) -> float:
        return self._grace


class StrictSessionPolicy(_BasePolicy):
    """
    Regeneration mid-interview is refused so answered progress is never discarded.
    """
    def can_regenerate_questions(self) -> bool:
        return False


class OverwriteSessionPolicy(_BasePolicy):
    """
    Regeneration replaces the question set and clears answers.
    """
    def can_regenerate_questions(self) -> bool:
        return True


def get_policy(
    mode: RegenerationMode,
    enforce_deadlines: bool = False,
    deadline_grace_sec: float = 5.0,
) -> SessionPolicy:
    """Factory to get policy instance."""
    if mode == RegenerationMode.REJECT:
        return StrictSessionPolicy(enforce_deadlines, deadline_grace_sec)
    elif mode == RegenerationMode.OVERWRITE:
        return OverwriteSessionPolicy(enforce_deadlines, deadline_grace_sec)
    else:
        raise ValueError(f"Unknown mode: {mode}")
