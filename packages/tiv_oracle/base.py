from abc import ABC, abstractmethod


class IOracleProvider(ABC):
    """
    External Question/Scoring Oracle.
    Implementations return the raw text payload and may raise on any failure;
    OracleClient absorbs both.
    """

    @abstractmethod
    async def generate(self, role: str) -> str:
        """
        Generate a raw question-set payload (JSON array text) for a role.
        """
        pass

    @abstractmethod
    async def score_text(self, question_text: str, answer_text: str) -> str:
        """
        Grade a free-text answer. Returns raw JSON text {"score", "rationale"}.
        """
        pass

    @abstractmethod
    async def summarize(self, transcript: str, final_score: int) -> str:
        """
        Produce a short plain-text performance summary.
        """
        pass
