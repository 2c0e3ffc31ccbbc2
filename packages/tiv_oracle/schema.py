from typing import Annotated, List, Optional, Union

from pydantic import BaseModel, Field, StrictFloat, StrictInt

from packages.tiv_session.state import Difficulty, QuestionType

# Booleans and numeric strings are schema violations, not scores
ScoreValue = Union[
    Annotated[StrictInt, Field(ge=0, le=10)],
    Annotated[StrictFloat, Field(ge=0, le=10)],
]


class RawQuestion(BaseModel):
    """
    Question as returned by the oracle.
    Field names follow the JSON contract given in the generation prompt.
    """
    id: Optional[int] = None
    text: str = Field(..., min_length=1)
    difficulty: Difficulty
    type: QuestionType
    options: Optional[List[str]] = None
    answer: Optional[str] = None
    time: Optional[int] = None


class SubjectiveScore(BaseModel):
    """
    Oracle grading of one free-text answer.
    """
    score: ScoreValue = Field(..., description="Score 0-10, fractional allowed")
    rationale: str = Field(..., description="Reasoning for the score")
