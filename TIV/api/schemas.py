from typing import List, Optional

from pydantic import Field

from packages.tiv_core.dto import CamelDTO
from packages.tiv_dto.session import QuestionDTO

# --- Request Schemas ---

class GenerateQuestionsRequest(CamelDTO):
    candidate_id: str = Field(..., min_length=1)
    role: Optional[str] = None

class SaveAnswerRequest(CamelDTO):
    candidate_id: str = Field(..., min_length=1)
    question_id: int
    answer: str
    auto_submitted: bool = False
    time_taken: Optional[float] = Field(None, ge=0)

class ScoreRequest(CamelDTO):
    candidate_id: str = Field(..., min_length=1)

class ProfileSchema(CamelDTO):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)

class CompleteProfileRequest(CamelDTO):
    candidate_id: str = Field(..., min_length=1)
    profile: ProfileSchema

# --- Response Schemas ---

class GenerateQuestionsResponse(CamelDTO):
    questions: List[QuestionDTO]

class OkResponse(CamelDTO):
    ok: bool = True

class ResumeParseResponse(CamelDTO):
    name: str
    email: str
    phone: str
    success: bool = True
