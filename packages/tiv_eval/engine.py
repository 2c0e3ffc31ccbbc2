import logging
from typing import List

from packages.tiv_oracle.client import OracleClient
from packages.tiv_session.dto import Question, Answer, ScoreDetail, ScoreReport
from packages.tiv_session.state import QuestionType, AnswerOutcome
from .rules import grade_mcq, final_score_percent, POINTS_PER_QUESTION

logger = logging.getLogger("TIV.eval")

NO_ANSWER_RATIONALE = "No answer provided"


class ScoringEngine:
    """
    Grades a question set against the recorded answers.
    MCQs are graded locally, subjective answers through the oracle,
    sequentially in question order. Only the first answer per question counts.
    """
    def __init__(self, oracle: OracleClient):
        self.oracle = oracle

    async def score(self, questions: List[Question], answers: List[Answer]) -> ScoreReport:
        details: List[ScoreDetail] = []
        total = 0.0

        for q in questions:
            given = next((a for a in answers if a.question_id == q.id), None)

            if q.type == QuestionType.MCQ:
                points = grade_mcq(given.text if given else None, q.correct_answer)
                detail = ScoreDetail(
                    question_id=q.id,
                    question=q.text,
                    type=q.type,
                    result=AnswerOutcome.CORRECT if points else AnswerOutcome.WRONG,
                    score=points,
                    correct_answer=None if points else q.correct_answer,
                )
            elif given and given.text:
                graded = await self.oracle.score_subjective(q.text, given.text)
                detail = ScoreDetail(
                    question_id=q.id,
                    question=q.text,
                    type=q.type,
                    result=AnswerOutcome.AI_SCORED,
                    score=graded.score,
                    rationale=graded.rationale,
                )
            else:
                detail = ScoreDetail(
                    question_id=q.id,
                    question=q.text,
                    type=q.type,
                    result=AnswerOutcome.NO_ANSWER,
                    score=0,
                    rationale=NO_ANSWER_RATIONALE,
                )

            total += detail.score
            details.append(detail)

        percent = final_score_percent(total, len(questions))
        logger.info(f"Graded {len(questions)} questions: {total}/{len(questions) * POINTS_PER_QUESTION} -> {percent}%")

        return ScoreReport(
            score=percent,
            total_points=total,
            max_points=len(questions) * POINTS_PER_QUESTION,
            details=details,
        )
