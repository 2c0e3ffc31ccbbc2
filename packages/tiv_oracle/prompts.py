from typing import List

from packages.tiv_session.dto import Question, Answer

QUESTION_SET_PROMPT = """
Generate exactly 6 interview questions for a {role} role.
Format: JSON array.
Rules:
- 2 easy MCQs (time: 20s)
- 2 medium MCQs (time: 60s)
- 2 hard questions (mix: at least 1 subjective, at most 1 MCQ) (time: 120s)
- Each question object must have:
  {{ "id": number, "text": string, "difficulty": "easy|medium|hard",
    "type": "mcq|subjective", "options"?: [string], "answer"?: string, "time": number }}
- For MCQs "answer" must be exactly one of "options".
Only output valid JSON.
"""

SUBJECTIVE_SCORE_PROMPT = """
You are an interviewer.
Question: {question}
Candidate's answer: {answer}
Score this answer from 0-10 and explain briefly why.
Respond strictly in JSON:
{{ "score": number, "rationale": string }}
"""

SUMMARY_PROMPT = """
You are an interviewer. Based on this interview performance:

{transcript}

Final Score: {final_score}%

Write a brief 2-3 sentence summary of the candidate's performance, highlighting strengths and areas for improvement.
Respond in plain text (not JSON).
"""

NO_ANSWER_TEXT = "No answer"


def build_transcript(questions: List[Question], answers: List[Answer]) -> str:
    """Q/A transcript using the first recorded answer for every question."""
    blocks = []
    for i, q in enumerate(questions):
        given = next((a for a in answers if a.question_id == q.id), None)
        text = given.text if given and given.text else NO_ANSWER_TEXT
        blocks.append(f"Q{i + 1}: {q.text}\nAnswer: {text}")
    return "\n\n".join(blocks)


def clean_json_string(json_str: str) -> str:
    """
    Strip markdown code fences from a JSON payload.
    """
    if "```json" in json_str:
        json_str = json_str.split("```json")[1].split("```")[0]
    elif "```" in json_str:
        json_str = json_str.split("```")[1].split("```")[0]
    return json_str.strip()
