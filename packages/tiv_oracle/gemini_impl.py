import time
import warnings

import google.generativeai as genai

from packages.tiv_core.config import TIVConfig
from packages.tiv_core.logging import get_logger
from .base import IOracleProvider
from .prompts import QUESTION_SET_PROMPT, SUBJECTIVE_SCORE_PROMPT, SUMMARY_PROMPT

# Suppress Google GenAI FutureWarnings
warnings.filterwarnings("ignore", category=FutureWarning, module="google.generativeai")
warnings.filterwarnings("ignore", category=FutureWarning, module="google.api_core")


class GeminiOracleProvider(IOracleProvider):
    """
    Oracle backed by Google Gemini.
    Exceptions from the SDK propagate; the OracleClient turns them into fallbacks.
    """
    def __init__(self, config: TIVConfig):
        self.logger = get_logger("TIV.provider.oracle.gemini")
        if not config.GEMINI_API_KEY:
            self.logger.error("GEMINI_API_KEY is missing. Please set it in .env file.")
        else:
            genai.configure(api_key=config.GEMINI_API_KEY)
        self.model_name = config.ORACLE_MODEL
        self.model = genai.GenerativeModel(self.model_name)

    async def _generate(self, prompt: str, generation_config: genai.GenerationConfig) -> str:
        start_time = time.time()
        response = await self.model.generate_content_async(prompt, generation_config=generation_config)
        latency_ms = int((time.time() - start_time) * 1000)
        self.logger.info(f"Gemini call finished. Model: {self.model_name}, Time: {latency_ms}ms")
        return response.text

    async def generate(self, role: str) -> str:
        return await self._generate(
            QUESTION_SET_PROMPT.format(role=role),
            genai.GenerationConfig(
                response_mime_type="application/json",
                max_output_tokens=800,
                temperature=0.7,
            ),
        )

    async def score_text(self, question_text: str, answer_text: str) -> str:
        return await self._generate(
            SUBJECTIVE_SCORE_PROMPT.format(question=question_text, answer=answer_text),
            genai.GenerationConfig(
                response_mime_type="application/json",
                max_output_tokens=300,
                temperature=0,
            ),
        )

    async def summarize(self, transcript: str, final_score: int) -> str:
        return await self._generate(
            SUMMARY_PROMPT.format(transcript=transcript, final_score=final_score),
            genai.GenerationConfig(
                max_output_tokens=200,
                temperature=0.7,
            ),
        )
