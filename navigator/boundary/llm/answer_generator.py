"""
Answer generation step.

Turns {question, context} into an answer with a Gemini chat model.

Dependencies: langchain_google_genai, langchain_core, navigator.boundary.llm.rag_prompt
System role: Generation adapter called by the query pipeline
"""

import logging
from abc import ABC, abstractmethod

from langchain_google_genai import ChatGoogleGenerativeAI

from navigator.boundary.llm.rag_prompt import RAG_PROMPT
from navigator.core.exceptions import GenerationError

logger = logging.getLogger(__name__)


class AnswerGenerator(ABC):
    """Abstract generation step."""

    @abstractmethod
    def generate(self, question: str, context: str, credential: str | None = None) -> str:
        """Answer question using only context."""


class GeminiAnswerGenerator(AnswerGenerator):
    """Context-grounded answers from ChatGoogleGenerativeAI."""

    def __init__(
        self,
        model_id: str = "gemini-2.5-flash",
        temperature: float = 0.0,
        max_output_tokens: int = 1024,
        default_credential: str | None = None,
    ) -> None:
        self._model_id = model_id
        self._temperature = temperature
        self._max_output_tokens = max_output_tokens
        self._default_credential = default_credential

    def _create_model(self, credential: str | None) -> ChatGoogleGenerativeAI:
        key = credential or self._default_credential
        kwargs = {"google_api_key": key} if key else {}
        return ChatGoogleGenerativeAI(
            model=self._model_id,
            temperature=self._temperature,
            max_output_tokens=self._max_output_tokens,
            **kwargs,
        )

    def generate(self, question: str, context: str, credential: str | None = None) -> str:
        """
        Generate an answer grounded in context.

        Args:
            question: User question
            context: Retrieved fragment texts, blank-line separated
            credential: API key for the chat model

        Returns:
            str: Model answer

        Raises:
            GenerationError: When the chat model call fails
        """
        try:
            chain = RAG_PROMPT | self._create_model(credential)
            message = chain.invoke({"question": question, "context": context})
        except Exception as e:
            logger.error(f"{__name__}:generate - {type(e).__name__}: {e}")
            raise GenerationError(
                f"Error generating chat completion: {e}",
                details={"model": self._model_id},
            ) from e

        content = message.content
        if isinstance(content, list):
            content = "".join(
                part.get("text", "") if isinstance(part, dict) else str(part) for part in content
            )
        return content
