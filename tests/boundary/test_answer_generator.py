"""Tests for prompt construction and the Gemini answer generator."""

from unittest.mock import patch

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from navigator.boundary.llm.answer_generator import GeminiAnswerGenerator
from navigator.boundary.llm.rag_prompt import NOT_FOUND_ANSWER, RAG_PROMPT
from navigator.core.exceptions import GenerationError

CHAT_MODEL_PATH = "navigator.boundary.llm.answer_generator.ChatGoogleGenerativeAI"


class TestRagPrompt:
    """Test the context-grounded prompt."""

    def test_prompt_should_embed_context_and_question(self) -> None:
        messages = RAG_PROMPT.format_messages(context="cats are mammals", question="What are cats?")

        assert "cats are mammals" in messages[0].content
        assert NOT_FOUND_ANSWER in messages[0].content
        assert messages[1].content == "What are cats?"


class TestGeminiAnswerGenerator:
    """Test generation with the chat model replaced by a fake."""

    def test_generate_should_return_model_text(self) -> None:
        fake = FakeListChatModel(responses=["Cats are mammals."])

        with patch(CHAT_MODEL_PATH, return_value=fake) as mock_cls:
            answer = GeminiAnswerGenerator(default_credential="server-key").generate(
                "What are cats?", "cats are mammals"
            )

        assert answer == "Cats are mammals."
        assert mock_cls.call_args.kwargs["google_api_key"] == "server-key"
        assert mock_cls.call_args.kwargs["temperature"] == 0.0

    def test_request_credential_should_override_default(self) -> None:
        fake = FakeListChatModel(responses=["ok"])

        with patch(CHAT_MODEL_PATH, return_value=fake) as mock_cls:
            GeminiAnswerGenerator(default_credential="server-key").generate("q", "c", credential="user-key")

        assert mock_cls.call_args.kwargs["google_api_key"] == "user-key"

    def test_model_failure_should_raise_generation_error(self) -> None:
        with patch(CHAT_MODEL_PATH, side_effect=RuntimeError("quota exceeded")):
            with pytest.raises(GenerationError, match="quota exceeded"):
                GeminiAnswerGenerator().generate("q", "c")
