# blogfusion_server/core/assistant.py

import logging
from fastapi import Request
from langchain_core.prompts import ChatPromptTemplate
from langchain_openai import ChatOpenAI
from blogfusion_server.core.errors import UpstreamError, ValidationError
from blogfusion_server.models import AIWritingRequest, AIWritingResponse, WRITING_ACTIONS


logger = logging.getLogger(__name__)

DEFAULT_TONE = "professional"


# -------------------------------
# Prompt Templates
# -------------------------------

PROMPTS = {
    "improve": ChatPromptTemplate.from_messages([
        ("system",
         "You are a professional writing editor. Improve the given text by fixing grammar, "
         "enhancing clarity, and making it more engaging. Maintain the original meaning and {tone} tone."),
        ("human", "Please improve this text:\n\n{content}"),
    ]),
    "expand": ChatPromptTemplate.from_messages([
        ("system",
         "You are a creative writing assistant. Expand the given text by adding more details, "
         "examples, and depth while maintaining a {tone} tone."),
        ("human", "Please expand this text with more details:\n\n{content}"),
    ]),
    "summarize": ChatPromptTemplate.from_messages([
        ("system",
         "You are a skilled summarizer. Create a concise summary of the given text while "
         "preserving key points and maintaining a {tone} tone."),
        ("human", "Please summarize this text:\n\n{content}"),
    ]),
}


class WritingAssistant:
    """
    Turns a draft plus an action into one chat-model call.

    Holds no state between calls. The chat model is built lazily from the
    settings unless one is passed in (anything with an `invoke(messages)`
    method returning an object with `.content`).
    """

    def __init__(self, llm=None, model: str = "gpt-4o-mini", max_tokens: int = 2048, timeout: float = 60):
        self._llm = llm
        self.model = model
        self.max_tokens = max_tokens
        self.timeout = timeout

    @property
    def llm(self):
        if self._llm is None:
            self._llm = ChatOpenAI(
                model=self.model,
                max_tokens=self.max_tokens,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._llm

    def build_messages(self, request: AIWritingRequest):
        if not request.content or not request.content.strip():
            raise ValidationError("Content is required")
        if request.action not in PROMPTS:
            raise ValidationError(f"Action must be one of: {', '.join(WRITING_ACTIONS)}")

        tone = request.tone or DEFAULT_TONE
        return PROMPTS[request.action].format_messages(tone=tone, content=request.content)

    def assist(self, request: AIWritingRequest) -> AIWritingResponse:
        messages = self.build_messages(request)

        try:
            response = self.llm.invoke(messages)
            suggestion = response.content
        except Exception:
            logger.exception("AI assistance request failed (action=%s)", request.action)
            raise UpstreamError()

        if not isinstance(suggestion, str):
            logger.error("AI assistance returned a malformed response (action=%s)", request.action)
            raise UpstreamError()

        return AIWritingResponse(suggestion=suggestion.strip(), action=request.action)


def get_assistant(request: Request) -> WritingAssistant:
    return request.app.state.assistant
