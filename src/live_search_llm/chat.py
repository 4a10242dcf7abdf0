"""Search-augmented chat turn.

A turn asks the model for search keywords, looks them up on DuckDuckGo's
instant-answer API and answers with whatever context came back.
"""

import json
from typing import Any

from pydantic import ValidationError
from pydantic.dataclasses import dataclass

from live_search_llm.client.ollama import OllamaClient, parse_model_names
from live_search_llm.client.search import SearchClient
from live_search_llm.config import get_settings
from live_search_llm.result import Err, Ok, OperationResult
from live_search_llm.utils import logging

logger = logging.get_logger(__name__)

KEYWORD_PROMPT = """Create search keywords for this query. Output only comma-separated keywords, nothing else.

Query: "{query}"
Keywords:"""

MAX_KEYWORDS = 3
SUMMARY_CHARS = 500
MIN_SUMMARY_CHARS = 50


@dataclass
class Message:
    role: str
    content: str

    @property
    def is_status(self) -> bool:
        # placeholders such as "*Thinking...*"
        return self.content.startswith("*") and self.content.endswith("*")


def history_prompt(messages: list[Message], message: str) -> str:
    history = "".join(f"{m.role}: {m.content}\n\n" for m in messages if not m.is_status)
    return f"Conversation history:\n{history}\nCurrent user message: {message}\n\nAssistant response:"


def keywords_to_query(keywords: str) -> str:
    return " ".join(k.strip() for k in keywords.split(",")[:MAX_KEYWORDS])


def instant_answer_context(body: str, query: str) -> str | None:
    """Pick the most useful text out of a DuckDuckGo instant-answer reply, None when it is not JSON."""
    try:
        data: Any = json.loads(body)
    except json.JSONDecodeError:
        logger.warning("DuckDuckGo reply is not JSON: %.80s", body)
        return None

    def field(key: str) -> str:
        value = data.get(key) if isinstance(data, dict) else None
        return value.strip() if isinstance(value, str) else ""

    if field("AbstractText"):
        return data["AbstractText"]
    if field("Answer"):
        return data["Answer"]
    if field("Definition"):
        source = field("DefinitionSource")
        return data["Definition"] + (f" (Source: {source})" if source else "")

    summary = json.dumps(data, separators=(",", ":"))[:SUMMARY_CHARS]
    if len(summary) > MIN_SUMMARY_CHARS:
        return f"DuckDuckGo search results summary: {summary}..."
    logger.debug("No instant answer for %r", query)
    return f'No instant answers available, but search query completed for "{query}".'


class LiveSearchChat:
    def __init__(
        self,
        model: str | None = None,
        ollama: OllamaClient | None = None,
        search: SearchClient | None = None,
        enable_search: bool = True,
        history_limit: int | None = None,
    ) -> None:
        settings = get_settings()
        self.model = model
        self.ollama = ollama or OllamaClient()
        self.search = search or SearchClient()
        self.enable_search = enable_search
        self.history_limit = history_limit if history_limit is not None else settings.history_limit
        self.default_model = settings.default_model
        self.messages: list[Message] = []

    async def ensure_model(self) -> OperationResult:
        """Select the first installed model, pulling the default one when none is installed."""
        listed = await self.ollama.list_models()
        if isinstance(listed, Err):
            return listed
        try:
            names = parse_model_names(str(listed.value))
        except ValidationError as e:
            return Err(f"Unexpected model list: {e.error_count()} errors")
        if names:
            self.model = self.model or names[0]
            return Ok(self.model)

        logger.info("No models installed, pulling %s", self.default_model)
        pulled = await self.ollama.pull_model(self.default_model)
        if isinstance(pulled, Err):
            return pulled
        self.model = self.default_model
        return Ok(self.model)

    async def search_query(self, message: str) -> str:
        result = await self.ollama.generate_response(self.model, KEYWORD_PROMPT.format(query=message))
        if isinstance(result, Err):
            logger.warning("Keyword generation failed, using original query: %s", result.message)
            return message
        query = keywords_to_query(str(result.value))
        logger.debug("Generated search keywords: %s", query)
        return query or message

    async def context(self, message: str) -> list[str]:
        query = await self.search_query(message)
        result = await self.search.search_web(query)
        if isinstance(result, Err):
            logger.warning("DuckDuckGo search failed: %s", result.message)
            return []
        text = instant_answer_context(str(result.value), query)
        if text is None:
            return []
        return [f"DuckDuckGo: {text}"]

    async def build_prompt(self, message: str) -> str:
        recent = [*self.messages, Message(role="user", content=message)]
        recent = recent[max(len(recent) - self.history_limit, 0) :]
        prompt = history_prompt(recent, message)
        if not self.enable_search:
            return prompt

        parts = await self.context(message)
        if parts:
            return "Based on this context:\n{}\n\nAnswer: {}".format("\n\n".join(parts), message)
        return f"{prompt} (No search context available)"

    async def ask(self, message: str) -> OperationResult:
        if not self.model:
            return Err("No model selected")
        prompt = await self.build_prompt(message)
        self.messages.append(Message(role="user", content=message))

        result = await self.ollama.generate_response(self.model, prompt)
        reply = str(result.value) if isinstance(result, Ok) else "*Error generating response*"
        self.messages.append(Message(role="assistant", content=reply))
        return result
