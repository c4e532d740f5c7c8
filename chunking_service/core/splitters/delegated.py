"""Model-assisted chunking with a paragraph-split safety net.

The completion service is asked to return a JSON array of chunk strings.
Whatever goes wrong on the way (no credential, timeout, transport error, a
reply that is not a JSON array, an array with nothing usable in it) the
splitter answers with the paragraph split of the *original* content and
records why in ``ChunkResult.degradation_reason``. It never raises.
"""

from __future__ import annotations

import json
import logging
import re

from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate
from langchain_openai import ChatOpenAI
import openai

from chunking_service.core.config import Settings
from chunking_service.core.config import get_settings
from chunking_service.core.exceptions import DelegationFailure
from chunking_service.core.splitters.simple import SimpleSplitter
from chunking_service.core.types import ChunkResult
from chunking_service.core.types import DegradationReason
from chunking_service.core.types import UsedStrategy

__all__ = [
    "CHUNKING_SYSTEM_PROMPT",
    "TRUNCATION_MARKER",
    "DelegatedSplitter",
    "parse_chunk_array",
    "truncate_for_delegation",
]

logger = logging.getLogger(__name__)

TRUNCATION_MARKER = "... [content truncated]"

CHUNKING_SYSTEM_PROMPT = """You are an expert at dividing text. Split the following content into logical chunks of approximately {chunk_size} tokens.
Preserve paragraph boundaries and keep the context of each chunk intact.
Respond with ONLY a valid JSON array of strings, where each string is one chunk.
Example: ["first chunk here", "second chunk here"]"""

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


def truncate_for_delegation(content: str, limit: int) -> str:
    """Bound the text sent to the completion service to *limit* characters."""
    if len(content) <= limit:
        return content
    return content[:limit] + TRUNCATION_MARKER


def parse_chunk_array(reply: str) -> list[str]:
    """Parse a completion reply into trimmed, non-empty chunk strings.

    Non-string and blank elements are dropped. Raises ``DelegationFailure``
    when the reply is not a JSON array or nothing usable is left.
    """
    raw = reply.strip()
    fenced = _CODE_FENCE.match(raw)
    if fenced:
        raw = fenced.group(1)
    if not raw:
        raise DelegationFailure(DegradationReason.EMPTY_RESPONSE, "reply is empty")

    try:
        data = json.loads(raw)
    except ValueError as e:
        raise DelegationFailure(
            DegradationReason.INVALID_RESPONSE, "reply is not valid JSON"
        ) from e

    if not isinstance(data, list):
        raise DelegationFailure(
            DegradationReason.INVALID_RESPONSE,
            f"expected a JSON array, got {type(data).__name__}",
        )

    chunks = [item.strip() for item in data if isinstance(item, str) and item.strip()]
    if not chunks:
        raise DelegationFailure(
            DegradationReason.EMPTY_RESPONSE,
            f"no usable chunks among {len(data)} elements",
        )
    return chunks


def _build_llm(settings: Settings) -> BaseChatModel:
    return ChatOpenAI(
        model=settings.completion_model,
        api_key=settings.completion_api_key,
        base_url=settings.completion_api_base,
        temperature=settings.completion_temperature,
        max_tokens=settings.completion_max_tokens,
        timeout=settings.completion_timeout,
        max_retries=0,
    )


class DelegatedSplitter:
    """Split text with a chat-completion model, falling back to paragraphs."""

    def __init__(
        self,
        settings: Settings | None = None,
        llm: BaseChatModel | None = None,
        fallback: SimpleSplitter | None = None,
    ):
        """Initialize the splitter.

        Args:
            settings: Completion settings; defaults to the process settings
            llm: Chat model to use; built from ``settings`` when omitted. Left
                unset when no credential is configured or the client cannot
                be built, in which case ``init_error`` records why.
            fallback: Splitter used whenever the model path fails
        """
        self.settings = settings or get_settings()
        self.llm = llm
        self.init_error: str | None = None
        if self.llm is None and self.settings.completion_configured:
            try:
                self.llm = _build_llm(self.settings)
            except Exception as e:
                logger.warning("Could not initialise completion client: %s", e)
                self.init_error = str(e)
        self.fallback = fallback or SimpleSplitter()

        self.prompt = ChatPromptTemplate.from_messages(
            [("system", CHUNKING_SYSTEM_PROMPT), ("human", "{content}")]
        )
        self.chain = (
            self.prompt | self.llm | StrOutputParser() if self.llm is not None else None
        )

    def split(self, content: str, chunk_size: int) -> ChunkResult:
        try:
            chunks = self._request_chunks(content, chunk_size)
        except DelegationFailure as failure:
            logger.warning(
                "Intelligent chunking degraded to paragraph split: %s", failure
            )
            return ChunkResult(
                chunks=tuple(self.fallback.split(content, chunk_size)),
                used_strategy=UsedStrategy.FALLBACK,
                degradation_reason=failure.reason,
            )

        logger.info("Completion service returned %d valid chunks", len(chunks))
        return ChunkResult(chunks=tuple(chunks), used_strategy=UsedStrategy.INTELLIGENT)

    def _request_chunks(self, content: str, chunk_size: int) -> list[str]:
        """Make the single outbound call and validate its reply."""
        if self.init_error is not None:
            raise DelegationFailure(
                DegradationReason.REQUEST_FAILED,
                f"completion client unavailable: {self.init_error}",
            )
        if self.chain is None:
            raise DelegationFailure(
                DegradationReason.NOT_CONFIGURED, "no completion credential configured"
            )

        payload = truncate_for_delegation(content, self.settings.max_delegated_chars)
        logger.info(
            "Requesting intelligent chunking (%d of %d chars sent)",
            len(payload),
            len(content),
        )
        try:
            reply = self.chain.invoke({"chunk_size": chunk_size, "content": payload})
        except (openai.APITimeoutError, TimeoutError) as e:
            raise DelegationFailure(DegradationReason.TIMEOUT, str(e)) from e
        except Exception as e:
            raise DelegationFailure(DegradationReason.REQUEST_FAILED, str(e)) from e

        logger.debug("Completion reply (first 200 chars): %s", reply[:200])
        return parse_chunk_array(reply)
