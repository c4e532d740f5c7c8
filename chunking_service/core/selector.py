from __future__ import annotations

import logging

from chunking_service.core.config import Settings
from chunking_service.core.config import get_settings
from chunking_service.core.exceptions import ValidationError
from chunking_service.core.splitters.delegated import DelegatedSplitter
from chunking_service.core.splitters.simple import SimpleSplitter
from chunking_service.core.types import ChunkResult
from chunking_service.core.types import Strategy
from chunking_service.core.types import UsedStrategy

logger = logging.getLogger(__name__)


class StrategySelector:
    """Route a chunking request to the right splitter.

    First match wins:

    1. empty or whitespace-only content raises ``ValidationError``
    2. content shorter than ``single_chunk_threshold`` is returned as one chunk
    3. ``simple`` requests, or content shorter than ``simple_threshold``, use
       the paragraph splitter
    4. everything else goes to the delegated splitter, which may itself
       report a fallback

    Holds no per-request state, so one instance can serve concurrent requests.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        simple: SimpleSplitter | None = None,
        delegated: DelegatedSplitter | None = None,
    ):
        self.settings = settings or get_settings()
        self.simple = simple or SimpleSplitter()
        self.delegated = delegated or DelegatedSplitter(
            settings=self.settings, fallback=self.simple
        )

    def select(
        self,
        content: str | None,
        chunk_size: int | None = None,
        strategy: Strategy | str = Strategy.INTELLIGENT,
    ) -> ChunkResult:
        if not content or not content.strip():
            raise ValidationError("Content is required")

        strategy = Strategy(strategy)
        size = chunk_size or self.settings.default_chunk_size

        if len(content) < self.settings.single_chunk_threshold:
            logger.info("Content too small to split, returning a single chunk")
            return ChunkResult(chunks=(content,), used_strategy=UsedStrategy.SINGLE_CHUNK)

        if strategy is Strategy.SIMPLE or len(content) < self.settings.simple_threshold:
            logger.info("Using paragraph chunking")
            return ChunkResult(
                chunks=tuple(self.simple.split(content, size)),
                used_strategy=UsedStrategy.SIMPLE,
            )

        logger.info("Using intelligent chunking")
        return self.delegated.split(content, size)
