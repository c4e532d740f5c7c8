"""Paragraph-aware greedy packer.

Always available and total over any string input. Sizes are character
counts; ``chunk_size`` is a soft cap only enforced at paragraph boundaries,
so a single paragraph longer than the cap is emitted whole.
"""

from __future__ import annotations

import logging
import re

__all__ = ["PARAGRAPH_SEPARATOR", "SimpleSplitter", "normalize", "split_simple"]

logger = logging.getLogger(__name__)

PARAGRAPH_SEPARATOR = "\n\n"

_EXCESS_NEWLINES = re.compile(r"\n{3,}")


def normalize(content: str) -> str:
    """Collapse 3+ newlines to a paragraph separator and trim."""
    return _EXCESS_NEWLINES.sub(PARAGRAPH_SEPARATOR, content).strip()


def split_simple(content: str, chunk_size: int) -> list[str]:
    """Split *content* into paragraph-aligned chunks of roughly *chunk_size* chars."""
    paragraphs = [
        p for p in normalize(content).split(PARAGRAPH_SEPARATOR) if p.strip()
    ]

    chunks: list[str] = []
    buffer = ""
    for paragraph in paragraphs:
        if buffer and len(buffer) + len(PARAGRAPH_SEPARATOR) + len(paragraph) > chunk_size:
            chunks.append(buffer.strip())
            buffer = paragraph
        else:
            buffer = f"{buffer}{PARAGRAPH_SEPARATOR}{paragraph}" if buffer else paragraph

    if buffer.strip():
        chunks.append(buffer.strip())

    if not chunks:
        # No paragraph at all (empty or whitespace-only input)
        return [content]

    logger.debug("Paragraph split produced %d chunks", len(chunks))
    return chunks


class SimpleSplitter:
    """Object wrapper so both tiers expose ``split(content, chunk_size)``."""

    def split(self, content: str, chunk_size: int) -> list[str]:
        return split_simple(content, chunk_size)
