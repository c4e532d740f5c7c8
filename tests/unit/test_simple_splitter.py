from __future__ import annotations

import pytest

from chunking_service.core.splitters.simple import PARAGRAPH_SEPARATOR
from chunking_service.core.splitters.simple import SimpleSplitter
from chunking_service.core.splitters.simple import normalize
from chunking_service.core.splitters.simple import split_simple


def _paragraphs(*sizes: int) -> list[str]:
    letters = "abcdefghijklmnopqrstuvwxyz"
    return [letters[i % 26] * size for i, size in enumerate(sizes)]


SAMPLE_TEXTS = [
    "Hello world.\n\nSecond paragraph here.",
    PARAGRAPH_SEPARATOR.join(_paragraphs(500, 500, 500)),
    PARAGRAPH_SEPARATOR.join(_paragraphs(120, 300, 90, 410, 5, 260, 700, 30)),
    "Intro line.\n\n\n\n\nAfter a big gap.\n\n\nAnd another one.",
    PARAGRAPH_SEPARATOR.join(_paragraphs(*([75] * 40))),
]


def test_two_short_paragraphs_stay_together():
    content = "Hello world.\n\nSecond paragraph here."
    assert split_simple(content, 800) == ["Hello world.\n\nSecond paragraph here."]


def test_three_500_char_paragraphs_give_three_chunks():
    p1, p2, p3 = _paragraphs(500, 500, 500)
    content = PARAGRAPH_SEPARATOR.join([p1, p2, p3])

    assert split_simple(content, 800) == [p1, p2, p3]


def test_paragraphs_are_packed_greedily():
    p1, p2, p3, p4 = _paragraphs(300, 300, 300, 100)
    content = PARAGRAPH_SEPARATOR.join([p1, p2, p3, p4])

    chunks = split_simple(content, 800)

    # p1+p2 buffer is 602 chars, 602 + 2 + 300 > 800 closes it; p3 and p4 fit
    assert chunks == [
        PARAGRAPH_SEPARATOR.join([p1, p2]),
        PARAGRAPH_SEPARATOR.join([p3, p4]),
    ]


def test_separator_counts_toward_the_cap():
    p1, p2 = _paragraphs(400, 400)

    chunks = split_simple(PARAGRAPH_SEPARATOR.join([p1, p2]), 800)

    assert chunks == [p1, p2]


def test_paragraphs_filling_the_cap_exactly_stay_together():
    p1, p2 = _paragraphs(399, 399)
    content = PARAGRAPH_SEPARATOR.join([p1, p2])

    chunks = split_simple(content, 800)

    assert chunks == [content]
    assert len(chunks[0]) == 800


@pytest.mark.parametrize("chunk_size", [797, 798, 799, 800, 801, 802])
def test_multi_paragraph_chunks_never_exceed_cap_near_boundary(chunk_size):
    content = PARAGRAPH_SEPARATOR.join(_paragraphs(*([199] * 12)))

    for chunk in split_simple(content, chunk_size):
        assert len(chunk) <= chunk_size


def test_oversized_paragraph_is_not_broken():
    small, huge, tail = _paragraphs(50, 2000, 40)
    content = PARAGRAPH_SEPARATOR.join([small, huge, tail])

    chunks = split_simple(content, 800)

    assert chunks == [small, huge, tail]
    assert len(chunks[1]) == 2000


def test_excess_newlines_are_collapsed_and_content_trimmed():
    content = "\n\n  First.\n\n\n\n\nSecond.\n\n\nThird.  \n\n"

    assert normalize(content) == "First.\n\nSecond.\n\nThird."
    assert split_simple(content, 800) == ["First.\n\nSecond.\n\nThird."]


def test_blank_paragraphs_are_discarded():
    content = "One.\n\n   \n\nTwo."

    assert split_simple(content, 4) == ["One.", "Two."]


@pytest.mark.parametrize("content", ["", "   ", "\n\n\n\n", " \t "])
def test_content_without_paragraphs_is_returned_unsplit(content):
    assert split_simple(content, 800) == [content]


def test_single_line_without_separator_is_one_chunk():
    content = "x" * 1500
    assert split_simple(content, 800) == [content]


@pytest.mark.parametrize("content", SAMPLE_TEXTS)
@pytest.mark.parametrize("chunk_size", [50, 400, 800, 3000])
def test_rejoined_chunks_reconstruct_normalized_content(content, chunk_size):
    chunks = split_simple(content, chunk_size)

    assert PARAGRAPH_SEPARATOR.join(chunks) == normalize(content)


@pytest.mark.parametrize("content", SAMPLE_TEXTS)
@pytest.mark.parametrize("chunk_size", [50, 400, 800, 3000])
def test_chunks_are_trimmed_and_non_empty(content, chunk_size):
    for chunk in split_simple(content, chunk_size):
        assert chunk
        assert chunk == chunk.strip()


@pytest.mark.parametrize("content", SAMPLE_TEXTS)
@pytest.mark.parametrize("chunk_size", [100, 400, 800])
def test_multi_paragraph_chunks_respect_soft_cap(content, chunk_size):
    for chunk in split_simple(content, chunk_size):
        if PARAGRAPH_SEPARATOR in chunk:
            assert len(chunk) <= chunk_size


@pytest.mark.parametrize("content", SAMPLE_TEXTS)
@pytest.mark.parametrize("chunk_size", [50, 400, 800])
def test_resplitting_own_output_is_stable(content, chunk_size):
    first = split_simple(content, chunk_size)
    second = split_simple(PARAGRAPH_SEPARATOR.join(first), chunk_size)

    assert second == first


def test_splitter_object_delegates_to_function():
    content = PARAGRAPH_SEPARATOR.join(_paragraphs(500, 500))
    assert SimpleSplitter().split(content, 800) == split_simple(content, 800)
