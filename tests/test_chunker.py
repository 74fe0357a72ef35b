import pytest

from app.indexing.chunker import Chunk, build_chunks, chunk_text


def test_short_text_is_returned_unchanged():
    text = "Replace the fuser if the page smears."
    assert chunk_text(text) == [text]
    assert chunk_text("") == [""]


def test_text_at_exact_chunk_size_is_single_chunk():
    text = "x" * 6000
    assert chunk_text(text, chunk_size=6000, overlap=400) == [text]


def test_eight_thousand_chars_yield_two_chunks():
    text = "".join(chr(ord("a") + i % 26) for i in range(8000))
    chunks = chunk_text(text, chunk_size=6000, overlap=400)

    assert len(chunks) == 2
    assert chunks[0] == text[:6000]
    assert chunks[1] == text[5600:]
    assert len(chunks[1]) == 2400


def test_windows_rebuild_the_original_text():
    text = "".join(str(i % 10) for i in range(2537))
    chunks = chunk_text(text, chunk_size=500, overlap=50)

    assert all(len(c) == 500 for c in chunks[:-1])
    assert len(chunks[-1]) <= 500
    rebuilt = chunks[0] + "".join(c[50:] for c in chunks[1:])
    assert rebuilt == text


@pytest.mark.parametrize("overlap", [400, 500, -1])
def test_invalid_overlap_is_rejected(overlap):
    with pytest.raises(ValueError):
        chunk_text("y" * 1000, chunk_size=400, overlap=overlap)


def test_build_chunks_assigns_positional_record_ids():
    chunks = build_chunks("manual.pdf-1", "z" * 1200, chunk_size=500, overlap=100)

    assert [c.record_id for c in chunks] == ["manual.pdf-1#0", "manual.pdf-1#1", "manual.pdf-1#2"]
    assert chunks[0] == Chunk(parent_id="manual.pdf-1", index=0, text="z" * 500)
