# tests/test_label_table.py

import numpy as np
import pytest

from imgsearch.auxiliary.label_table import LabelEmbeddingTable


def test_table_is_read_only():
    table = LabelEmbeddingTable({"alp": np.array([1.0, 0.0])})

    with pytest.raises(TypeError):
        table["alp"] = np.array([0.0, 1.0])  # type: ignore[index]
    with pytest.raises(ValueError):
        table["alp"][0] = 0.5


def test_table_copies_input_vectors():
    source = np.array([1.0, 0.0])
    table = LabelEmbeddingTable({"alp": source})

    source[0] = 0.0

    assert table["alp"][0] == 1.0


def test_mixed_dimensionality_rejected():
    with pytest.raises(ValueError):
        LabelEmbeddingTable({"alp": np.ones(3), "tabby": np.ones(4)})


def test_build_deduplicates_and_batches():
    calls = []

    def embed_texts(texts):
        calls.append(list(texts))
        return [np.array([float(len(text)), 1.0]) for text in texts]

    table = LabelEmbeddingTable.build(["a", "bb", "a", "ccc"], embed_texts, batch_size=2, show_progress=False)

    assert calls == [["a", "bb"], ["ccc"]]
    assert list(table) == ["a", "bb", "ccc"]
    assert table.dim == 2


def test_build_skips_failed_batches():
    def embed_texts(texts):
        if "broken" in texts:
            raise RuntimeError("tokenizer exploded")
        return [np.array([1.0, 0.0]) for _ in texts]

    table = LabelEmbeddingTable.build(["alp", "broken", "tabby"], embed_texts, batch_size=1, show_progress=False)

    assert set(table) == {"alp", "tabby"}
    assert "broken" not in table
