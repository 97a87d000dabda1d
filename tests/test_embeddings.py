"""
Deterministic LCG embeddings.
"""

import json
import pytest

from vectorforge.vector.embeddings import (
    IEmbeddingProvider,
    LinearCongruentialEmbedding,
    embed,
    embedding_to_json,
    utf16_code_units,
)


def test_embedding_interface():
    """Test that the embedding provider implements the interface correctly."""
    embedder = LinearCongruentialEmbedding()

    assert isinstance(embedder, IEmbeddingProvider)
    assert embedder.get_dimension() == 1536


def test_deterministic_embedding():
    """Test that the same input always produces the same output."""
    text = "Hello, world!"
    vector1 = embed(text)
    vector2 = embed(text)

    assert vector1 == vector2
    assert len(vector1) == 1536


def test_consistent_output_across_instances():
    embedder1 = LinearCongruentialEmbedding()
    embedder2 = LinearCongruentialEmbedding()

    text = "This is a test string"
    assert embedder1.embed_text(text) == embedder2.embed_text(text)


def test_vector_is_immutable():
    vector = embed("remember the milk")
    with pytest.raises(TypeError):
        vector[0] = 1.0


@pytest.mark.parametrize("text", ["", "a", "A" * 1000, "Hello\n\t\rWorld!@#$%^&*()", "日本語のテキスト", "😀"])
def test_dimension_and_range(text):
    vector = embed(text)

    assert len(vector) == 1536
    assert all(0.0 <= value < 1.0 for value in vector)


def test_empty_text_starts_from_zero_seed():
    vector = embed("")

    assert vector[0] == 49297 / 233280.0
    assert vector[0] == pytest.approx(0.211321, abs=1e-6)
    # second step continues from the first seed
    assert vector[1] == ((49297 * 9301 + 49297) % 233280) / 233280.0


def test_seed_is_sum_of_code_units():
    embedder = LinearCongruentialEmbedding()

    assert embedder.seed_for("") == 0
    assert embedder.seed_for("ab") == 97 + 98
    # anagrams share a seed and therefore a vector
    assert embed("listen") == embed("silent")


def test_seed_is_not_reduced_before_generation():
    text = "z" * 5000
    expected_seed = 122 * 5000
    assert expected_seed > 233280

    first = (expected_seed * 9301 + 49297) % 233280
    assert embed(text)[0] == first / 233280.0


def test_astral_characters_count_as_surrogate_pairs():
    assert utf16_code_units("A") == [0x41]
    assert utf16_code_units("😀") == [0xD83D, 0xDE00]

    embedder = LinearCongruentialEmbedding()
    assert embedder.seed_for("😀") == 0xD83D + 0xDE00


def test_different_inputs_produce_different_vectors():
    assert embed("Hello, world!") != embed("Goodbye, world!")


def test_custom_dimension():
    assert len(LinearCongruentialEmbedding(dimension=64).embed_text("test")) == 64


def test_embedding_json_is_compact_array():
    vector = embed("json")
    encoded = embedding_to_json(vector)

    assert encoded.startswith("[") and encoded.endswith("]")
    assert " " not in encoded
    assert json.loads(encoded) == list(vector)
