"""Whitespace tokenizer shared by the corpus builder and the ranker."""


def tokenize(text: str) -> list[str]:
    """Lowercase ``text`` and split it on runs of whitespace.

    No punctuation stripping and no stemming: ``"HR-Docs, 2024"`` yields
    ``["hr-docs,", "2024"]``. Empty or blank input yields an empty list.
    """
    return [token for token in text.lower().split() if token]
