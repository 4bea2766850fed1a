"""BM25 ranking over a system's corpus with substring term matching."""

import math

from loguru import logger

from jdfind.core.search.corpus import build_corpus
from jdfind.core.search.tokenizer import tokenize
from jdfind.models.hierarchy import ScoredResult, System

# Term frequency saturation and length normalization strength.
K1 = 1.5
B = 0.75


def _term_frequency(term: str, doc_tokens: list[str]) -> int:
    """Count tokens that contain ``term`` as a substring ("doc" matches "documents")."""
    return sum(1 for token in doc_tokens if term in token)


def inverse_document_frequency(term: str, tokenized_docs: list[list[str]]) -> float:
    """IDF of ``term`` using partial-match document frequency.

    Returns 0.0 when no document contains the term.
    """
    df = sum(1 for doc in tokenized_docs if any(term in token for token in doc))
    if df == 0:
        return 0.0
    n = len(tokenized_docs)
    return max(0.0, math.log((n - df + 0.5) / (df + 0.5) + 1))


def bm25_score(
    query_terms: list[str],
    doc_tokens: list[str],
    avg_doc_length: float,
    idf_scores: dict[str, float],
) -> tuple[float, list[str]]:
    """Score one document against the query.

    Repeated query terms contribute once per occurrence.

    Returns:
        Tuple of (score, matched terms in order of first match).
    """
    score = 0.0
    matched_terms: list[str] = []
    doc_length = len(doc_tokens)

    for term in query_terms:
        tf = _term_frequency(term, doc_tokens)
        if tf == 0:
            continue

        if term not in matched_terms:
            matched_terms.append(term)
        numerator = tf * (K1 + 1)
        denominator = tf + K1 * (1 - B + B * doc_length / avg_doc_length)
        score += idf_scores.get(term, 0.0) * numerator / denominator

    return max(score, 0.0), matched_terms


def search_system(
    system: System,
    query: str,
    *,
    include_ancestor_details: bool = False,
) -> list[ScoredResult]:
    """Rank the nodes of a system against a free-text query.

    Args:
        system: The hierarchy to search. Results reference its records directly.
        query: Free-text query; terms match any token containing them.
        include_ancestor_details: Passed to the corpus builder.

    Returns:
        Results with a positive score, best first. Equal scores keep corpus order.
    """
    if not query.strip():
        return []

    docs = build_corpus(system, include_ancestor_details=include_ancestor_details)
    if not docs:
        return []

    query_terms = tokenize(query)
    tokenized_docs = [tokenize(doc.text) for doc in docs]

    avg_doc_length = sum(len(tokens) for tokens in tokenized_docs) / len(tokenized_docs)
    if avg_doc_length == 0:
        return []

    idf_scores = {term: inverse_document_frequency(term, tokenized_docs) for term in query_terms}

    results: list[ScoredResult] = []
    for doc, doc_tokens in zip(docs, tokenized_docs, strict=True):
        score, matched_terms = bm25_score(query_terms, doc_tokens, avg_doc_length, idf_scores)
        if score <= 0:
            continue
        results.append(
            ScoredResult(
                kind=doc.kind,
                area=doc.area,
                category=doc.category,
                item=doc.item,
                score=score,
                matched_terms=tuple(matched_terms),
            )
        )

    results.sort(key=lambda r: r.score, reverse=True)
    logger.debug(
        "Search {!r} in {!r}: {} documents, {} hits", query, system.name, len(docs), len(results)
    )
    return results
