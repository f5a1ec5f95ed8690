"""
Free-text search over the product catalogue.

Three entry points are exposed:

* ``search()``: rank products against a query. A product is a hit when
  the normalised query is a substring of at least one searchable field.
  Fields are weighted by priority (name first, SKU last) using powers of
  two, so a product matching an earlier field always ranks above one that
  only matches later fields. Products with the same score keep their
  catalogue order.

* ``suggest()``: auto-complete strings (product names, categories,
  fabrics, occasions, colours) for the search box.

* ``popular_searches()``: fixed list shown under an empty search box.

Everything here is a pure function of its arguments; no state is kept
between calls.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .schemas import HighlightSpan, Product, SearchResult

logger = logging.getLogger(__name__)

# Searchable fields in priority order.
SEARCH_FIELDS: Tuple[str, ...] = (
    "name",
    "description",
    "category",
    "subcategory",
    "fabric",
    "colors",
    "occasion",
    "sku",
)

# name -> 128, description -> 64, ..., sku -> 1
FIELD_WEIGHTS: Dict[str, int] = {
    field: 2 ** (len(SEARCH_FIELDS) - 1 - position)
    for position, field in enumerate(SEARCH_FIELDS)
}

MIN_SUGGESTION_LENGTH = 2

# Hindi to English mapping used when synonym expansion is requested
HINDI_TO_ENGLISH: Dict[str, List[str]] = {
    "साड़ी": ["saree", "sari"],
    "लेहंगा": ["lehenga", "lehenga choli"],
    "कुर्ता": ["kurta", "kurti"],
    "सलवार": ["salwar", "salwar suit"],
    "अनारकली": ["anarkali", "anarkali suit"],
    "शेरवानी": ["sherwani"],
    "दुपट्टा": ["dupatta", "stole"],
    "गाउन": ["gown", "dress"],
    "ज्वेलरी": ["jewelry", "jewellery"],
    "बैग": ["bag", "clutch"],
    "शादी": ["wedding", "bridal"],
    "त्योहार": ["festival", "celebration"],
    "पार्टी": ["party"],
    "ऑफिस": ["office", "formal"],
    "कैजुअल": ["casual"],
    "रेशम": ["silk"],
    "कॉटन": ["cotton"],
    "जॉर्जेट": ["georgette"],
    "चिफॉन": ["chiffon"],
    "लाल": ["red"],
    "नीला": ["blue"],
    "हरा": ["green"],
    "गुलाबी": ["pink"],
    "सफेद": ["white"],
    "काला": ["black"],
    "सोना": ["gold", "golden"],
    "चांदी": ["silver"],
}

POPULAR_SEARCHES: List[str] = [
    "saree",
    "lehenga",
    "kurta",
    "wedding",
    "festival",
    "party",
    "silk",
    "cotton",
    "red",
    "blue",
    "gold",
    "bridal",
    "anarkali",
    "sherwani",
    "jewelry",
]


def _norm(s: Optional[str]) -> str:
    return (s or "").strip().lower()


def expand_query(term: str) -> List[str]:
    """Return the term followed by its Hindi/English synonyms, without repeats.

    The lookup works both ways: a Hindi word brings its English
    translations, and an English word brings the Hindi word it belongs
    to along with the sibling translations.
    """
    alternatives: List[str] = [term]
    for hindi, english in HINDI_TO_ENGLISH.items():
        if term == hindi:
            alternatives.extend(english)
        elif term in english:
            alternatives.append(hindi)
            alternatives.extend(english)
    return list(dict.fromkeys(alternatives))


def _field_values(product: Product, field: str) -> List[Tuple[Optional[int], str]]:
    """(index, value) pairs for a field; index is None for scalar fields."""
    value = getattr(product, field)
    if value is None:
        return []
    if isinstance(value, list):
        return list(enumerate(value))
    return [(None, value)]


def _lower_with_offsets(value: str) -> Tuple[str, List[int]]:
    """Lowercase ``value`` and map each lowered position to its source position."""
    lowered: List[str] = []
    offsets: List[int] = []
    for position, ch in enumerate(value):
        low = ch.lower()
        lowered.append(low)
        offsets.extend([position] * len(low))
    return "".join(lowered), offsets


def _find_spans(field: str, index: Optional[int], value: str, needle: str) -> List[HighlightSpan]:
    spans: List[HighlightSpan] = []
    haystack, offsets = _lower_with_offsets(value)
    start = haystack.find(needle)
    while start != -1:
        end = start + len(needle)
        # offsets index the original value, not the lowered one
        spans.append(
            HighlightSpan(field=field, start=offsets[start], end=offsets[end - 1] + 1, index=index)
        )
        start = haystack.find(needle, end)
    return spans


def match_product(product: Product, terms: Sequence[str]) -> Optional[SearchResult]:
    """Test one product against the normalised query alternatives.

    Returns ``None`` when no field contains any of ``terms``.
    """
    matched_fields: List[str] = []
    highlights: List[HighlightSpan] = []
    for field in SEARCH_FIELDS:
        field_spans: List[HighlightSpan] = []
        for index, value in _field_values(product, field):
            for term in terms:
                field_spans.extend(_find_spans(field, index, value, term))
        if field_spans:
            matched_fields.append(field)
            highlights.extend(field_spans)
    if not matched_fields:
        return None
    score = float(sum(FIELD_WEIGHTS[f] for f in matched_fields))
    return SearchResult(
        product=product,
        score=score,
        matched_fields=matched_fields,
        highlights=highlights,
    )


def search(
    products: Iterable[Product],
    query: Optional[str],
    expand_synonyms: bool = False,
) -> List[SearchResult]:
    """Search ``products`` for ``query``.

    Parameters
    ----------
    products : Iterable[Product]
        Catalogue snapshot, in display order.
    query : Optional[str]
        Raw text typed by the user. Leading/trailing whitespace and case
        are ignored.
    expand_synonyms : bool
        Also match the Hindi/English synonyms of the query.

    Returns
    -------
    List[SearchResult]
        With a blank query, every product in catalogue order with a score
        of 1 and nothing highlighted. Otherwise the matching products by
        decreasing score; equal scores keep catalogue order.
    """
    nq = _norm(query)
    if not nq:
        return [SearchResult(product=p, score=1.0) for p in products]

    terms = expand_query(nq) if expand_synonyms else [nq]
    results: List[SearchResult] = []
    for product in products:
        result = match_product(product, terms)
        if result is not None:
            results.append(result)
    # sorted() is stable, which keeps catalogue order among equal scores
    results = sorted(results, key=lambda r: r.score, reverse=True)
    logger.debug("Search %r returned %d results", nq, len(results))
    return results


def _bump(scores: Dict[str, int], suggestion: str, points: int) -> None:
    scores[suggestion] = scores.get(suggestion, 0) + points


def suggest(products: Iterable[Product], query: Optional[str], limit: int = 5) -> List[str]:
    """Auto-complete suggestions for the search box.

    Queries shorter than two characters give no suggestions. Candidates
    are scored by where the query appears (product name words weigh the
    most) and returned best first, at most ``limit`` of them.
    """
    term = _norm(query)
    if len(term) < MIN_SUGGESTION_LENGTH or limit <= 0:
        return []

    scores: Dict[str, int] = {}
    for product in products:
        for word in product.name.lower().split():
            if word.startswith(term):
                _bump(scores, product.name, 10)
            elif term in word:
                _bump(scores, product.name, 5)

        category = product.category.lower()
        if category.startswith(term):
            _bump(scores, product.category, 8)
        elif term in category:
            _bump(scores, product.category, 4)

        if product.subcategory.lower().startswith(term):
            _bump(scores, product.subcategory, 6)

        if product.fabric and product.fabric.lower().startswith(term):
            _bump(scores, product.fabric, 5)

        for occ in product.occasion or []:
            if occ.lower().startswith(term):
                _bump(scores, occ, 4)
            elif term in occ.lower():
                _bump(scores, occ, 2)

        for color in product.colors or []:
            if color.lower().startswith(term):
                _bump(scores, color, 3)

    # dicts keep insertion order, so ties stay in first-seen order
    ranked = sorted(scores.items(), key=lambda item: item[1], reverse=True)
    return [suggestion for suggestion, _ in ranked[:limit]]


def popular_searches() -> List[str]:
    return list(POPULAR_SEARCHES)
