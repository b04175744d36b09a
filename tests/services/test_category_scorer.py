from catalog.services.category_scorer import CategoryScorer, PreparedCategory
from catalog.services.query_normalizer import QueryNormalizer

CATEGORIES = [
    {"category": "Electronics > Mobile Phones > iPhone 15", "imageurl": "iphone.jpg", "comment": "New"},
    {"category": "Electronics > Mobile Phones > Samsung Galaxy", "imageurl": None, "comment": None},
    {"category": "Groceries > Snacks", "imageurl": None, "comment": None},
]


def _rank(query, rows=CATEGORIES):
    return CategoryScorer().rank(QueryNormalizer.tokenize(query), query, rows)


def test_prepared_category_views():
    prepared = PreparedCategory.from_path(" Electronics >  > Mobile Phones > iPhone-15 ")
    assert prepared.segments == ["electronics", "mobile phones", "iphone-15"]
    assert prepared.token_bag == {"electronics", "mobile", "phones", "iphone", "15"}
    assert prepared.flat_text == "electronics mobile phones iphone-15"


def test_single_token_query_matches_only_iphone():
    results = _rank("iphone")

    assert len(results) == 1
    assert results[0].category == "Electronics > Mobile Phones > iPhone 15"
    assert results[0].exact_matches == 1
    # Metadata travels with the category
    assert results[0].imageurl == "iphone.jpg"
    assert results[0].comment == "New"


def test_empty_query_returns_nothing():
    assert _rank("") == []
    assert _rank("   ") == []


def test_all_tokens_exact_rank_first():
    results = _rank("mobile phones iphone")

    assert results[0].category == "Electronics > Mobile Phones > iPhone 15"
    assert results[0].exact_matches == 3
    assert results[1].category == "Electronics > Mobile Phones > Samsung Galaxy"
    assert results[1].exact_matches == 2
    assert all(r.category != "Groceries > Snacks" for r in results)


def test_exact_match_in_any_segment_counts():
    results = _rank("electronics")
    assert [r.exact_matches for r in results] == [1, 1]


def test_partial_match_needs_min_length():
    results = _rank("snack")
    assert len(results) == 1
    assert results[0].category == "Groceries > Snacks"
    assert results[0].exact_matches == 0
    assert results[0].partial_matches == 1

    # Two-letter fragments only count as whole words
    assert _rank("sn") == []


def test_unrelated_query_is_excluded():
    assert _rank("furniture") == []


def test_exact_beats_partial_and_similarity_breaks_ties():
    rows = [
        {"category": "Phones > Cases"},
        {"category": "Phone"},
        {"category": "Home > Phone Stands > Phone"},
    ]
    results = _rank("phone", rows)

    assert [r.category for r in results][:2] == ["Phone", "Home > Phone Stands > Phone"]
    assert results[0].similarity > results[1].similarity
    assert results[-1].category == "Phones > Cases"
    assert results[-1].partial_matches == 1


def test_duplicate_categories_are_scored_once():
    rows = CATEGORIES + [{"category": "Electronics > Mobile Phones > iPhone 15", "imageurl": "other.jpg"}]
    results = _rank("iphone", rows)

    assert len(results) == 1
    assert results[0].imageurl == "iphone.jpg"


def test_ranking_is_deterministic():
    rows = [{"category": "B > Tea"}, {"category": "A > Tea"}]
    first = _rank("tea", rows)
    second = _rank("tea", list(reversed(rows)))

    assert [r.category for r in first] == [r.category for r in second]
    assert [r.category for r in first] == ["A > Tea", "B > Tea"]


def test_custom_weights():
    scorer = CategoryScorer(exact_weight=1.0, partial_weight=0.0, similarity_weight=0.0)
    match = scorer.score(["snacks"], "snacks", "Groceries > Snacks")
    assert match.score == 1.0
    assert match.similarity > 0
