"""Tests for article ordering and sort-spec toggling."""

from __future__ import annotations

import locale

import pytest

from qiita_analytics.core.sorting import sort_articles
from qiita_analytics.core.types import ArticleRecord, SortDirection, SortKey, SortSpec


def _article(
    id: str,
    *,
    title: str = "title",
    likes: int = 0,
    created_at: str = "2024-01-01T00:00:00+09:00",
) -> ArticleRecord:
    return ArticleRecord(
        id=id,
        title=title,
        url=f"https://qiita.com/alice/items/{id}",
        likes_count=likes,
        created_at=created_at,
    )


def test_sort_handles_empty_and_single_collections():
    for key in SortKey:
        for direction in SortDirection:
            spec = SortSpec(key, direction)
            assert sort_articles([], spec) == []
            single = [_article("a")]
            assert sort_articles(single, spec) == single


def test_sort_likes_descending_and_ascending():
    articles = [_article("a", likes=5), _article("b", likes=20), _article("c", likes=1)]

    desc = sort_articles(articles, SortSpec(SortKey.LIKES_COUNT, SortDirection.DESC))
    asc = sort_articles(articles, SortSpec(SortKey.LIKES_COUNT, SortDirection.ASC))

    assert [a.id for a in desc] == ["b", "a", "c"]
    assert [a.id for a in asc] == ["c", "a", "b"]


def test_sort_created_at_compares_instants_not_strings():
    # 10:00+09:00 is 01:00Z, earlier than 02:00Z despite sorting later as text.
    tokyo = _article("tokyo", created_at="2024-01-01T10:00:00+09:00")
    utc = _article("utc", created_at="2024-01-01T02:00:00+00:00")

    asc = sort_articles([utc, tokyo], SortSpec(SortKey.CREATED_AT, SortDirection.ASC))

    assert [a.id for a in asc] == ["tokyo", "utc"]


def test_sort_titles_alphabetically():
    articles = [_article("1", title="python"), _article("2", title="go"), _article("3", title="rust")]

    asc = sort_articles(articles, SortSpec(SortKey.TITLE, SortDirection.ASC))

    assert [a.title for a in asc] == ["go", "python", "rust"]


def test_sort_is_stable_for_ties_in_both_directions():
    articles = [
        _article("a", likes=3),
        _article("b", likes=7),
        _article("c", likes=3),
        _article("d", likes=3),
    ]

    desc = sort_articles(articles, SortSpec(SortKey.LIKES_COUNT, SortDirection.DESC))
    asc = sort_articles(articles, SortSpec(SortKey.LIKES_COUNT, SortDirection.ASC))

    assert [a.id for a in desc] == ["b", "a", "c", "d"]
    assert [a.id for a in asc] == ["a", "c", "d", "b"]


def test_sort_does_not_mutate_input():
    articles = [_article("a", likes=1), _article("b", likes=2)]
    original = list(articles)

    result = sort_articles(articles, SortSpec(SortKey.LIKES_COUNT, SortDirection.DESC))

    assert articles == original
    assert result is not articles


def test_toggle_same_key_flips_direction():
    spec = SortSpec(SortKey.LIKES_COUNT, SortDirection.DESC)

    once = spec.toggle(SortKey.LIKES_COUNT)
    twice = once.toggle("likes_count")

    assert once.direction == SortDirection.ASC
    assert twice.direction == SortDirection.DESC


def test_toggle_other_key_resets_to_descending():
    spec = SortSpec(SortKey.LIKES_COUNT, SortDirection.ASC)

    switched = spec.toggle(SortKey.TITLE)

    assert switched == SortSpec(SortKey.TITLE, SortDirection.DESC)


def test_default_spec_is_newest_first():
    assert SortSpec() == SortSpec(SortKey.CREATED_AT, SortDirection.DESC)


@pytest.fixture
def english_collation():
    previous = locale.setlocale(locale.LC_COLLATE)
    try:
        locale.setlocale(locale.LC_COLLATE, "en_US.UTF-8")
    except locale.Error:
        pytest.skip("en_US.UTF-8 locale is not installed")
    yield
    locale.setlocale(locale.LC_COLLATE, previous)


def test_sort_titles_ignores_case_under_english_locale(english_collation):
    articles = [_article("1", title="apple"), _article("2", title="Banana"), _article("3", title="cherry")]

    asc = sort_articles(articles, SortSpec(SortKey.TITLE, SortDirection.ASC))

    assert [a.title for a in asc] == ["apple", "Banana", "cherry"]
