from qiita_analytics.core.stats import aggregate, average_likes
from qiita_analytics.core.types import ArticleRecord, CollectionStats


def _article(id: str, likes: int, stocks: int = 0) -> ArticleRecord:
    return ArticleRecord(
        id=id,
        title=id,
        url="https://qiita.com",
        likes_count=likes,
        created_at="2024-01-01T00:00:00Z",
        stocks_count=stocks,
    )


def test_aggregate_empty_collection_is_all_zero():
    assert aggregate([]) == CollectionStats(total_likes=0, total_stock=0, count=0)


def test_aggregate_sums_counters():
    articles = [_article("a", 10, 2), _article("b", 0, 0), _article("c", 32, 5)]

    stats = aggregate(articles)

    assert stats.total_likes == sum(a.likes_count for a in articles) == 42
    assert stats.total_stock == 7
    assert stats.count == 3


def test_missing_stock_count_is_treated_as_zero():
    record = ArticleRecord.from_api(
        {
            "id": "x",
            "title": "t",
            "url": "https://qiita.com/x",
            "likes_count": 4,
            "created_at": "2024-01-01T00:00:00+09:00",
            "tags": [],
        }
    )

    assert aggregate([record]).total_stock == 0


def test_average_likes_is_zero_for_empty_stats():
    assert average_likes(CollectionStats()) == 0.0


def test_average_likes():
    assert average_likes(CollectionStats(total_likes=9, total_stock=0, count=3)) == 3.0
