"""Tests for CSV export formatting."""

from __future__ import annotations

import csv
import io
from pathlib import Path

from qiita_analytics.config import ExportConfig
from qiita_analytics.core.types import ArticleRecord
from qiita_analytics.output.csv_export import export_filename, to_csv, write_csv


def _article(id: str = "abc", title: str = "Hello", tags: tuple[str, ...] = ("Python",)) -> ArticleRecord:
    return ArticleRecord(
        id=id,
        title=title,
        url=f"https://qiita.com/alice/items/{id}",
        likes_count=12,
        created_at="2024-03-05T23:30:00+09:00",
        tags=tags,
    )


def test_empty_collection_exports_nothing():
    assert to_csv([]) is None


def test_csv_starts_with_bom_and_fixed_header():
    text = to_csv([_article()])

    assert text.startswith("\ufeff")
    first_line = text[1:].split("\n")[0]
    assert first_line == '"title","url","likes","created-date","tags"'


def test_every_field_is_quoted_and_date_is_formatted():
    text = to_csv([_article(tags=("Python", "AWS", "Python"))])
    row = text.split("\n")[1]

    assert row == (
        '"Hello","https://qiita.com/alice/items/abc","12","2024/03/05","Python AWS Python"'
    )


def test_embedded_quotes_are_doubled_and_reparse_to_original():
    title = 'Why "async" matters, really'
    text = to_csv([_article(title=title)])

    assert '"Why ""async"" matters, really"' in text
    rows = list(csv.reader(io.StringIO(text.lstrip("\ufeff"))))
    assert rows[1][0] == title


def test_rows_follow_supplied_order():
    articles = [_article("z", "zeta"), _article("a", "alpha"), _article("m", "mu")]

    rows = list(csv.reader(io.StringIO(to_csv(articles).lstrip("\ufeff"))))

    assert [row[0] for row in rows[1:]] == ["zeta", "alpha", "mu"]


def test_output_has_no_trailing_newline():
    assert not to_csv([_article()]).endswith("\n")


def test_custom_date_format():
    text = to_csv([_article()], date_format="%d.%m.%Y")

    assert '"05.03.2024"' in text


def test_export_filename_uses_suffix():
    assert export_filename("alice") == "alice_qiita_articles.csv"
    assert export_filename("alice", ExportConfig(filename_suffix=".csv")) == "alice.csv"


def test_write_csv_writes_utf8_bytes_with_bom(tmp_path: Path):
    path = write_csv(tmp_path / "out" / "alice.csv", [_article(title="日本語タイトル")])

    data = path.read_bytes()
    assert data.startswith(b"\xef\xbb\xbf")
    assert "日本語タイトル" in data.decode("utf-8")


def test_write_csv_skips_empty_collection(tmp_path: Path):
    target = tmp_path / "empty.csv"

    assert write_csv(target, []) is None
    assert not target.exists()
