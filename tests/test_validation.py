from apa_citations.models import CitationItem, LiteralName
from apa_citations.validation import validate_items


def test_journal_article_without_journal_is_rejected():
    item = CitationItem(id="item_1", type="article-journal", title="Has a title")
    outcome = validate_items([item])

    assert outcome.valid == ()
    assert outcome.errors == ["Item 1: Journal articles require a journal name"]
    assert outcome.issues[0].code == "article-journal-missing-journal"
    assert outcome.rejected_ids == ["item_1"]


def test_item_without_title_or_author_is_rejected():
    item = CitationItem(id="item_1", type="webpage", url="https://example.com")
    outcome = validate_items([item])

    assert outcome.valid == ()
    assert outcome.errors == ["Item 1: Missing both title and author"]


def test_item_can_collect_both_reasons():
    outcome = validate_items([CitationItem(id="item_1", type="article-journal")])
    assert outcome.errors == [
        "Item 1: Missing both title and author",
        "Item 1: Journal articles require a journal name",
    ]


def test_author_alone_is_enough_for_non_journal_types():
    item = CitationItem(id="item_1", type="book", author=(LiteralName("Acme"),))
    assert validate_items([item]).valid == (item,)


def test_order_is_preserved_in_valid_items_and_errors():
    items = [
        CitationItem(id="item_1", type="book", title="First"),
        CitationItem(id="item_2", type="article-journal", title="Bad"),
        CitationItem(id="item_3", type="webpage", title="Third"),
        CitationItem(id="item_4", type="report"),
        CitationItem(id="item_5", type="article-journal", title="Ok", container_title="J"),
    ]
    outcome = validate_items(items)

    assert [item.id for item in outcome.valid] == ["item_1", "item_3", "item_5"]
    assert outcome.errors == [
        "Item 2: Journal articles require a journal name",
        "Item 4: Missing both title and author",
    ]
    assert outcome.rejected_ids == ["item_2", "item_4"]
