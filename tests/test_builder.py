from apa_citations.builder import CitationItemBuilder
from apa_citations.logging import RunLog
from apa_citations.models import LiteralName, PersonName


def _build(row, index=0, log=None):
    return CitationItemBuilder().build(row, index, log)


def test_builds_full_journal_article():
    row = {
        "Title": "Deep Learning",
        "Author(s)": "LeCun, Yann; Bengio, Yoshua",
        "Year": "2015",
        "Journal": "Nature",
        "Volume": "521(7553)",
        "Pages": "436-444",
        "DOI": "https://doi.org/10.1038/nature14539",
        "Publisher": "Springer Nature",
        "Source Type": "Journal Article",
    }
    item = _build(row, index=4)

    assert item.id == "item_5"
    assert item.type == "article-journal"
    assert item.title == "Deep Learning"
    assert item.author == (
        PersonName(family="LeCun", given="Yann"),
        PersonName(family="Bengio", given="Yoshua"),
    )
    assert item.issued == 2015
    assert item.container_title == "Nature"
    assert item.volume == "521"
    assert item.issue == "7553"
    assert item.page == "436-444"
    assert item.doi == "10.1038/nature14539"
    assert item.url is None
    assert item.publisher == "Springer Nature"


def test_csl_output_uses_csl_keys_and_omits_missing_fields():
    item = _build({"Title": "Only title", "Year": "1999", "DOI": "10.5555/y"})
    assert item.to_csl() == {
        "id": "item_1",
        "type": "article-journal",
        "title": "Only title",
        "issued": {"date-parts": [[1999]]},
        "DOI": "10.5555/y",
    }


def test_literal_author_is_serialized_as_literal():
    item = _build({"Title": "Report", "Author": "UNESCO", "Source Type": "report"})
    assert item.author == (LiteralName(literal="UNESCO"),)
    assert item.to_csl()["author"] == [{"literal": "UNESCO"}]


def test_issue_column_used_only_when_volume_has_no_issue():
    assert _build({"Volume": "12", "Issue": "4"}).issue == "4"
    assert _build({"Volume": "12(3)", "Issue": "4"}).issue == "3"
    assert _build({"Volume-Issue": "vol. 2 no. 9"}).volume == "2"


def test_url_identifier_and_separate_url_column():
    item = _build({"DOI/URL": "https://example.com/a", "URL": "https://other.example"})
    assert item.url == "https://example.com/a"
    assert item.doi is None

    item = _build({"URL": "https://example.org/page"})
    assert item.url == "https://example.org/page"

    item = _build({"DOI": "10.1/abc", "URL": "https://example.org/page"})
    assert item.doi == "10.1/abc"
    assert item.url is None

    assert _build({"URL": "www.example.org"}).url is None


def test_unrecognized_identifier_is_ignored():
    item = _build({"DOI": "doi:10.1/abc"})
    assert item.doi is None
    assert item.url is None


def test_missing_fields_emit_notes_without_rejecting():
    log = RunLog()
    item = _build({"Year": "n.d."}, index=2, log=log)

    assert item.id == "item_3"
    assert item.title is None
    assert item.author == ()
    assert item.issued is None
    messages = [entry.message for entry in log.entries]
    assert "Item 3: Missing title" in messages
    assert "Item 3: No valid authors found" in messages
    assert "Item 3: Invalid or missing year: n.d." in messages
    assert any(message.startswith("Created CSL item 3:") for message in messages)


def test_build_all_assigns_ids_by_position_and_is_repeatable():
    rows = [{"Title": "A"}, {"Title": "B"}, {}]
    builder = CitationItemBuilder()
    first = builder.build_all(rows)
    second = builder.build_all(rows)

    assert [item.id for item in first] == ["item_1", "item_2", "item_3"]
    assert first == second


def test_whitespace_only_source_type_maps_to_webpage():
    assert _build({"Title": "T", "Source Type": "   "}).type == "webpage"
    assert _build({"Title": "T", "Source Type": ""}).type == "article-journal"
    assert _build({"Title": "T"}).type == "article-journal"
