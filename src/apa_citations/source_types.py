"""Source type vocabulary and free-text type mapping."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceType:
    key: str
    label: str


SOURCE_TYPES = {
    "article-journal": SourceType("article-journal", "Journal Article"),
    "article-newspaper": SourceType("article-newspaper", "Newspaper Article"),
    "article-magazine": SourceType("article-magazine", "Magazine Article"),
    "book": SourceType("book", "Book"),
    "chapter": SourceType("chapter", "Book Chapter"),
    "paper-conference": SourceType("paper-conference", "Conference Paper"),
    "thesis": SourceType("thesis", "Thesis"),
    "report": SourceType("report", "Report"),
    "webpage": SourceType("webpage", "Webpage"),
    "post-weblog": SourceType("post-weblog", "Blog Post"),
    "review": SourceType("review", "Review"),
}

JOURNAL_ARTICLE = "article-journal"
DEFAULT_UNKNOWN_TYPE = "webpage"


_TYPE_SYNONYMS = {
    "journal article": "article-journal",
    "journal": "article-journal",
    "article": "article-journal",
    "news article": "article-newspaper",
    "newspaper": "article-newspaper",
    "magazine": "article-magazine",
    "book": "book",
    "book chapter": "chapter",
    "chapter": "chapter",
    "conference paper": "paper-conference",
    "conference": "paper-conference",
    "thesis": "thesis",
    "dissertation": "thesis",
    "report": "report",
    "webpage": "webpage",
    "website": "webpage",
    "blog post": "post-weblog",
    "blog": "post-weblog",
    "review": "review",
}


def map_source_type(raw_type: object) -> str:
    """Return the CSL type for a free-text source type.

    No type text at all yields a journal article, while text that is present
    but not in the synonym table yields a webpage.
    """
    if not raw_type or not isinstance(raw_type, str):
        return JOURNAL_ARTICLE
    return _TYPE_SYNONYMS.get(raw_type.lower().strip(), DEFAULT_UNKNOWN_TYPE)


def label_for_type(type_key: str | None) -> str:
    if not type_key or type_key not in SOURCE_TYPES:
        return "Unknown"
    return SOURCE_TYPES[type_key].label
