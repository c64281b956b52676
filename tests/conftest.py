import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

import httpx
import pytest

from apa_citations.app import CitationGeneratorApp
from apa_citations.config import GeneratorConfig
from apa_citations.rendering import CitationEngine, CitationRenderer
from apa_citations.sources import ResourceFetcher

STYLE_URL = "https://styles.test/apa.csl"
LOCALE_URL = "https://locales.test/locales-en-US.xml"
SHEET_TEMPLATE = "https://sheets.test/d/{sheet_id}/export?format=csv&gid=0"

STYLE_DOCUMENT = """<?xml version="1.0" encoding="utf-8"?>
<style xmlns="http://purl.org/net/xbiblio/csl" class="in-text" version="1.0">
  <info>
    <title>Minimal test style</title>
    <id>http://example.org/styles/minimal</id>
    <updated>2024-01-01T00:00:00+00:00</updated>
  </info>
  <citation>
    <layout>
      <text variable="title"/>
    </layout>
  </citation>
  <bibliography>
    <layout suffix=".">
      <text variable="title" font-style="italic"/>
      <text variable="container-title" prefix=", "/>
    </layout>
  </bibliography>
</style>
"""

LOCALE_DOCUMENT = """<?xml version="1.0" encoding="utf-8"?>
<locale xmlns="http://purl.org/net/xbiblio/csl" version="1.0" xml:lang="en-US">
  <terms>
    <term name="and">and</term>
  </terms>
</locale>
"""

SAMPLE_CSV = """Title,Author(s),Year,Journal,Volume,Pages,DOI,Source Type
Deep Learning,"LeCun, Yann; Bengio, Yoshua; Hinton, Geoffrey",2015,Nature,521(7553),436-444,https://doi.org/10.1038/nature14539,Journal Article
,,2020,,,,,Journal Article
The Web Page,Acme,2021,,,,https://example.com/page,Website
"""


class FakeEngine(CitationEngine):
    """Renders ``<div>`` entries from the looked-up items."""

    def __init__(self, context, style):
        self.context = context
        self.style = style
        self.ids = []

    def update_items(self, item_ids):
        self.ids = list(item_ids)

    def make_bibliography(self):
        fragments = []
        for item_id in self.ids:
            item = self.context.retrieve_item(item_id)
            title = item.get("title", "Untitled")
            year = item.get("issued", {}).get("date-parts", [["n.d."]])[0][0]
            fragments.append(f'<div class="csl-entry">\n  <i>{title}</i>   ({year}).\n</div>')
        return {"entry_count": len(fragments)}, fragments


def build_transport(overrides=None):
    """Serve the style, locale and sample sheet.

    ``overrides`` maps a URL to body text, an HTTP status code, or an exception.
    """

    responses = {
        STYLE_URL: STYLE_DOCUMENT,
        LOCALE_URL: LOCALE_DOCUMENT,
        SHEET_TEMPLATE.format(sheet_id="abc123"): SAMPLE_CSV,
    }
    responses.update(overrides or {})
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        requested.append(url)
        response = responses.get(url, 404)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, int):
            return httpx.Response(response)
        return httpx.Response(200, text=response)

    transport = httpx.MockTransport(handler)
    transport.requested = requested  # type: ignore[attr-defined]
    return transport


@pytest.fixture()
def test_config() -> GeneratorConfig:
    return GeneratorConfig(
        style_url=STYLE_URL,
        locale_url=LOCALE_URL,
        sheet_export_template=SHEET_TEMPLATE,
    )


@pytest.fixture()
def fake_renderer() -> CitationRenderer:
    return CitationRenderer(engine_factory=FakeEngine)


@pytest.fixture()
def make_generator(test_config, fake_renderer):
    def factory(overrides=None, renderer=None):
        transport = build_transport(overrides)
        fetcher = ResourceFetcher(transport=transport)
        generator = CitationGeneratorApp(
            config=test_config,
            fetcher=fetcher,
            renderer=renderer or fake_renderer,
        )
        generator.transport = transport
        return generator

    return factory


@pytest.fixture()
def sample_csv() -> str:
    return SAMPLE_CSV


@pytest.fixture()
def style_document() -> str:
    return STYLE_DOCUMENT


@pytest.fixture()
def locale_document() -> str:
    return LOCALE_DOCUMENT
