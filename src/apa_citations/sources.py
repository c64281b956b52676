"""Remote resource retrieval: spreadsheet exports, styles and locales."""
from __future__ import annotations

import re
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Mapping, Optional

import httpx

from .config import DEFAULT_SHEET_EXPORT_TEMPLATE
from .errors import FetchError, MalformedSheetUrlError

SHEET_ID_PATTERN = re.compile(r"/d/([a-zA-Z0-9-_]+)")


def build_sheet_csv_url(
    share_url: str, template: str = DEFAULT_SHEET_EXPORT_TEMPLATE
) -> str:
    """Derive the CSV export URL from a Google Sheets share URL."""
    match = SHEET_ID_PATTERN.search(share_url or "")
    if not match:
        raise MalformedSheetUrlError(
            "Invalid Google Sheets URL format. Please ensure you're using a sharing URL."
        )
    return template.format(sheet_id=match.group(1))


class ResourceFetcher:
    """Downloads text resources over HTTP with no retries."""

    def __init__(
        self,
        timeout: float = 15.0,
        user_agent: str = "apa-citation-generator/0.1",
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.timeout = timeout
        self._client = httpx.Client(
            timeout=timeout,
            headers={"User-Agent": user_agent},
            follow_redirects=True,
            transport=transport,
        )

    def fetch_text(self, url: str, resource_name: str) -> str:
        return self._download(url, resource_name, f"Could not download {resource_name}")

    def fetch_sheet(self, share_url: str, template: str = DEFAULT_SHEET_EXPORT_TEMPLATE) -> str:
        csv_url = build_sheet_csv_url(share_url, template)
        return self._download(csv_url, "Google Sheet", "Failed to fetch from Google Sheet")

    def _download(self, url: str, resource_name: str, prefix: str) -> str:
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            reason = exc.response.reason_phrase or str(exc.response.status_code)
            raise FetchError(f"{prefix}: {reason}", resource=resource_name) from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"{prefix}: {exc}", resource=resource_name) from exc
        return response.text

    def fetch_all(self, named_urls: Mapping[str, str]) -> Dict[str, str]:
        """Fetch several resources concurrently; the first failure in order is raised."""
        if not named_urls:
            return {}
        with ThreadPoolExecutor(max_workers=len(named_urls)) as executor:
            futures = {
                name: executor.submit(self.fetch_text, url, name)
                for name, url in named_urls.items()
            }
            return {name: future.result() for name, future in futures.items()}

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ResourceFetcher":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
