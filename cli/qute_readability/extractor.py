from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple, Union
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup
from lxml.etree import ParserError
from readability import Document
from readability.readability import Unparseable
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .exceptions import ExtractionError, FetchError
from .models import Article

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled"


class ReadabilityExtractor:
    """Turn a web page into a simplified :class:`Article` with readability-lxml."""

    _REMOVED_TAGS = ["script", "style", "iframe", "noscript", "form", "object", "embed"]
    _IMAGE_SRC_ATTRS = (
        "data-src",
        "data-original",
        "data-url",
        "data-actualsrc",
        "data-lazy-src",
        "data-srcset",
        "data-original-src",
        "src",
    )

    def __init__(self, timeout: int = 10):
        self.timeout = timeout

        self._session = self._build_session()
        self._default_headers = {
            "User-Agent": (
                "Mozilla/5.0 (X11; Linux x86_64) "
                "AppleWebKit/537.36 (KHTML, like Gecko) "
                "Chrome/120.0.0.0 Safari/537.36"
            ),
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        }

    def _build_session(self) -> requests.Session:
        session = requests.Session()
        retry = Retry(
            total=3,
            connect=3,
            read=3,
            backoff_factor=0.6,
            status_forcelist=(429, 500, 502, 503, 504),
            allowed_methods=frozenset({"GET", "HEAD", "OPTIONS"}),
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        return session

    def fetch_html(self, url: str) -> str:
        """Download ``url`` and return its HTML.

        Raises:
            FetchError: on network errors and HTTP error statuses.
        """
        logger.info("Fetching %s", url)
        try:
            response = self._session.get(
                url,
                timeout=self.timeout,
                headers=self._default_headers,
                allow_redirects=True,
            )
            if response.status_code >= 400:
                response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(f"Failed to download page: {e}") from e

        if not response.encoding or response.encoding.lower() in {"iso-8859-1", "ascii"}:
            response.encoding = response.apparent_encoding or "utf-8"

        return response.text

    def read_html(self, path: Union[str, Path]) -> str:
        """Read a page qutebrowser dumped to disk."""
        path = Path(path)
        logger.info("Reading page from %s", path)
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise FetchError(f"Failed to read {path}: {e}") from e

    def extract_from_url(self, url: str) -> Article:
        return self.extract(self.fetch_html(url), url)

    def extract_from_file(self, path: Union[str, Path], url: str) -> Article:
        return self.extract(self.read_html(path), url)

    def extract(self, html: str, url: str) -> Article:
        """Run readability on ``html`` and collect title, site name and content.

        ``url`` is the address the page was loaded from; relative links and
        images in the content are resolved against it.

        Raises:
            ExtractionError: readability failed or found no readable text.
        """
        if not html or not html.strip():
            raise ExtractionError(f"Empty page: {url}")

        soup = BeautifulSoup(html, "html.parser")
        json_ld = self._extract_json_ld(soup)

        title, content_html = self._extract_with_readability(html, url)
        cleaned_html = self._clean_and_normalize_html(content_html, base_url=url)
        if self._text_length(cleaned_html) == 0:
            raise ExtractionError(f"No readable content found at {url}")

        title = title or json_ld.get("title") or self._extract_title(soup) or DEFAULT_TITLE
        site_name = self._extract_site_name(soup) or json_ld.get("publisher")

        logger.info("Extracted %r (%d characters of text)", title, self._text_length(cleaned_html))
        return Article(title=title, content=cleaned_html, url=url, site_name=site_name)

    def _extract_with_readability(self, html: str, url: str) -> Tuple[Optional[str], str]:
        try:
            doc = Document(html, url=url)
            title = (doc.short_title() or "").strip() or None
            content_html = doc.summary(html_partial=True)
        except (Unparseable, ParserError, ValueError) as e:
            raise ExtractionError(f"Readability could not parse the page: {e}") from e
        return title, content_html

    def _extract_title(self, soup: BeautifulSoup) -> Optional[str]:
        og_title = soup.find("meta", property="og:title")
        if og_title and og_title.get("content", "").strip():
            return og_title["content"].strip()

        h1 = soup.find("h1")
        if h1 and h1.get_text(strip=True):
            return h1.get_text(" ", strip=True)

        title_tag = soup.find("title")
        if title_tag and title_tag.get_text(strip=True):
            return title_tag.get_text(strip=True)

        return None

    def _extract_site_name(self, soup: BeautifulSoup) -> Optional[str]:
        meta = (
            soup.find("meta", {"property": "og:site_name"})
            or soup.find("meta", {"name": "og:site_name"})
            or soup.find("meta", {"name": "application-name"})
        )
        if meta and meta.get("content", "").strip():
            return meta["content"].strip()
        return None

    def _text_length(self, html: str) -> int:
        soup = BeautifulSoup(html or "", "html.parser")
        return len(soup.get_text(" ", strip=True))

    def _clean_and_normalize_html(self, content_html: str, base_url: str) -> str:
        content_soup = BeautifulSoup(content_html or "", "html.parser")

        for tag in self._REMOVED_TAGS:
            for elem in content_soup.find_all(tag):
                elem.decompose()

        for a in content_soup.find_all("a"):
            href = a.get("href")
            if not href:
                continue
            href = href.strip()
            if href.startswith("#") or href.lower().startswith(("javascript:", "mailto:", "tel:")):
                continue
            a["href"] = urljoin(base_url, href)

        # lazy-loaded and relative images
        for img in content_soup.find_all("img"):
            src = self._best_image_src(img)
            if not src:
                img.decompose()
                continue
            if not src.startswith("data:"):
                src = urljoin(base_url, src)
            img["src"] = src
            for attr in ("srcset", "data-src", "data-srcset", "loading"):
                if attr in img.attrs:
                    del img[attr]

        return str(content_soup)

    def _best_image_src(self, img_tag: Any) -> Optional[str]:
        for attr in self._IMAGE_SRC_ATTRS:
            candidate = img_tag.get(attr)
            if not candidate or not isinstance(candidate, str):
                continue
            candidate = candidate.strip()
            if not candidate or self._looks_like_placeholder_image(candidate):
                continue
            if attr.endswith("srcset"):
                picked = self._pick_from_srcset(candidate)
                if picked:
                    return picked
                continue
            return candidate.split()[0]

        srcset = img_tag.get("srcset")
        if srcset and isinstance(srcset, str):
            return self._pick_from_srcset(srcset)

        return None

    def _pick_from_srcset(self, value: str) -> Optional[str]:
        value = value.strip()
        if not value:
            return None
        if value.startswith("data:"):
            return value
        if "," not in value:
            return value.split()[0]

        best_url = ""
        best_score = -1.0
        for part in value.split(","):
            part = part.strip()
            if not part:
                continue
            tokens = part.split()
            url = tokens[0]
            score = 0.0
            if len(tokens) >= 2:
                descriptor = tokens[1].strip().lower()
                if descriptor.endswith("w"):
                    try:
                        score = float(descriptor[:-1])
                    except ValueError:
                        score = 0.0
                elif descriptor.endswith("x"):
                    try:
                        score = float(descriptor[:-1]) * 1000.0
                    except ValueError:
                        score = 0.0
            if score >= best_score:
                best_score = score
                best_url = url

        return best_url or None

    def _looks_like_placeholder_image(self, url: str) -> bool:
        lowered = url.lower()
        skip_patterns = [
            "lazy_placeholder",
            "placeholder.gif",
            "pixel.gif",
            "1x1.gif",
            "blank.gif",
            "data:image/gif",
        ]
        return any(p in lowered for p in skip_patterns)

    def _extract_json_ld(self, soup: BeautifulSoup) -> Dict[str, str]:
        """Headline and publisher name from JSON-LD (schema.org) blocks."""
        result: Dict[str, str] = {}
        scripts = soup.find_all("script", type=lambda v: v and "ld+json" in v.lower())
        for script in scripts:
            raw = (script.string or script.get_text() or "").strip()
            if not raw:
                continue
            try:
                data = json.loads(raw)
            except ValueError:
                logger.debug("Skipping malformed JSON-LD block")
                continue

            for item in self._iter_json_ld_items(data):
                if not isinstance(item, dict):
                    continue

                if "title" not in result:
                    headline = item.get("headline")
                    if isinstance(headline, str) and headline.strip():
                        result["title"] = headline.strip()

                if "publisher" not in result:
                    publisher = item.get("publisher")
                    name: Optional[str] = None
                    if isinstance(publisher, dict):
                        name = publisher.get("name")
                    elif isinstance(publisher, list) and publisher and isinstance(publisher[0], dict):
                        name = publisher[0].get("name")
                    elif isinstance(publisher, str):
                        name = publisher
                    if isinstance(name, str) and name.strip():
                        result["publisher"] = name.strip()

            if {"title", "publisher"} <= set(result.keys()):
                break
        return result

    def _iter_json_ld_items(self, data: Any) -> Iterable[Any]:
        if isinstance(data, list):
            for item in data:
                yield from self._iter_json_ld_items(item)
            return
        if isinstance(data, dict):
            graph = data.get("@graph")
            if isinstance(graph, list):
                for item in graph:
                    yield item
            else:
                yield data
