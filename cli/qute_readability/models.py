"""Data models for the reader view."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse


@dataclass
class Article:
    """Simplified article produced by readability."""

    title: str
    content: str
    url: str
    site_name: Optional[str] = None

    @property
    def subtitle(self) -> str:
        """Site name shown under the title, falling back to the URL's host."""
        if self.site_name and self.site_name.strip():
            return self.site_name.strip()
        hostname = urlparse(self.url).hostname
        return hostname or self.url
