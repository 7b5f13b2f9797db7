"""qute-readability - Reader view for qutebrowser"""

__version__ = "0.1.0"

from .extractor import ReadabilityExtractor
from .models import Article
from .pipeline import ReaderView

__all__ = ["Article", "ReadabilityExtractor", "ReaderView", "main"]


def main() -> None:
    # Imported lazily so the library path does not pull in the CLI
    from .__main__ import main as _main

    _main()
