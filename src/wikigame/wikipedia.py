import logging
from dataclasses import dataclass

from . import config
from .utils import get_json, safe_get, wiki_title

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageInfo:
    label: str
    image: str


class WikipediaClient:
    """Canonical title and representative image lookups on English Wikipedia."""

    def __init__(self, session):
        self.session = session
        self.stats = {"network_calls": 0, "failures": 0}

    def get_page_info(self, title):
        """Return the resolved page title and its page image, or None."""
        params = {
            "action": "query",
            "format": "json",
            "formatversion": 2,
            "prop": "pageimages",
            "titles": wiki_title(title),
        }
        self.stats["network_calls"] += 1
        data = get_json(
            self.session,
            config.WIKIPEDIA_API_ENDPOINT,
            params,
            service="wikipedia API",
            subject=title,
        )
        info = self._parse_page(data, title)
        if info is None:
            self.stats["failures"] += 1
        return info

    @staticmethod
    def _parse_page(data, title):
        if data is None:
            return None
        pages = safe_get(data, "query", "pages")
        if not isinstance(pages, list):
            logger.warning("[!] Can't parse wikipedia response for %s: missing pages", title)
            return None
        if not pages:
            logger.warning("[!] Empty pages returned from wikipedia API for %s", title)
            return None
        page = pages[0] if isinstance(pages[0], dict) else {}
        label = page.get("title")
        image = page.get("pageimage")
        if not isinstance(label, str) or not isinstance(image, str):
            logger.warning("[!] Can't parse wikipedia response for %s: page has no title or image", title)
            return None
        return PageInfo(label=label, image=image)
