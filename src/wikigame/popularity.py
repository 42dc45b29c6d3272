import logging
from urllib.parse import quote

from . import config
from .utils import get_json, wiki_title

logger = logging.getLogger(__name__)


class PageviewClient:
    """Monthly page view lookups against the Wikimedia pageviews API."""

    def __init__(
        self,
        session,
        project=config.PAGEVIEWS_PROJECT,
        access=config.PAGEVIEWS_ACCESS,
        agent=config.PAGEVIEWS_AGENT,
        granularity=config.PAGEVIEWS_GRANULARITY,
        start=config.PAGEVIEWS_START,
        end=config.PAGEVIEWS_END,
    ):
        self.session = session
        self.project = project
        self.access = access
        self.agent = agent
        self.granularity = granularity
        self.start = start
        self.end = end
        self.stats = {"network_calls": 0, "failures": 0}

    def article_url(self, title):
        return config.PAGEVIEWS_ENDPOINT.format(
            project=self.project,
            access=self.access,
            agent=self.agent,
            article=quote(wiki_title(title), safe=""),
            granularity=self.granularity,
            start=self.start,
            end=self.end,
        )

    def get_page_views(self, title):
        """Return views of the first bucket in the window, or None."""
        self.stats["network_calls"] += 1
        data = get_json(self.session, self.article_url(title), service="page views API", subject=title)
        views = self._first_bucket_views(data, title)
        if views is None:
            self.stats["failures"] += 1
        return views

    @staticmethod
    def _first_bucket_views(data, title):
        if data is None:
            return None
        items = data.get("items") if isinstance(data, dict) else None
        if not isinstance(items, list):
            logger.warning("[!] Can't parse page views response for %s: missing items", title)
            return None
        if not items:
            logger.warning("[!] Empty items returned from page views API for %s", title)
            return None
        views = items[0].get("views") if isinstance(items[0], dict) else None
        if not isinstance(views, int) or isinstance(views, bool) or views < 0:
            logger.warning("[!] Can't parse page views response for %s: bad views %r", title, views)
            return None
        return views
