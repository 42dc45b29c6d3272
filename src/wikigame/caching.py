import logging

from . import config
from .utils import get_json, safe_get

logger = logging.getLogger(__name__)


class LabelCache:
    """Run-scoped id -> English label map. Entries are never replaced or evicted."""

    def __init__(self):
        self._labels = {}

    def get(self, entity_id):
        return self._labels.get(entity_id)

    def add(self, entity_id, label):
        self._labels.setdefault(entity_id, label)
        return self._labels[entity_id]

    def __contains__(self, entity_id):
        return entity_id in self._labels

    def __len__(self):
        return len(self._labels)


class LabelResolver:
    """Resolve type/occupation ids to English labels through a LabelCache."""

    def __init__(self, session, cache=None, lang=config.LABEL_LANG):
        self.session = session
        self.cache = cache if cache is not None else LabelCache()
        self.lang = lang
        self.stats = {
            "cache_hits": 0,
            "cache_misses": 0,
            "network_calls": 0,
            "failures": 0,
        }

    def resolve(self, entity_id):
        """Return the label for entity_id, or None when it cannot be resolved."""
        cached = self.cache.get(entity_id)
        if cached is not None:
            self.stats["cache_hits"] += 1
            return cached
        self.stats["cache_misses"] += 1
        label = self._fetch_label(entity_id)
        if label is None:
            self.stats["failures"] += 1
            return None
        return self.cache.add(entity_id, label)

    def resolve_many(self, entity_ids):
        """Resolve ids in claim order, one label per claim; unresolved ids are dropped."""
        labels = []
        for entity_id in entity_ids:
            label = self.resolve(entity_id)
            if label is not None:
                labels.append(label)
        return labels

    def _fetch_label(self, entity_id):
        params = {
            "action": "wbgetentities",
            "props": "labels",
            "ids": entity_id,
            "languages": self.lang,
            "format": "json",
        }
        self.stats["network_calls"] += 1
        data = get_json(
            self.session,
            config.WIKIDATA_API_ENDPOINT,
            params,
            service="wikidata API",
            subject=entity_id,
        )
        if data is None:
            return None
        label = safe_get(data, "entities", entity_id, "labels", self.lang, "value")
        if not isinstance(label, str):
            logger.warning("[!] No %s label in wikidata response for %s", self.lang, entity_id)
            return None
        return label
