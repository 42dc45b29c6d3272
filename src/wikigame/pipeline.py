import json
import logging
from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from . import config, extract, rules
from .caching import LabelCache, LabelResolver
from .popularity import PageviewClient
from .utils import new_session
from .wikipedia import WikipediaClient

logger = logging.getLogger(__name__)

# Rejection stages in evaluation order.
STAGES = (
    "label",
    "description",
    "id",
    "wikipedia_title",
    "date",
    "instance_of",
    "sitelinks",
    "page_views",
    "page_info",
)


@dataclass(frozen=True)
class Item:
    date_prop_id: str
    description: str
    id: str
    image: str
    instance_of: List[str]
    label: str
    occupations: Optional[List[str]]
    page_views: int
    wikipedia_title: str
    year: int

    def to_dict(self) -> Dict[str, Any]:
        """Return the output record; occupations is left out when none were claimed."""
        record = {
            "date_prop_id": self.date_prop_id,
            "description": self.description,
            "id": self.id,
            "image": self.image,
            "instance_of": list(self.instance_of),
            "label": self.label,
            "page_views": self.page_views,
            "wikipedia_title": self.wikipedia_title,
            "year": self.year,
        }
        if self.occupations is not None:
            record["occupations"] = list(self.occupations)
        return record


class ItemPipeline:
    """
    Evaluate raw entity records one at a time and assemble accepted Items.

    Rules run in a fixed order and the first failing rule rejects the record;
    later rules, and the network calls they need, never see it. The label
    cache lives as long as the pipeline, i.e. one run.
    """

    def __init__(
        self,
        session=None,
        label_resolver=None,
        pageviews=None,
        wikipedia=None,
        date_props=config.DATE_PROPS,
    ):
        session = session if session is not None else new_session()
        self.labels = label_resolver or LabelResolver(session, LabelCache())
        self.pageviews = pageviews or PageviewClient(session)
        self.wikipedia = wikipedia or WikipediaClient(session)
        self.date_props = date_props
        self.rejections = Counter()

    @property
    def label_cache(self):
        return self.labels.cache

    def _reject(self, stage):
        self.rejections[stage] += 1
        return None

    def process_line(self, line):
        """Decode one JSON line and evaluate it. Malformed JSON raises ValueError."""
        record = json.loads(line)
        if not isinstance(record, dict):
            raise ValueError(f"Expected a JSON object, got {type(record).__name__}")
        return self.process(record)

    def process(self, record) -> Optional[Item]:
        """Return the Item for an accepted record, or None when any rule rejects it."""
        label = extract.get_label(record)
        if label is None or not rules.ok_label(label):
            return self._reject("label")

        description = extract.get_description(record)
        if description is None or not rules.ok_description(description):
            return self._reject("description")

        entity_id = extract.get_id(record)
        if entity_id is None:
            return self._reject("id")
        wikipedia_title = extract.get_wikipedia_title(record)
        if wikipedia_title is None:
            return self._reject("wikipedia_title")
        provenance = extract.get_date_provenance(record, self.date_props)
        if provenance is None:
            return self._reject("date")

        instance_of_ids = extract.get_instance_of_ids(record)
        if instance_of_ids is None:
            return self._reject("instance_of")
        instance_of = self.labels.resolve_many(instance_of_ids)
        if not rules.ok_instance_of(instance_of):
            return self._reject("instance_of")

        occupation_ids = extract.get_occupation_ids(record)
        occupations = None
        if occupation_ids is not None:
            occupations = self.labels.resolve_many(occupation_ids)

        num_sitelinks = extract.get_num_sitelinks(record)
        if num_sitelinks is None or not rules.enough_sitelinks(num_sitelinks):
            return self._reject("sitelinks")

        page_views = self.pageviews.get_page_views(wikipedia_title)
        if page_views is None or not rules.enough_page_views(provenance.year, instance_of, page_views):
            return self._reject("page_views")

        page_info = self.wikipedia.get_page_info(wikipedia_title)
        if page_info is None:
            return self._reject("page_info")

        return Item(
            date_prop_id=provenance.date_prop_id,
            description=description,
            id=entity_id,
            image=page_info.image,
            instance_of=instance_of,
            label=page_info.label,
            occupations=occupations,
            page_views=page_views,
            wikipedia_title=wikipedia_title,
            year=provenance.year,
        )

    def stats(self):
        """Return a JSON-friendly snapshot of pipeline and resolver counters."""
        return {
            "rejections": {stage: self.rejections.get(stage, 0) for stage in STAGES},
            "label_cache_size": len(self.label_cache),
            "labels": dict(self.labels.stats),
            "page_views": dict(self.pageviews.stats),
            "wikipedia": dict(self.wikipedia.stats),
        }
