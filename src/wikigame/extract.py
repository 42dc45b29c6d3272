"""
Field extractors over a single raw entity record.

Every extractor returns None when the field is absent. Records may come from
the pre-processed dump (plain strings everywhere) or straight from the
official Wikidata JSON dump (language maps of {"value": ...}, sitelinks of
{"title": ...} and full statements under claims); both shapes give the same
plain values.
"""

import logging
from dataclasses import dataclass

from . import config
from .utils import first_letter_upper, safe_get

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DateProvenance:
    date_prop_id: str
    year: int


def _text(node, key="value"):
    if isinstance(node, str):
        return node
    if isinstance(node, dict) and isinstance(node.get(key), str):
        return node[key]
    return None


def _claim_value(claim):
    """Return the plain value of a claim: an entity id, a date string or a literal."""
    if isinstance(claim, str):
        return claim
    value = safe_get(claim, "mainsnak", "datavalue", "value")
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        for key in ("id", "time"):
            if isinstance(value.get(key), str):
                return value[key]
    return None


def claim_values(record, property_id):
    """Return the plain values claimed for property_id, or None when unclaimed."""
    claims = safe_get(record, "claims", property_id)
    if not isinstance(claims, list):
        return None
    values = []
    for claim in claims:
        value = _claim_value(claim)
        if value is not None:
            values.append(value)
    return values


def get_id(record):
    entity_id = record.get("id")
    return entity_id if isinstance(entity_id, str) else None


def get_wikipedia_title(record):
    return _text(safe_get(record, "sitelinks", config.WIKIPEDIA_SITE), key="title")


def get_label(record):
    return _text(safe_get(record, "labels", config.LABEL_LANG))


def get_description(record):
    description = _text(safe_get(record, "descriptions", config.LABEL_LANG))
    if description is None:
        return None
    return first_letter_upper(description)


def parse_year(date):
    """
    Return the year of a dump date string, negative for BCE.

    "-0044-01-01" -> -44, "1969-07-20" -> 1969, "+1969-07-20T00:00:00Z" -> 1969.
    """
    if not isinstance(date, str) or not date:
        return None
    bce = date.startswith("-")
    if bce or date.startswith("+"):
        date = date[1:]
    try:
        year = int(date.split("-")[0])
    except ValueError:
        return None
    return -year if bce else year


def get_date_provenance(record, date_props=config.DATE_PROPS):
    """Return the year of the highest ranked date property the record carries."""
    for prop_id, _description in date_props:
        dates = claim_values(record, prop_id)
        if not dates:
            continue
        year = parse_year(dates[0])
        if year is None:
            logger.debug("Unparsable %s date %r", prop_id, dates[0])
            return None
        return DateProvenance(date_prop_id=prop_id, year=year)
    logger.debug("No date prop found")
    return None


def get_instance_of_ids(record):
    return claim_values(record, config.INSTANCE_OF_PROPERTY)


def get_occupation_ids(record):
    return claim_values(record, config.OCCUPATION_PROPERTY)


def get_num_sitelinks(record):
    sitelinks = record.get("sitelinks")
    if not isinstance(sitelinks, dict):
        return None
    return len(sitelinks)
