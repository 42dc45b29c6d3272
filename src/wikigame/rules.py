import logging

from . import config

logger = logging.getLogger(__name__)


def _first_match(text, patterns):
    for pattern in patterns:
        if pattern.search(text):
            return pattern
    return None


def ok_label(label):
    """Return False when the label hits the label blocklist."""
    pattern = _first_match(label, config.LABEL_BLOCKLIST)
    if pattern is not None:
        logger.debug("Label %r is in label blocklist (%s)", label, pattern.pattern)
        return False
    return True


def ok_description(description):
    """Return False when the description hits the description blocklist."""
    pattern = _first_match(description, config.DESCRIPTION_BLOCKLIST)
    if pattern is not None:
        logger.debug("Description %r is in description blocklist (%s)", description, pattern.pattern)
        return False
    return True


def ok_instance_of(instance_of):
    excluded = config.EXCLUDED_TYPE_LABELS.intersection(instance_of)
    if excluded:
        logger.debug("Ignore %s instances", ", ".join(sorted(excluded)))
        return False
    return True


def enough_sitelinks(num_sitelinks, minimum=config.MIN_SITELINKS):
    if num_sitelinks < minimum:
        logger.debug("Not enough sitelinks (%s < %s)", num_sitelinks, minimum)
        return False
    return True


def required_page_views(year, cascade):
    """Return the minimum views the first matching era of the cascade demands."""
    for after_year, minimum in cascade:
        if after_year is None or year > after_year:
            return minimum
    return cascade[-1][1]


def enough_page_views(year, instance_of, page_views):
    """Humans must clear the human cascade; every item must clear the general one."""
    if config.HUMAN_TYPE_LABEL in instance_of:
        minimum = required_page_views(year, config.HUMAN_PAGE_VIEW_CASCADE)
        if page_views < minimum:
            logger.debug("Not enough page views for a human from %s (%s < %s)", year, page_views, minimum)
            return False
    minimum = required_page_views(year, config.GENERAL_PAGE_VIEW_CASCADE)
    if page_views < minimum:
        logger.debug("Not enough page views for %s (%s < %s)", year, page_views, minimum)
        return False
    return True
