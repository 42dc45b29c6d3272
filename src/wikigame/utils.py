import gzip
import io
import json
import logging
import time
from contextlib import contextmanager
from pathlib import Path

import requests
import zstandard as zstd

from . import config

logger = logging.getLogger(__name__)


def safe_get(payload, *keys, default=None):
    """Traverse nested dicts safely and return default on missing keys."""
    cur = payload
    for key in keys:
        if not isinstance(cur, dict) or key not in cur:
            return default
        cur = cur[key]
    return cur


def first_letter_upper(text):
    """Upper-case the first character and leave the rest untouched."""
    if not text:
        return ""
    return text[0].upper() + text[1:]


def wiki_title(title):
    """Return the URL form of a Wikipedia title (spaces become underscores)."""
    return title.replace(" ", "_")


def new_session():
    """Return the shared HTTP session used by every resolver."""
    return requests.Session()


def get_json(session, endpoint, params=None, *, service="API", subject=None):
    """
    GET a JSON document, pausing once on HTTP 429.

    A rate-limited response is not retried: after the pause its body is parsed
    as-is. Transport errors and unparsable bodies return None.
    """
    try:
        response = session.get(
            endpoint,
            headers=config.HEADERS,
            params=params,
            timeout=config.API_TIMEOUT,
        )
    except requests.RequestException as exc:
        logger.warning("[!] Got an error from %s for %s: %s", service, subject, exc)
        return None
    if response.status_code == 429:
        logger.warning(
            "[!] Rate limited by %s for %s, waiting %s seconds",
            service,
            subject,
            config.RATE_LIMIT_PAUSE_SECONDS,
        )
        time.sleep(config.RATE_LIMIT_PAUSE_SECONDS)
    try:
        return response.json()
    except ValueError as exc:
        logger.warning("[!] Can't parse %s response for %s: %s", service, subject, exc)
        return None


@contextmanager
def open_dump(path):
    """
    Open a plain, gzip or zstd compressed line-delimited dump as bytes.

    Lines are decoded by the caller so one bad line cannot end the stream.
    """
    path = Path(path)
    if path.suffix == ".gz":
        with gzip.open(path, "rb") as fh:
            yield fh
    elif path.suffix == ".zst":
        with open(path, "rb") as raw:
            reader = zstd.ZstdDecompressor().stream_reader(raw)
            with io.BufferedReader(reader) as fh:
                yield fh
    else:
        with open(path, "rb") as fh:
            yield fh


def strip_dump_line(line):
    """
    Return the JSON payload of a dump line, or None for framing lines.

    Handles both one-object-per-line files and the official Wikidata dump,
    which wraps entities in a JSON array with a trailing comma per line.
    Byte lines are decoded as UTF-8; UnicodeDecodeError is left to the caller.
    """
    if isinstance(line, bytes):
        line = line.decode("utf-8")
    line = line.strip()
    if line.endswith(","):
        line = line[:-1]
    if not line or line in {"[", "]"}:
        return None
    return line


def append_jsonl_record(file_handle, record):
    """Append a single JSONL record to an open file handle."""
    file_handle.write(json.dumps(record, ensure_ascii=False))
    file_handle.write("\n")


def format_elapsed(seconds):
    """Return compact HH:MM:SS elapsed display."""
    total = max(0, int(seconds))
    hours, rem = divmod(total, 3600)
    minutes, secs = divmod(rem, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
