#!/usr/bin/env python3
"""
selector.py -- wiki-game item selection

Reads:
  - processed.json  (one Wikidata entity per line; .gz/.zst and the official
                     JSON array dump are accepted too)
Writes:
  - items.json      (one accepted item per line)
  - optional run summary JSON
"""

import argparse
import json
import logging
import sys
import time
from pathlib import Path
from urllib.parse import quote

from tqdm import tqdm

from wikigame.config import (
    COMMONS_IMAGE_URL,
    DATE_PROPS,
    DEFAULT_INPUT_PATH,
    DEFAULT_OUTPUT_PATH,
    PROGRESS_LOG_EVERY,
    TOTAL_RECORDS_HINT,
    WIKIPEDIA_PAGE_URL,
)
from wikigame.pipeline import ItemPipeline
from wikigame.utils import append_jsonl_record, format_elapsed, open_dump, strip_dump_line, wiki_title
from wikigame.validation import ItemValidationError, item_validator, validate_item_record, validate_items_file

logger = logging.getLogger(__name__)

DATE_PROP_DESCRIPTIONS = dict(DATE_PROPS)


def log_item(item):
    """Log the display block for an accepted item."""
    logger.info("")
    logger.info("%s", item.id)
    logger.info("%s", item.label)
    logger.info("%s", item.description)
    logger.info("%s", COMMONS_IMAGE_URL.format(image=quote(item.image, safe="")))
    logger.info("%s: %s", DATE_PROP_DESCRIPTIONS.get(item.date_prop_id, item.date_prop_id), item.year)
    logger.info("%s", WIKIPEDIA_PAGE_URL.format(title=wiki_title(item.wikipedia_title)))
    logger.info("page_views: %s", item.page_views)
    logger.info("instance_of: %s", ",".join(item.instance_of))
    if item.occupations is not None:
        logger.info("occupations: %s", ",".join(item.occupations))
    logger.info("")


def _select(lines, output_file, pipeline, validator, summary, total, limit, start_time):
    progress = tqdm(
        lines,
        desc="Selecting items",
        unit=" line",
        miniters=10000,
        total=total,
        disable=not sys.stderr.isatty(),
    )
    for raw_line in progress:
        if limit is not None and summary["seen"] >= limit:
            break
        try:
            line = strip_dump_line(raw_line)
        except UnicodeDecodeError as exc:
            summary["seen"] += 1
            summary["malformed"] += 1
            logger.warning("[!] Skipping undecodable line %s: %s", summary["seen"], exc)
            continue
        if line is None:
            continue
        summary["seen"] += 1
        if summary["seen"] % PROGRESS_LOG_EVERY == 0:
            progress.write(
                f"[*] Seen={summary['seen']:,} Count={summary['accepted']:,} "
                f"Elapsed={format_elapsed(time.monotonic() - start_time)} "
                f"ID Map={len(pipeline.label_cache):,}"
            )
        try:
            item = pipeline.process_line(line)
        except ValueError as exc:
            summary["malformed"] += 1
            logger.warning("[!] Skipping malformed line %s: %s", summary["seen"], exc)
            continue
        if item is None:
            continue
        record = item.to_dict()
        try:
            validate_item_record(record, validator)
        except ItemValidationError as exc:
            summary["invalid"] += 1
            logger.warning("[!] Dropping %s: %s (%s)", item.id, exc, exc.details.get("message"))
            continue
        append_jsonl_record(output_file, record)
        output_file.flush()
        summary["accepted"] += 1
        percent = summary["seen"] / total * 100 if total else 0.0
        logger.info(
            "Count=%s  Seen=%s  Total=%s  Percent=%.4f  ID Map=%s",
            summary["accepted"],
            summary["seen"],
            total,
            percent,
            len(pipeline.label_cache),
        )
        log_item(item)
    progress.close()


def run(
    input_path=DEFAULT_INPUT_PATH,
    output_path=DEFAULT_OUTPUT_PATH,
    *,
    pipeline=None,
    total=TOTAL_RECORDS_HINT,
    limit=None,
    summary_path=None,
):
    """Stream the dump through the pipeline and write accepted items as JSONL."""
    pipeline = pipeline or ItemPipeline()
    validator = item_validator()
    summary = {"seen": 0, "accepted": 0, "malformed": 0, "invalid": 0}
    start_time = time.monotonic()

    try:
        with open_dump(input_path) as lines, open(output_path, "w", encoding="utf-8") as output_file:
            _select(lines, output_file, pipeline, validator, summary, total, limit, start_time)
    except OSError as exc:
        raise SystemExit(f"[!] I/O error on {input_path} -> {output_path}: {exc}")

    summary["elapsed"] = format_elapsed(time.monotonic() - start_time)
    summary["pipeline"] = pipeline.stats()
    logger.info(
        "[+] Total: Count=%s Seen=%s Malformed=%s Invalid=%s",
        summary["accepted"],
        summary["seen"],
        summary["malformed"],
        summary["invalid"],
    )
    if summary_path:
        with open(summary_path, "w", encoding="utf-8") as summary_file:
            json.dump(summary, summary_file, indent=2)
    return summary


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Select wiki-game items from a Wikidata entity dump.")
    parser.add_argument("--input", type=Path, default=DEFAULT_INPUT_PATH, help="Line-delimited entity dump.")
    parser.add_argument("--output", type=Path, default=DEFAULT_OUTPUT_PATH, help="Where accepted items are written.")
    parser.add_argument("--summary", type=Path, default=None, help="Optional path for a JSON run summary.")
    parser.add_argument(
        "--total",
        type=int,
        default=TOTAL_RECORDS_HINT,
        help="Expected number of input lines (progress display only).",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Stop after this many records (debugging helper).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    parser.add_argument(
        "--validate-only",
        action="store_true",
        help="Validate an existing output file against the item schema and exit.",
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    if args.validate_only:
        try:
            count = validate_items_file(str(args.output))
        except ItemValidationError as exc:
            logger.error("[!] %s (%s)", exc, exc.details)
            raise SystemExit(1)
        logger.info("[+] %s is valid (%s items).", args.output, count)
        return
    run(
        args.input,
        args.output,
        total=args.total,
        limit=args.limit,
        summary_path=args.summary,
    )


if __name__ == "__main__":
    main()
