#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Normalize a raw course catalog into the document the course map reads.

Input is a JSON array of raw course records, an object wrapping them under
"courses", or JSONL with one record (or wrapper) per line. Output is one JSON
document:

  {"courses": [...normalized courses...], "reversePrereqs": {code: [dependents]}}

Usage:
  python -m Processing.normalize_catalog --in courses.json --out courses.normalized.json
  python -m Processing.normalize_catalog --in - --out - --no-dedupe

Requires:
  pip install pydantic requests
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Union
from pathlib import Path
from pydantic import BaseModel
import argparse
import json
import sys

import requests

from Processing.catalog_models import CatalogDocument, Course
from Processing.dedupe_courses import dedupe_courses
from Processing.normalize_prereqs import normalize_prerequisites
from Processing.reverse_prereqs import build_reverse_index

DEFAULT_INPUT = "courses.json"
DEFAULT_OUTPUT = "courses.normalized.json"
HTTP_TIMEOUT = 10

class PipelineOptions(BaseModel):
    dedupe: bool = True
    verbose: bool = False

def _log(msg: str) -> None:
    print(msg, file=sys.stderr)

# -------------------------
# Pipeline
# -------------------------

def extract_records(raw: Any) -> List[Dict[str, Any]]:
    """Flatten a bare list or {"courses": [...]} wrapper into raw records."""
    if isinstance(raw, dict):
        items = raw.get("courses") or []
    elif isinstance(raw, list):
        items = raw
    else:
        return []
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, dict)]

def normalize_course(record: Dict[str, Any]) -> Course:
    return Course.model_validate({**record, "prerequisites": normalize_prerequisites(record.get("prerequisites"))})

def normalize_catalog(raw: Any, options: Optional[PipelineOptions] = None) -> CatalogDocument:
    options = options or PipelineOptions()
    records = extract_records(raw)

    usable = [r for r in records if r.get("code") not in (None, "")]
    if options.verbose and len(usable) != len(records):
        _log(f"Skipped {len(records) - len(usable)} records without a course code")

    if options.dedupe:
        usable, stats = dedupe_courses(usable)
        if options.verbose:
            _log(f"Original courses: {stats.original}")
            _log(f"After deduplication: {stats.kept}")
            _log(f"Removed {stats.removed} duplicates")

    courses = [normalize_course(r) for r in usable]
    return CatalogDocument(courses=courses, reverse_prereqs=build_reverse_index(courses))

# -------------------------
# I/O
# -------------------------

def _parse_any(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        # JSONL: every line is a record or a {"courses": [...]} envelope
        records: List[Any] = []
        for line in text.splitlines():
            if not line.strip():
                continue
            item = json.loads(line)
            if isinstance(item, dict) and "courses" in item:
                records.extend(item["courses"] or [])
            else:
                records.append(item)
        return records

def read_raw_catalog(fp) -> Any:
    return _parse_any(fp.read())

def write_document(document: CatalogDocument, fp) -> None:
    json.dump(document.to_json_dict(), fp, indent=2, ensure_ascii=False)
    fp.write("\n")

def load_document(source: Union[str, Path], timeout: float = HTTP_TIMEOUT) -> CatalogDocument:
    """Load a persisted catalog document from a file path or an http(s) URL."""
    src = str(source)
    if src.startswith(("http://", "https://")):
        response = requests.get(src, headers={"Accept": "application/json"}, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    else:
        with open(src, "r", encoding="utf-8") as f:
            data = json.load(f)
    return CatalogDocument.model_validate(data)

# -------------------------
# CLI
# -------------------------

def parse_args(argv: Optional[List[str]] = None):
    ap = argparse.ArgumentParser(description="Normalize a raw course catalog and build the reverse prerequisite index.")
    ap.add_argument("--in", dest="inp", default=DEFAULT_INPUT, help=f"Input JSON/JSONL path or '-' for stdin (default: {DEFAULT_INPUT})")
    ap.add_argument("--out", dest="out", default=DEFAULT_OUTPUT, help=f"Output JSON path or '-' for stdout (default: {DEFAULT_OUTPUT})")
    ap.add_argument("--no-dedupe", dest="dedupe", action="store_false", help="Keep duplicate id/code records")
    return ap.parse_args(argv)

def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    options = PipelineOptions(dedupe=args.dedupe, verbose=True)

    fin = sys.stdin if args.inp == "-" else open(args.inp, "r", encoding="utf-8")
    try:
        raw = read_raw_catalog(fin)
    finally:
        if fin is not sys.stdin: fin.close()

    document = normalize_catalog(raw, options)

    fout = sys.stdout if args.out == "-" else open(args.out, "w", encoding="utf-8")
    try:
        write_document(document, fout)
    finally:
        if fout is not sys.stdout: fout.close()

    if args.out != "-":
        _log(f"Normalized data written to {args.out}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
