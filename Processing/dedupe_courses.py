#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Collapse duplicate raw course records.

Scrapes of the same catalog page often land twice, once with the prerequisite
block and once without. Records are keyed on id + code; the first one seen
wins unless a later one carries prerequisite data the first lacks.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

@dataclass(frozen=True)
class DedupeStats:
    original: int
    kept: int

    @property
    def removed(self) -> int:
        return self.original - self.kept

def course_key(record: Dict[str, Any]) -> str:
    return f"{record.get('id')}-{record.get('code')}"

def has_meaningful_prereqs(raw: Any) -> bool:
    """True for a tagged, non-simple prerequisite object or a non-empty list."""
    if isinstance(raw, list):
        return len(raw) > 0
    if isinstance(raw, dict) and raw:
        kind = raw.get("type")
        return bool(kind) and kind != "simple"
    return False

def prefer_incoming(existing: Dict[str, Any], incoming: Dict[str, Any]) -> bool:
    return (
        has_meaningful_prereqs(incoming.get("prerequisites"))
        and not has_meaningful_prereqs(existing.get("prerequisites"))
    )

def dedupe_courses(records: List[Dict[str, Any]]) -> Tuple[List[Dict[str, Any]], DedupeStats]:
    # dicts keep first-insertion order even when a value is replaced
    by_key: Dict[str, Dict[str, Any]] = {}
    for record in records:
        key = course_key(record)
        existing = by_key.get(key)
        if existing is None or prefer_incoming(existing, record):
            by_key[key] = record

    unique = list(by_key.values())
    return unique, DedupeStats(original=len(records), kept=len(unique))
