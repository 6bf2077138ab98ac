#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Canonicalize one raw prerequisite expression.

Scraped catalogs hand us loosely shaped blobs ("simple" with blank codes,
single-course "or" lists, "complex" groups that are really one course, ...).
Everything collapses to one of the shapes in catalog_models, or to None when
nothing meaningful is left. Malformed input never raises.
"""

from __future__ import annotations
from typing import Any, List, Optional, Union
from pydantic import BaseModel

from Processing.catalog_models import ComplexPrereq, ListPrereq, PrereqGroup, SimplePrereq

NormalizedPrereq = Optional[Union[SimplePrereq, ListPrereq, ComplexPrereq]]

def _clean_code(code: Any) -> str:
    if isinstance(code, bool) or code is None:
        return ""
    if isinstance(code, (int, float)):
        code = str(code)
    if not isinstance(code, str):
        return ""
    return code.strip()

def clean_codes(codes: Any) -> List[str]:
    """Drop blank / non-text entries, keep order."""
    if not isinstance(codes, (list, tuple)):
        return []
    return [c for c in (_clean_code(code) for code in codes) if c]

def _normalize_group(group: Any) -> Optional[PrereqGroup]:
    if not isinstance(group, dict):
        return None
    courses = clean_codes(group.get("courses"))
    if not courses:
        return None
    if len(courses) == 1:
        return PrereqGroup(type="simple", courses=courses)
    return PrereqGroup(type="or", courses=courses)

def normalize_prerequisites(raw: Any) -> NormalizedPrereq:
    if isinstance(raw, BaseModel):
        raw = raw.model_dump()
    if not isinstance(raw, dict):
        return None

    kind = raw.get("type")

    if kind == "simple":
        # Only the first slot counts; a blank first slot means no prerequisite.
        courses = raw.get("courses")
        if not isinstance(courses, (list, tuple)) or not courses:
            return None
        first = _clean_code(courses[0])
        return SimplePrereq(courses=[first]) if first else None

    if kind in ("or", "and"):
        courses = clean_codes(raw.get("courses"))
        if not courses:
            return None
        if len(courses) == 1:
            return SimplePrereq(courses=courses)
        return ListPrereq(type=kind, courses=courses)

    if kind == "complex":
        groups = raw.get("groups")
        if not isinstance(groups, (list, tuple)):
            return None
        kept = [g for g in (_normalize_group(group) for group in groups) if g is not None]
        if not kept:
            return None
        if len(kept) == 1 and kept[0].type == "simple":
            return SimplePrereq(courses=list(kept[0].courses))
        return ComplexPrereq(groups=kept)

    return None
