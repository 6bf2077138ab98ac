#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Reverse prerequisite index: course code -> courses that list it.

Built from normalized expressions only. Order follows the catalog scan and a
pair mentioned twice is recorded twice.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, List

from Processing.catalog_models import Course

def collect_codes(prereq: Any) -> List[str]:
    if prereq is None:
        return []
    kind = getattr(prereq, "type", None)
    if kind in ("simple", "or", "and"):
        return list(prereq.courses)
    if kind == "complex":
        codes: List[str] = []
        for group in prereq.groups:
            codes.extend(collect_codes(group))
        return codes
    return []

def build_reverse_index(courses: Iterable[Course]) -> Dict[str, List[str]]:
    reverse: Dict[str, List[str]] = {}
    for course in courses:
        for code in collect_codes(course.prerequisites):
            reverse.setdefault(code, []).append(course.code)
    return reverse
