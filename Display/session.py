#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Holds the loaded catalog document for an interactive course map.

The search box, info panel and click-to-recenter all go through here. Nothing
is synthesized until a document has been loaded; every selection builds a new
graph from scratch.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from Display.graph import CourseGraph
from Display.layout import LayoutConfig, build_course_map
from Processing.catalog_models import CatalogDocument, Course, index_by_code
from Processing.normalize_catalog import HTTP_TIMEOUT, load_document

SEARCH_LIMIT = 15

class CatalogNotLoadedError(RuntimeError):
    pass

class CourseNotFoundError(KeyError):
    pass

def course_label(course: Course) -> str:
    return f"{course.code}: {course.title or ''}"

class CourseMapSession:
    def __init__(self, document: Optional[CatalogDocument] = None, layout_config: Optional[LayoutConfig] = None):
        self.layout_config = layout_config or LayoutConfig()
        self._document: Optional[CatalogDocument] = None
        self._by_code: Dict[str, Course] = {}
        if document is not None:
            self.load(document)

    @property
    def loaded(self) -> bool:
        return self._document is not None

    @property
    def document(self) -> CatalogDocument:
        if self._document is None:
            raise CatalogNotLoadedError("catalog document has not been loaded")
        return self._document

    def load(self, source: Union[CatalogDocument, Dict[str, Any], str, Path],
             timeout: float = HTTP_TIMEOUT) -> CatalogDocument:
        if isinstance(source, CatalogDocument):
            document = source
        elif isinstance(source, dict):
            document = CatalogDocument.model_validate(source)
        else:
            document = load_document(source, timeout=timeout)
        self._document = document
        self._by_code = index_by_code(document.courses)
        return document

    def find_course(self, code: str) -> Optional[Course]:
        if not self.loaded:
            raise CatalogNotLoadedError("catalog document has not been loaded")
        return self._by_code.get(code)

    def search(self, query: str, limit: int = SEARCH_LIMIT) -> List[Course]:
        """Case-insensitive substring match on "CODE: title", catalog order."""
        if not self.loaded or not query:
            return []
        needle = query.lower()
        hits: List[Course] = []
        for course in self._document.courses:
            if needle in course_label(course).lower():
                hits.append(course)
                if len(hits) >= limit:
                    break
        return hits

    def select(self, code: str) -> CourseGraph:
        course = self.find_course(code)
        if course is None:
            raise CourseNotFoundError(code)
        return build_course_map(course, self._document, self.layout_config)
