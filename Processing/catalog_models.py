#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Shared types for the normalized course catalog.

Raw catalog records stay plain dicts; everything past normalization is one of
the models below. The persisted document is `CatalogDocument` dumped by alias:

  {"courses": [...], "reversePrereqs": {"CS101": ["CS201", ...]}}
"""

from __future__ import annotations
from typing import Annotated, Any, Dict, Iterable, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator

# -------------------------
# Prerequisite expressions
# -------------------------

class SimplePrereq(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["simple"] = "simple"
    courses: List[str]

class ListPrereq(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["or", "and"]
    courses: List[str]

class PrereqGroup(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["or", "simple"]
    courses: List[str]

class ComplexPrereq(BaseModel):
    """Groups are ANDed together; each group is a set of alternatives."""
    model_config = ConfigDict(frozen=True)

    type: Literal["complex"] = "complex"
    groups: List[PrereqGroup]

Prereq = Annotated[Union[SimplePrereq, ListPrereq, ComplexPrereq], Field(discriminator="type")]

# -------------------------
# Catalog
# -------------------------

class Course(BaseModel):
    # Unknown raw fields (credits, level, ...) ride along untouched.
    model_config = ConfigDict(frozen=True, extra="allow")

    id: str = ""
    code: str
    title: Optional[str] = None
    description: Optional[str] = None
    prerequisites: Optional[Prereq] = None

    @field_validator("id", "code", mode="before")
    @classmethod
    def _identity_as_text(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("title", "description", mode="before")
    @classmethod
    def _text_or_none(cls, v: Any) -> Optional[str]:
        return None if v is None else str(v)

class CatalogDocument(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    courses: List[Course] = Field(default_factory=list)
    reverse_prereqs: Dict[str, List[str]] = Field(default_factory=dict, alias="reversePrereqs")

    def to_json_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

def index_by_code(courses: Iterable[Course]) -> Dict[str, Course]:
    """Map code -> course; the first course in catalog order wins."""
    index: Dict[str, Course] = {}
    for course in courses:
        index.setdefault(course.code, course)
    return index
