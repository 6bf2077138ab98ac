#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Build the prerequisite graph around one selected course.

The graph covers two hops: everything the course directly requires (with
synthetic OR / AND junction nodes spelling out the logic) and every course it
directly unlocks, read from the reverse prerequisite index.

Edge styles are part of what the renderer shows:
  solid   hard dependency (course -> course, course -> AND, junction -> course)
  dashed  one alternative of a disjunction (course -> OR, AND -> OR)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple
import itertools

from Processing.catalog_models import CatalogDocument, Course, index_by_code
from Processing.reverse_prereqs import collect_codes

def split_compound(entry: str) -> List[str]:
    """'CS102, CS103' -> ['CS102', 'CS103']; a compound entry is an implicit AND."""
    return [part.strip() for part in (entry or "").split(",") if part.strip()]

@dataclass(frozen=True)
class GraphNode:
    id: str
    kind: str                   # "course" | "AND" | "OR"
    label: str
    role: str                   # "selected" | "prerequisite" | "output" | "junction"
    title: Optional[str] = None
    position: Optional[Tuple[float, float]] = None

@dataclass(frozen=True)
class GraphEdge:
    id: str
    source: str
    target: str
    style: str                  # "solid" | "dashed"
    role: str                   # "prerequisite" | "alternative" | "output"

@dataclass
class CourseGraph:
    nodes: List[GraphNode] = field(default_factory=list)
    edges: List[GraphEdge] = field(default_factory=list)

    def node_ids(self) -> Set[str]:
        return {n.id for n in self.nodes}

    def edge_ids(self) -> Set[str]:
        return {e.id for e in self.edges}

    def node(self, node_id: str) -> Optional[GraphNode]:
        return next((n for n in self.nodes if n.id == node_id), None)

class _GraphBuilder:
    """One synthesis pass; junction ids restart at 0 for every builder."""

    def __init__(self, course: Course, catalog: Dict[str, Course]):
        self.course = course
        self._catalog = catalog
        self._nodes: Dict[str, GraphNode] = {}
        self._edges: Dict[Tuple[str, str], GraphEdge] = {}
        self._counters: Dict[str, Iterator[int]] = {"OR": itertools.count(), "AND": itertools.count()}
        # junction ids must never take a course code this pass will create
        self._reserved: Set[str] = {course.code}

    def course_node(self, code: str, role: str) -> str:
        if code not in self._nodes:
            known = self._catalog.get(code)
            self._nodes[code] = GraphNode(id=code, kind="course", label=code, role=role,
                                          title=known.title if known else None)
        return code

    def junction(self, kind: str) -> str:
        node_id = f"{kind.lower()}_{next(self._counters[kind])}"
        while node_id in self._nodes or node_id in self._reserved:
            node_id = f"{kind.lower()}_{next(self._counters[kind])}"
        self._nodes[node_id] = GraphNode(id=node_id, kind=kind, label=kind, role="junction")
        return node_id

    def connect(self, source: str, target: str, style: str, role: str) -> None:
        if (source, target) not in self._edges:
            self._edges[(source, target)] = GraphEdge(id=f"{source}-{target}", source=source,
                                                      target=target, style=style, role=role)

    # -- expansion --

    def expand(self, prereq: Any) -> List[str]:
        """Return the node ids that feed the selected course directly."""
        if prereq is None:
            return []
        kind = getattr(prereq, "type", None)
        if kind in ("simple", "or", "and"):
            return self._expand_entries(kind, prereq.courses)
        if kind == "complex":
            final: List[str] = []
            for group in prereq.groups:
                for node_id in self._expand_entries(group.type, group.courses):
                    if node_id not in final:
                        final.append(node_id)
            return final
        return []

    def _expand_entries(self, kind: str, entries: List[str]) -> List[str]:
        alternatives = [codes for codes in (split_compound(e) for e in entries) if codes]
        if kind == "or" and len(alternatives) > 1:
            return [self._disjunction(alternatives)]
        final: List[str] = []
        for codes in alternatives:
            for code in codes:
                node_id = self.course_node(code, "prerequisite")
                if node_id not in final:
                    final.append(node_id)
        return final

    def _disjunction(self, alternatives: List[List[str]]) -> str:
        or_id = self.junction("OR")
        for codes in alternatives:
            if len(codes) == 1:
                self.connect(self.course_node(codes[0], "prerequisite"), or_id, "dashed", "alternative")
            else:
                and_id = self.junction("AND")
                for code in codes:
                    self.connect(self.course_node(code, "prerequisite"), and_id, "solid", "prerequisite")
                self.connect(and_id, or_id, "dashed", "alternative")
        return or_id

    def build(self, reverse_prereqs: Dict[str, List[str]]) -> CourseGraph:
        selected = self.course.code
        self._reserved.update(code for entry in collect_codes(self.course.prerequisites) for code in split_compound(entry))
        self._reserved.update(reverse_prereqs.get(selected, []))
        self._nodes[selected] = GraphNode(id=selected, kind="course", label=selected,
                                          role="selected", title=self.course.title)

        for node_id in self.expand(self.course.prerequisites):
            self.connect(node_id, selected, "solid", "prerequisite")

        for code in reverse_prereqs.get(selected, []):
            self.course_node(code, "output")
            self.connect(selected, code, "solid", "output")

        return CourseGraph(nodes=list(self._nodes.values()), edges=list(self._edges.values()))

def synthesize_graph(course: Course, document: CatalogDocument) -> CourseGraph:
    builder = _GraphBuilder(course, index_by_code(document.courses))
    return builder.build(document.reverse_prereqs)
