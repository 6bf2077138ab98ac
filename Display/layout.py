#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Layered layout for a synthesized course graph.

Ranks run top to bottom: prerequisites sit above the selected course (negative
ranks), unlocked courses below it. Within a rank nodes are ordered with a few
barycenter sweeps to cut crossings, then spread evenly around x = 0.

Cyclic source data (A requires B requires A) is drawn anyway: one edge per
cycle is left out of the ranking, preferring the selected course's outgoing
edge so the prerequisite side keeps its shape. The edge itself is still drawn.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Tuple
from pydantic import BaseModel, Field
import networkx as nx

from Display.graph import CourseGraph, GraphEdge, GraphNode, synthesize_graph
from Processing.catalog_models import CatalogDocument, Course

class LayoutConfig(BaseModel):
    node_spacing: float = Field(default=180.0, gt=0)
    rank_spacing: float = Field(default=150.0, gt=0)
    sweeps: int = Field(default=4, ge=0)

def build_digraph(nodes: Iterable[GraphNode], edges: Iterable[GraphEdge]) -> nx.DiGraph:
    graph = nx.DiGraph()
    graph.add_nodes_from(n.id for n in nodes)
    for e in edges:
        if e.source == e.target:
            continue
        if e.source in graph and e.target in graph:
            graph.add_edge(e.source, e.target)
    return graph

def break_cycles(graph: nx.DiGraph, selected: Optional[str] = None) -> List[Tuple[str, str]]:
    """Remove one edge per cycle, in place. Returns the removed edges."""
    removed: List[Tuple[str, str]] = []
    while True:
        try:
            cycle = nx.find_cycle(graph)
        except nx.NetworkXNoCycle:
            return removed
        u, v = next(((a, b) for a, b, *_ in cycle if a == selected), cycle[-1][:2])
        graph.remove_edge(u, v)
        removed.append((u, v))

def assign_ranks(graph: nx.DiGraph, selected: Optional[str] = None) -> Dict[str, int]:
    order = list(nx.topological_sort(graph))
    ranks: Dict[str, int] = {}

    if selected is not None and selected in graph:
        ranks[selected] = 0
        ancestors = nx.ancestors(graph, selected)
        descendants = nx.descendants(graph, selected)
        # longest path to the selected course, counted upwards
        for node in reversed(order):
            if node in ancestors:
                ranks[node] = min(ranks[s] - 1 for s in graph.successors(node) if s in ranks)
        for node in order:
            if node in descendants:
                ranks[node] = max(ranks[p] + 1 for p in graph.predecessors(node) if p in ranks)

    # anything left: plain longest-path layering
    for node in order:
        if node in ranks:
            continue
        above = [ranks[p] + 1 for p in graph.predecessors(node) if p in ranks]
        below = [ranks[s] - 1 for s in graph.successors(node) if s in ranks]
        if above:
            ranks[node] = max(above)
        elif below:
            ranks[node] = min(below)
        else:
            ranks[node] = 0 if selected is None else max(ranks.values(), default=-1) + 1
    return ranks

def order_ranks(graph: nx.DiGraph, ranks: Dict[str, int], sweeps: int) -> Dict[int, List[str]]:
    layers: Dict[int, List[str]] = {}
    for node in graph.nodes:
        layers.setdefault(ranks[node], []).append(node)
    levels = sorted(layers)

    def centered(node: str) -> float:
        layer = layers[ranks[node]]
        return layer.index(node) - (len(layer) - 1) / 2

    for sweep in range(sweeps):
        downward = sweep % 2 == 0
        sequence = levels[1:] if downward else levels[-2::-1]
        for level in sequence:
            neighbours = graph.predecessors if downward else graph.successors
            scores = {}
            for node in layers[level]:
                linked = [centered(m) for m in neighbours(node) if ranks[m] != level]
                scores[node] = sum(linked) / len(linked) if linked else centered(node)
            layers[level] = sorted(layers[level], key=lambda n: scores[n])
    return layers

def layout(nodes: List[GraphNode], edges: List[GraphEdge], selected: Optional[str] = None,
           config: Optional[LayoutConfig] = None) -> List[GraphNode]:
    """Return copies of `nodes` with positions; input order is preserved."""
    config = config or LayoutConfig()
    if selected is None:
        selected = next((n.id for n in nodes if n.role == "selected"), None)

    graph = build_digraph(nodes, edges)
    break_cycles(graph, selected)
    ranks = assign_ranks(graph, selected)
    layers = order_ranks(graph, ranks, config.sweeps)

    positions: Dict[str, Tuple[float, float]] = {}
    for level, members in layers.items():
        offset = (len(members) - 1) / 2
        for i, node_id in enumerate(members):
            positions[node_id] = ((i - offset) * config.node_spacing, level * config.rank_spacing)

    return [replace(n, position=positions[n.id]) for n in nodes]

def build_course_map(course: Course, document: CatalogDocument,
                     config: Optional[LayoutConfig] = None) -> CourseGraph:
    graph = synthesize_graph(course, document)
    return CourseGraph(nodes=layout(graph.nodes, graph.edges, course.code, config), edges=graph.edges)
