import json
import argparse
import sys
import os
from typing import Dict, Any, List, Optional

from Display.graph import CourseGraph, GraphEdge, GraphNode
from Display.session import CourseMapSession, CourseNotFoundError

# --- Renderer styling ---
# Node/edge dicts follow the shape the front-end canvas consumes directly:
# {id, position: {x, y}, data: {label}, style: {...}} and {id, source, target, type, style}

NODE_STYLES: Dict[str, Dict[str, str]] = {
    "selected": {"background": "#ff6b6b", "color": "black", "fontWeight": "bold", "fontSize": "14px"},
    "prerequisite": {"background": "#4ecdc4", "color": "black", "fontSize": "12px"},
    "output": {"background": "#45b7d1", "color": "black", "fontSize": "12px"},
    "junction": {"background": "none", "color": "black", "fontWeight": "bold", "fontSize": "12px", "border": "2px dashed #666"},
}

EDGE_STROKES: Dict[str, Dict[str, Any]] = {
    "prerequisite": {"stroke": "#4ecdc4", "strokeWidth": 2},
    "alternative": {"stroke": "#666", "strokeWidth": 1},
    "output": {"stroke": "#45b7d1", "strokeWidth": 2},
}

def node_to_dict(node: GraphNode) -> Dict[str, Any]:
    x, y = node.position or (0.0, 0.0)
    return {
        "id": node.id,
        "type": "default",
        "position": {"x": x, "y": y},
        "data": {"label": node.label, "kind": node.kind, "role": node.role, "title": node.title},
        "style": dict(NODE_STYLES.get(node.role, NODE_STYLES["prerequisite"])),
    }

def edge_to_dict(edge: GraphEdge) -> Dict[str, Any]:
    style = dict(EDGE_STROKES.get(edge.role, EDGE_STROKES["prerequisite"]))
    if edge.style == "dashed":
        style["strokeDasharray"] = "5,5"
    return {
        "id": edge.id,
        "source": edge.source,
        "target": edge.target,
        "type": "smoothstep",
        "style": style,
    }

def to_render_dict(graph: CourseGraph) -> Dict[str, List[Dict[str, Any]]]:
    return {
        "nodes": [node_to_dict(n) for n in graph.nodes],
        "edges": [edge_to_dict(e) for e in graph.edges],
    }

def generate_graph_data(data_source: str, course_code: str, output_dir: str) -> Dict[str, List[Dict[str, Any]]]:
    session = CourseMapSession()
    session.load(data_source)
    rendered = to_render_dict(session.select(course_code))

    os.makedirs(output_dir, exist_ok=True)

    with open(os.path.join(output_dir, "nodes.json"), "w", encoding="utf-8") as f:
        json.dump(rendered["nodes"], f, indent=2, ensure_ascii=False)

    with open(os.path.join(output_dir, "edges.json"), "w", encoding="utf-8") as f:
        json.dump(rendered["edges"], f, indent=2, ensure_ascii=False)

    return rendered

def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Generate positioned course map nodes/edges for one course.")
    parser.add_argument("--data", dest="data", default="courses.normalized.json", help="Normalized catalog JSON path or URL")
    parser.add_argument("--course", dest="course", required=True, help="Course code to center the map on")
    parser.add_argument("--out_dir", dest="output_dir", default="app/public/data", help="Output directory for JSON files")
    args = parser.parse_args(argv)

    try:
        rendered = generate_graph_data(args.data, args.course, args.output_dir)
    except CourseNotFoundError:
        print(f"Error: course {args.course} not found in {args.data}", file=sys.stderr)
        return 1

    print(f"Wrote {len(rendered['nodes'])} nodes and {len(rendered['edges'])} edges to {args.output_dir}", file=sys.stderr)
    return 0

if __name__ == "__main__":
    sys.exit(main())
