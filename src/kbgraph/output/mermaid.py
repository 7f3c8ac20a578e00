"""Mermaid diagram generation helpers.

Small building blocks for producing Mermaid flowcharts from walk views and
clusters.  Every function returns plain strings -- the caller assembles
them with ``click.echo()``.
"""

from __future__ import annotations

import re


def sanitize_id(name: str) -> str:
    """Convert an entity id to a valid Mermaid node ID.

    Replaces characters that are invalid in Mermaid identifiers with
    underscores and prefixes a leading digit.
    """
    s = re.sub(r"[^A-Za-z0-9_]", "_", name)
    # Mermaid IDs must not start with a digit
    if s and s[0].isdigit():
        s = "_" + s
    return s


def node(node_id: str, label: str) -> str:
    """Generate a Mermaid node definition with a quoted label."""
    safe_label = label.replace('"', "'")
    return f'    {sanitize_id(node_id)}["{safe_label}"]'


def edge(source: str, target: str, label: str | None = None) -> str:
    """Generate a Mermaid edge, labelled when *label* is given."""
    if label:
        safe_label = label.replace('"', "'").replace("|", "/")
        return f"    {sanitize_id(source)} -->|{safe_label}| {sanitize_id(target)}"
    return f"    {sanitize_id(source)} --> {sanitize_id(target)}"


def subgraph(name: str, node_lines: list[str]) -> str:
    """Generate a Mermaid subgraph block from :func:`node` lines."""
    safe_name = name.replace('"', "'")
    lines = [f'    subgraph "{safe_name}"']
    for n in node_lines:
        lines.append(f"    {n}")
    lines.append("    end")
    return "\n".join(lines)


def diagram(direction: str, elements: list[str]) -> str:
    """Assemble a complete Mermaid diagram (``TD``, ``LR``, ...)."""
    lines = [f"graph {direction}"]
    lines.extend(elements)
    return "\n".join(lines)
