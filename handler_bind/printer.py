"""Format-preserving printer — syntax tree → source text.

Subtrees that are unchanged since lowering are copied verbatim from the
source.  A changed node that came from the source is *spliced*: the original
text between its children is kept and each child is printed recursively.
List fields keep their original separators; inserted items take the line
break and indentation the list already uses between its items.  A braced
list written on one line is re-laid out when it gains items.  Synthesized
nodes are printed from per-kind rules.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from . import constants, shapes
from .matcher import matches
from .tree import Node, NodeKind

logger = logging.getLogger(__name__)

_INDENTED_LINE_RE = re.compile(r"^([ \t]+)\S", re.MULTILINE)

# List owners whose empty list can be filled between braces.
_BRACED_LISTS: frozenset[NodeKind] = frozenset(
    {NodeKind.BLOCK_STATEMENT, NodeKind.CLASS_BODY}
)


def detect_indent_unit(text: str) -> str:
    """Leading whitespace of the first indented line, or the default unit."""
    match = _INDENTED_LINE_RE.search(text)
    return match.group(1) if match else constants.DEFAULT_INDENT


class TreePrinter:
    """Prints trees lowered from *source*, preserving untouched text."""

    def __init__(self, source: str | bytes):
        self._source = source.encode("utf-8") if isinstance(source, str) else source
        self._indent_unit = detect_indent_unit(self._source.decode("utf-8"))
        self._pristine: dict[int, bool] = {}

    def print(self, root: Node) -> str:
        self._pristine = {}
        if not root.is_original:
            return self._fresh(root, "")
        start, end = root.span.start_byte, root.span.end_byte
        return self._text(0, start) + self._render(root, "") + self._text(end, len(self._source))

    # ── helpers ──────────────────────────────────────────────────

    def _text(self, start: int, end: int) -> str:
        return self._source[start:end].decode("utf-8")

    def _line_indent(self, offset: int) -> str:
        line_start = self._source.rfind(b"\n", 0, offset) + 1
        line_end = line_start
        while line_end < len(self._source) and self._source[line_end : line_end + 1] in (b" ", b"\t"):
            line_end += 1
        return self._text(line_start, line_end)

    def _is_pristine(self, node: Node) -> bool:
        key = id(node)
        if key not in self._pristine:
            self._pristine[key] = self._check_pristine(node)
        return self._pristine[key]

    def _check_pristine(self, node: Node) -> bool:
        if not node.is_original or node.modified:
            return False
        if node.fields.keys() != node.origin.keys():
            return False
        for name, original in node.origin.items():
            current = node.fields[name]
            if isinstance(original, Node):
                if current is not original or not self._is_pristine(current):
                    return False
            elif isinstance(original, list):
                if len(current) != len(original):
                    return False
                if any(a is not b or not self._is_pristine(a) for a, b in zip(current, original)):
                    return False
            elif current != original:
                return False
        return True

    def _can_splice(self, node: Node) -> bool:
        if node.fields.keys() != node.origin.keys():
            return False
        for name, original in node.origin.items():
            current = node.fields[name]
            if isinstance(original, Node):
                if current is not None and not isinstance(current, Node):
                    return False
            elif isinstance(original, list):
                if not isinstance(current, list):
                    return False
                if not original and current and node.kind not in _BRACED_LISTS:
                    return False
                if node.kind in _BRACED_LISTS and self._is_inline(node, original, current):
                    return False
            elif current != original:
                # scalar change (e.g. a renamed identifier) or a child where there was none
                return False
        return True

    def _is_inline(self, owner: Node, original: list[Node], current: list[Node]) -> bool:
        """Items were added to a list whose first item shares the opening brace's line."""
        if not original:
            return False
        known = {id(item) for item in original}
        if all(id(item) in known for item in current):
            return False
        return "\n" not in self._text(owner.span.start_byte, original[0].span.start_byte)

    # ── rendering ────────────────────────────────────────────────

    def _render(self, node: Any, indent: str) -> str:
        if node is None:
            return ""
        if self._is_pristine(node):
            return self._text(node.span.start_byte, node.span.end_byte)
        if node.is_original and self._can_splice(node):
            return self._splice(node)
        return self._fresh(node, indent)

    def _splice(self, node: Node) -> str:
        out: list[str] = []
        pos = node.span.start_byte
        for name, original in node.origin.items():
            current = node.fields[name]
            if isinstance(original, Node):
                start = original.span.start_byte
                out.append(self._text(pos, start))
                out.append(self._render(current, self._line_indent(start)))
                pos = original.span.end_byte
            elif isinstance(original, list):
                pos = self._splice_list(node, original, current, pos, out)
        out.append(self._text(pos, node.span.end_byte))
        return "".join(out)

    def _splice_list(
        self,
        owner: Node,
        original: list[Node],
        current: list[Node],
        pos: int,
        out: list[str],
    ) -> int:
        if not original:
            if not current:
                return pos
            anchor = self._source.index(b"{", owner.span.start_byte, owner.span.end_byte) + 1
            base = self._line_indent(owner.span.start_byte)
            inner = base + self._indent_unit
            out.append(self._text(pos, anchor))
            for item in current:
                out.append("\n" + inner + self._render(item, inner))
            out.append("\n" + base)
            return anchor

        positions = {id(item): i for i, item in enumerate(original)}
        out.append(self._text(pos, original[0].span.start_byte))
        indent = self._line_indent(original[0].span.start_byte)
        for i, item in enumerate(current):
            if i > 0:
                separator = self._separator(owner, original, positions, current[i - 1], item)
                out.append(separator)
                indent = separator.rsplit("\n", 1)[-1] if "\n" in separator else indent
            if id(item) in positions:
                indent = self._line_indent(item.span.start_byte)
            out.append(self._render(item, indent))
        return original[-1].span.end_byte

    def _separator(
        self,
        owner: Node,
        original: list[Node],
        positions: dict[int, int],
        prev: Node,
        item: Node,
    ) -> str:
        kp = positions.get(id(prev))
        ki = positions.get(id(item))
        if kp is not None and ki == kp + 1:
            return self._gap(original, kp)
        # tokens after an original item (e.g. a field's ``;``) stay with it
        head = self._gap(original, kp).rstrip() if kp is not None and kp + 1 < len(original) else ""
        return head + self._layout_separator(owner, original)

    def _gap(self, original: list[Node], k: int) -> str:
        return self._text(original[k].span.end_byte, original[k + 1].span.start_byte)

    def _layout_separator(self, owner: Node, original: list[Node]) -> str:
        """Line break and indent between items, as the list itself lays them out."""
        gaps = [self._gap(original, k) for k in range(len(original) - 1)]
        # a comment hugs the item it annotates
        spaced = [
            gap
            for k, gap in enumerate(gaps)
            if not any(matches(item, shapes.COMMENT) for item in original[k : k + 2])
        ]
        for gap in spaced + gaps:
            whitespace = gap[len(gap.rstrip()) :]
            if "\n" in whitespace:
                return whitespace
        if gaps and owner.kind not in _BRACED_LISTS:
            return gaps[0]
        blank = "\n" if owner.kind == NodeKind.CLASS_BODY else ""
        return "\n" + blank + self._line_indent(original[0].span.start_byte)

    # ── synthesized nodes ────────────────────────────────────────

    def _fresh(self, node: Node, indent: str) -> str:
        kind = node.kind
        r = self._render

        if kind == NodeKind.PROGRAM:
            return "\n".join(r(item, indent) for item in node["body"])
        if kind in (NodeKind.CLASS_DECLARATION, NodeKind.CLASS_EXPRESSION):
            parts = ["class"]
            if node.get("id") is not None:
                parts.append(r(node["id"], indent))
            if node.get("super_class") is not None:
                parts += ["extends", r(node["super_class"], indent)]
            parts.append(r(node["body"], indent))
            return " ".join(parts)
        if kind == NodeKind.CLASS_BODY:
            return self._fresh_block(node["body"], indent, "\n")
        if kind == NodeKind.METHOD_DEFINITION:
            prefix = "static " if node.get("static") else ""
            if node.get("kind") in (constants.METHOD_KIND_GET, constants.METHOD_KIND_SET):
                prefix += node["kind"] + " "
            params = ", ".join(r(p, indent) for p in node["params"])
            return f"{prefix}{r(node['key'], indent)}({params}) {r(node['body'], indent)}"
        if kind == NodeKind.BLOCK_STATEMENT:
            return self._fresh_block(node["body"], indent, "")
        if kind == NodeKind.EXPRESSION_STATEMENT:
            return r(node["expression"], indent) + ";"
        if kind == NodeKind.RETURN_STATEMENT:
            if node.get("argument") is None:
                return "return;"
            return f"return {r(node['argument'], indent)};"
        if kind == NodeKind.ASSIGNMENT_EXPRESSION:
            return f"{r(node['left'], indent)} {node['operator']} {r(node['right'], indent)}"
        if kind == NodeKind.CALL_EXPRESSION:
            args = ", ".join(r(a, indent) for a in node["arguments"])
            return f"{r(node['callee'], indent)}({args})"
        if kind == NodeKind.MEMBER_EXPRESSION:
            return f"{r(node['object'], indent)}.{r(node['property'], indent)}"
        if kind == NodeKind.BIND_EXPRESSION:
            return f"{r(node.get('object'), indent)}::{r(node['callee'], indent)}"
        if kind == NodeKind.ARROW_FUNCTION:
            params = ", ".join(r(p, indent) for p in node["params"])
            return f"({params}) => {r(node['body'], indent)}"
        if kind == NodeKind.THIS_EXPRESSION:
            return "this"
        if kind == NodeKind.SUPER:
            return "super"
        if kind == NodeKind.IDENTIFIER:
            return node["name"]
        if kind == NodeKind.JSX_ATTRIBUTE:
            if node.get("value") is None:
                return r(node["name"], indent)
            return f"{r(node['name'], indent)}={r(node['value'], indent)}"
        if kind == NodeKind.JSX_EXPRESSION_CONTAINER:
            return "{" + r(node.get("expression"), indent) + "}"
        raise ValueError(f"Cannot print synthesized {kind.value} node {node.get('type', '')}".rstrip())

    def _fresh_block(self, items: list[Node], indent: str, blank: str) -> str:
        if not items:
            return "{}"
        inner = indent + self._indent_unit
        body = blank.join("\n" + inner + self._render(item, inner) for item in items)
        return "{" + body + "\n" + indent + "}"


def print_tree(root: Node, source: str | bytes = b"") -> str:
    """Serialize *root*, copying unchanged regions from *source* verbatim."""
    return TreePrinter(source).print(root)
