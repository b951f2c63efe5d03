"""Tree-Sitter Parsing Layer."""

from __future__ import annotations

from abc import ABC, abstractmethod

from . import constants


class SourceParseError(ValueError):
    """The source text does not parse cleanly; it is not safe to rewrite."""


class ParserFactory(ABC):
    """Abstract factory for obtaining a language parser."""

    @abstractmethod
    def get_parser(self, language: str): ...


class TreeSitterParserFactory(ParserFactory):
    """Concrete factory that delegates to tree-sitter-language-pack."""

    def get_parser(self, language: str):
        import tree_sitter_language_pack as tslp

        return tslp.get_parser(language)


class Parser:
    """Thin wrapper around a parser factory."""

    def __init__(self, parser_factory: ParserFactory):
        self._factory = parser_factory

    def parse(self, source: bytes, language: str = constants.TREE_SITTER_LANGUAGE):
        """Parse *source*; raise ``SourceParseError`` if the tree has syntax errors."""
        parser = self._factory.get_parser(language)
        tree = parser.parse(source)
        if tree.root_node.has_error:
            line = _first_error_line(tree.root_node)
            raise SourceParseError(f"Syntax error near line {line}")
        return tree


def _first_error_line(node) -> int:
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            return current.start_point[0] + 1
        stack.extend(reversed(current.children))
    return node.start_point[0] + 1
