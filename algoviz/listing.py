"""Reference code listings and their statement index.

Listings are display text only; they are never executed. Generators use
``line_of`` to anchor entries on real lines, and the audit uses
``statement_lines`` (backed by tree-sitter) to confirm every entry points
at an executable statement.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from . import constants

logger = logging.getLogger(__name__)


class ParserFactory(ABC):
    """Supplies the parser ``CodeListing`` uses to index statement lines.

    Tests substitute their own factory to observe or replace parsing.
    """

    @abstractmethod
    def get_parser(self, language: str):
        """Return a parser whose ``parse(bytes)`` yields a tree-sitter tree."""


class TreeSitterParserFactory(ParserFactory):
    """Default factory: grammars bundled with tree-sitter-language-pack."""

    def get_parser(self, language: str):
        logger.debug("TreeSitterParserFactory: loading %s grammar", language)
        import tree_sitter_language_pack as tslp

        return tslp.get_parser(language)


class CodeListing:
    """Line-addressable view over a reference listing."""

    STATEMENT_NODE_TYPES: frozenset[str] = frozenset(
        {
            "expression_statement",
            "return_statement",
            "if_statement",
            "elif_clause",
            "else_clause",
            "for_statement",
            "while_statement",
            "pass_statement",
            "break_statement",
            "continue_statement",
            "function_definition",
            "class_definition",
        }
    )

    def __init__(
        self,
        source: str,
        language: str = constants.LISTING_LANGUAGE,
        parser_factory: ParserFactory | None = None,
    ):
        self.source = source
        self.language = language
        self._factory = parser_factory or TreeSitterParserFactory()
        self._lines = source.split("\n")
        self._statement_lines: frozenset[int] | None = None

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def text_at(self, line: int) -> str:
        """Return the text of 1-based *line*."""
        if not 1 <= line <= len(self._lines):
            raise IndexError(f"Line {line} outside listing of {len(self._lines)} lines")
        return self._lines[line - 1]

    def line_of(self, fragment: str, occurrence: int = 1) -> int:
        """Return the 1-based line whose stripped text starts with *fragment*.

        *occurrence* selects among repeated statements (1 = first).
        """
        seen = 0
        for number, text in enumerate(self._lines, start=1):
            if text.strip().startswith(fragment):
                seen += 1
                if seen == occurrence:
                    return number
        raise ValueError(f"Fragment {fragment!r} (occurrence {occurrence}) not in listing")

    def statement_lines(self) -> frozenset[int]:
        """1-based lines where a statement starts, according to tree-sitter."""
        if self._statement_lines is None:
            parser = self._factory.get_parser(self.language)
            tree = parser.parse(self.source.encode("utf-8"))
            found: set[int] = set()
            self._collect_statements(tree.root_node, found)
            self._statement_lines = frozenset(found)
            logger.debug(
                "CodeListing: %d statement lines in %d-line listing",
                len(found),
                len(self._lines),
            )
        return self._statement_lines

    def _collect_statements(self, node: Any, found: set[int]) -> None:
        if node.type in self.STATEMENT_NODE_TYPES:
            found.add(node.start_point[0] + 1)
        for child in node.children:
            if child.is_named:
                self._collect_statements(child, found)
