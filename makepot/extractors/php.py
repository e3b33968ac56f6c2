"""Extraction of gettext calls from PHP files using tree-sitter."""

from __future__ import annotations

import re
from typing import Dict, List, Optional

import tree_sitter_php
from tree_sitter import Language, Node, Parser

from ..metadata import HEADER_READ_LIMIT, parse_file_data
from ..models import CatalogEntry
from .base import ExtractionOptions, Extractor
from .calls import FunctionCall, translator_comment

PHP_FUNCTIONS: Dict[str, str] = {
    "__": "text_domain",
    "esc_attr__": "text_domain",
    "esc_html__": "text_domain",
    "esc_xml__": "text_domain",
    "_e": "text_domain",
    "esc_attr_e": "text_domain",
    "esc_html_e": "text_domain",
    "esc_xml_e": "text_domain",
    "_x": "text_context_domain",
    "_ex": "text_context_domain",
    "esc_attr_x": "text_context_domain",
    "esc_html_x": "text_context_domain",
    "esc_xml_x": "text_context_domain",
    "_n": "single_plural_number_domain",
    "_nx": "single_plural_number_context_domain",
    "_n_noop": "single_plural_domain",
    "_nx_noop": "single_plural_context_domain",
}

TEMPLATE_HEADER = "Template Name"

# Grammar for PHP files with inline HTML around the code blocks.
PHP_LANGUAGE = Language(tree_sitter_php.language_php())

_CALLEE_TYPES = {"name", "qualified_name"}
# Children of a double-quoted string that keep it a plain literal.
_STRING_PART_TYPES = {"string_content", "string_value", "string", "escape_sequence"}

_DOUBLE_QUOTED_ESCAPE = re.compile(
    r"\\(?:([ntrvef\\$\"])|([0-7]{1,3})|x([0-9A-Fa-f]{1,2})|u\{([0-9A-Fa-f]+)\})"
)
_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "v": "\v",
    "e": "\x1b",
    "f": "\f",
    "\\": "\\",
    "$": "$",
    '"': '"',
}


class PhpExtractor(Extractor):
    """Finds WordPress gettext calls and page template names in PHP code."""

    name = "php"
    extensions = ("php",)
    functions = PHP_FUNCTIONS

    def __init__(self) -> None:
        self._parser = Parser(PHP_LANGUAGE)

    def find_calls(self, text: str) -> List[FunctionCall]:
        source = text.encode("utf-8")
        tree = self._parser.parse(source)

        comments: List[Node] = []
        calls: List[FunctionCall] = []
        stack = [tree.root_node]
        while stack:
            node = stack.pop()
            if node.type == "comment":
                comments.append(node)
            elif node.type == "function_call_expression":
                call = self._read_call(node, source, comments)
                if call is not None:
                    calls.append(call)
            stack.extend(reversed(node.children))
        return calls

    def extra_entries(
        self, text: str, file_name: str, options: ExtractionOptions
    ) -> List[CatalogEntry]:
        if not options.extract_templates:
            return []
        template_name = parse_file_data(text[:HEADER_READ_LIMIT], [TEMPLATE_HEADER])[TEMPLATE_HEADER]
        if not template_name:
            return []
        entry = CatalogEntry(original=template_name)
        entry.add_extracted_comment(f"{TEMPLATE_HEADER} of the theme")
        entry.add_reference(file_name)
        return [entry]

    def _read_call(
        self, node: Node, source: bytes, comments: List[Node]
    ) -> Optional[FunctionCall]:
        callee = node.child_by_field_name("function")
        if callee is None or callee.type not in _CALLEE_TYPES:
            return None
        name = _node_text(callee, source).lstrip("\\")
        if name not in self.functions:
            return None

        arguments_node = node.child_by_field_name("arguments")
        arguments: List[Optional[str]] = []
        if arguments_node is not None:
            for argument in arguments_node.named_children:
                if argument.type != "argument" or not argument.named_children:
                    continue
                arguments.append(_literal_value(argument.named_children[-1], source))

        line = callee.start_point[0] + 1
        return FunctionCall(
            name=name,
            line=line,
            arguments=arguments,
            comment=_preceding_translator_comment(comments, callee, source),
        )


def _node_text(node: Node, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _literal_value(node: Node, source: bytes) -> Optional[str]:
    """Decode a string literal or a ``.`` concatenation of literals."""
    if node.type == "string":
        return _unquote_single(_node_text(node, source))
    if node.type == "encapsed_string":
        if any(child.type not in _STRING_PART_TYPES for child in node.named_children):
            return None
        return _unquote_double(_node_text(node, source))
    if node.type == "parenthesized_expression" and node.named_children:
        return _literal_value(node.named_children[0], source)
    if node.type == "binary_expression":
        operator = node.child_by_field_name("operator")
        left = node.child_by_field_name("left")
        right = node.child_by_field_name("right")
        if operator is None or operator.type != "." or left is None or right is None:
            return None
        left_value = _literal_value(left, source)
        right_value = _literal_value(right, source)
        if left_value is None or right_value is None:
            return None
        return left_value + right_value
    return None


def _strip_quotes(raw: str) -> str:
    if raw[:1] in "bB" and len(raw) > 1 and raw[1] in "'\"":
        raw = raw[1:]
    return raw[1:-1]


def _unquote_single(raw: str) -> str:
    body = _strip_quotes(raw)
    return re.sub(r"\\([\\'])", r"\1", body)


def _unquote_double(raw: str) -> str:
    return _DOUBLE_QUOTED_ESCAPE.sub(_decode_escape, _strip_quotes(raw))


def _decode_escape(match: re.Match[str]) -> str:
    simple, octal, hexadecimal, codepoint = match.groups()
    if simple:
        return _SIMPLE_ESCAPES[simple]
    if octal:
        return chr(int(octal, 8) & 0xFF)
    if hexadecimal:
        return chr(int(hexadecimal, 16))
    return chr(int(codepoint, 16))


def _preceding_translator_comment(
    comments: List[Node], callee: Node, source: bytes
) -> Optional[str]:
    """Find a ``translators:`` comment ending on the call's line or the line before."""
    row = callee.start_point[0]
    for comment in reversed(comments):
        if comment.end_byte > callee.start_byte:
            continue
        if _end_row(comment) < row - 1:
            break
        found = translator_comment(_node_text(comment, source))
        if found:
            return found
    return None


def _end_row(node: Node) -> int:
    row, column = node.end_point[0], node.end_point[1]
    # Line comments include their newline in some grammar versions.
    if column == 0 and row > node.start_point[0]:
        return row - 1
    return row


__all__ = ["PHP_FUNCTIONS", "PHP_LANGUAGE", "PhpExtractor"]
