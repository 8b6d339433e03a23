"""Parser for FreeMarker templates (angle-bracket syntax).

Only as much of FTL is understood as the extractors need: comments,
macro and function definitions with their parameter lists, and enough of
the block structure to give every node its proper parent. Expressions
are skipped over, not evaluated.
"""

from __future__ import annotations

import bisect
import logging
import re
from pathlib import Path

from . import config
from .errors import TemplateSyntaxError
from .models import Position
from .tree import (
    CommentNode,
    DefinitionNode,
    ElementNode,
    Node,
    RootNode,
    TextNode,
)

log = logging.getLogger(__name__)

MARKUP_PATTERN = re.compile(r"<#--|</?#|</?@|\$\{")
DIRECTIVE_NAME = re.compile(r"[A-Za-z_]\w*")
USER_DIRECTIVE_NAME = re.compile(r"[^\s/>]*")
DEFINITION_NAME = re.compile(r"\s*(?:\"([^\"]*)\"|'([^']*)'|([^\s(=,/>\"']+))")
PARAM_NAME = re.compile(r"[A-Za-z_$][\w$]*")

DEFINITIONS = frozenset({"macro", "function"})
BLOCKS = frozenset(
    {
        "if",
        "list",
        "items",
        "switch",
        "attempt",
        "compress",
        "escape",
        "noescape",
        "noEscape",
        "autoesc",
        "autoEsc",
        "noautoesc",
        "noAutoEsc",
        "outputformat",
        "outputFormat",
        "foreach",
        "forEach",
    }
)
NOPARSE = frozenset({"noparse", "noParse"})
NOPARSE_END = re.compile(r"</#no(?:parse|Parse)\s*>")
# Block only in the capturing form, without "="
CAPTURES = frozenset({"assign", "global", "local"})
# May be written with or without a closing tag
OPTIONAL_CLOSE = frozenset({"sep"})

_OPENERS = {"(": ")", "[": "]", "{": "}"}


class TemplateParser:
    """Build a node tree from template source."""

    def __init__(self, source: str, filename: str | None = None):
        self.source = source
        self.filename = filename
        self._line_starts = [0] + [m.end() for m in re.finditer(r"\r\n|\r|\n", source)]

    def position(self, offset: int) -> Position:
        line = bisect.bisect_right(self._line_starts, offset)
        return Position(line, offset - self._line_starts[line - 1] + 1)

    def error(self, message: str, offset: int) -> TemplateSyntaxError:
        p = self.position(offset)
        return TemplateSyntaxError(message, p.line, p.column, self.filename)

    def _span(self, start: int, end: int) -> tuple[Position, Position]:
        """Positions of the first and last character of source[start:end]."""
        return self.position(start), self.position(max(start, end - 1))

    def parse(self) -> RootNode:
        src = self.source
        root = RootNode(*self._span(0, len(src)))
        # (node, start offset) of every open block
        stack: list[tuple[Node, int]] = [(root, 0)]
        pos = 0

        while True:
            m = MARKUP_PATTERN.search(src, pos)
            text_end = m.start() if m else len(src)
            if text_end > pos:
                stack[-1][0].append(TextNode(*self._span(pos, text_end), src[pos:text_end]))
            if m is None:
                break

            start = m.start()
            token = m.group()
            if token == "<#--":
                pos = self._comment(start, stack[-1][0])
            elif token == "${":
                end = self._scan_until(start + 2, "}", "interpolation")
                node = ElementNode(*self._span(start, end), "${", src[start:end])
                stack[-1][0].append(node)
                pos = end
            elif token.startswith("</"):
                pos = self._close(start, token[2:], stack)
            else:
                pos = self._open(start, token[1:], stack)

        if len(stack) > 1:
            node, offset = stack[-1]
            raise self.error(f"unclosed {_describe(node)}", offset)
        return root

    def _comment(self, start: int, parent: Node) -> int:
        end = self.source.find("-->", start + 4)
        if end < 0:
            raise self.error("unterminated comment", start)
        end += 3
        parent.append(CommentNode(*self._span(start, end), self.source[start + 4 : end - 3]))
        return end

    def _scan_until(self, pos: int, terminator: str, what: str) -> int:
        """Offset just past ``terminator`` at nesting depth 0 outside strings."""
        src = self.source
        closers: list[str] = []
        quote = None
        i = pos
        while i < len(src):
            ch = src[i]
            if quote:
                if ch == "\\":
                    i += 1
                elif ch == quote:
                    quote = None
            elif ch in "\"'":
                quote = ch
            elif ch in _OPENERS:
                closers.append(_OPENERS[ch])
            elif closers and ch == closers[-1]:
                closers.pop()
            elif not closers and ch == terminator:
                return i + 1
            i += 1
        raise self.error(f"unterminated {what}", pos)

    def _open(self, start: int, sigil: str, stack: list[tuple[Node, int]]) -> int:
        src = self.source
        parent = stack[-1][0]
        name_start = start + 2
        pattern = DIRECTIVE_NAME if sigil == "#" else USER_DIRECTIVE_NAME
        name = pattern.match(src, name_start)
        if sigil == "#" and name is None:
            raise self.error("missing directive name", start)
        keyword = name.group() if sigil == "#" else "@" + name.group()
        end = self._scan_until(name.end(), ">", f"<{sigil}{name.group()}> tag")
        header = src[name.end() : end - 1]

        if sigil == "#" and keyword in DEFINITIONS:
            node = self._definition(keyword, header, start, name.end())
            parent.append(node)
            stack.append((node, start))
            return end

        if sigil == "#" and keyword in NOPARSE:
            m = NOPARSE_END.search(src, end)
            if m is None:
                raise self.error(f"unclosed <#{keyword}>", start)
            close, stop = m.start(), m.end()
            node = ElementNode(*self._span(start, stop), keyword, src[start:stop])
            if close > end:
                node.append(TextNode(*self._span(end, close), src[end:close]))
            parent.append(node)
            return stop

        node = ElementNode(*self._span(start, end), keyword, src[start:end])
        parent.append(node)
        self_closed = header.rstrip().endswith("/")
        if sigil == "@":
            block = not self_closed
        elif keyword in CAPTURES:
            block = "=" not in header and not self_closed
        else:
            block = keyword in BLOCKS
        if block:
            stack.append((node, start))
        return end

    def _close(self, start: int, sigil: str, stack: list[tuple[Node, int]]) -> int:
        src = self.source
        end = src.find(">", start)
        if end < 0:
            raise self.error("unterminated closing tag", start)
        end += 1
        name = src[start + 3 : end - 1].strip()
        keyword = name if sigil == "#" else "@" + name

        node, offset = stack[-1]
        if not _closes(node, keyword):
            if sigil == "#" and keyword in OPTIONAL_CLOSE:
                return end
            raise self.error(f"unexpected </{sigil}{name}>", start)
        stack.pop()

        node.end = self.position(end - 1)
        if isinstance(node, (DefinitionNode, ElementNode)):
            node.source = src[offset:end]
        return end

    def _definition(self, keyword: str, header: str, start: int, offset: int) -> DefinitionNode:
        m = DEFINITION_NAME.match(header)
        if m is None or not m.group(0).strip():
            raise self.error(f"<#{keyword}> without a name", start)
        name = next(g for g in m.groups() if g is not None)
        arguments, catch_all = self._parameters(header[m.end() :], offset + m.end())
        begin = self.position(start)
        return DefinitionNode(
            begin,
            begin,
            name,
            arguments,
            "",
            is_function=keyword == "function",
            catch_all=catch_all,
        )

    def _parameters(self, text: str, offset: int) -> tuple[list[str], str | None]:
        """Split a parameter list into names and the catch-all name."""
        text = text.strip()
        if text.startswith("(") and text.endswith(")"):
            text = text[1:-1]

        arguments: list[str] = []
        catch_all = None
        i = 0
        while i < len(text):
            if text[i].isspace() or text[i] == ",":
                i += 1
                continue
            m = PARAM_NAME.match(text, i)
            if m is None or catch_all is not None:
                raise self.error(f"invalid parameter list {text!r}", offset)
            i = m.end()
            if text.startswith("...", i):
                catch_all = m.group()
                i += 3
                continue
            while i < len(text) and text[i].isspace():
                i += 1
            if i < len(text) and text[i] == "=":
                i = _skip_expression(text, i + 1)
            arguments.append(m.group())
        return arguments, catch_all


def _skip_expression(text: str, i: int) -> int:
    """Index past a default-value expression."""
    while i < len(text) and text[i].isspace():
        i += 1
    closers: list[str] = []
    quote = None
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 1
            elif ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        elif ch in _OPENERS:
            closers.append(_OPENERS[ch])
        elif closers and ch == closers[-1]:
            closers.pop()
        elif not closers and (ch.isspace() or ch == ","):
            break
        i += 1
    return i


def _closes(node: Node, keyword: str) -> bool:
    if isinstance(node, DefinitionNode):
        return keyword == ("function" if node.is_function else "macro")
    if isinstance(node, ElementNode):
        # </@> closes any user directive call
        return node.keyword == keyword or (keyword == "@" and node.keyword.startswith("@"))
    return False


def _describe(node: Node) -> str:
    if isinstance(node, DefinitionNode):
        return f"<#{'function' if node.is_function else 'macro'} {node.name}>"
    if isinstance(node, ElementNode):
        keyword = node.keyword
        return f"<{keyword}>" if keyword.startswith("@") else f"<#{keyword}>"
    return "block"


def parse_template(source: str, filename: str | None = None) -> RootNode:
    return TemplateParser(source, filename).parse()


def parse_file(path: Path, encoding: str | None = None) -> RootNode:
    """Read and parse a template file."""
    source = path.read_text(encoding=encoding or config.SOURCE_ENCODING)
    log.debug("Parsing %s (%d chars)", path, len(source))
    return parse_template(source, path.name)
