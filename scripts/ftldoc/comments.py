"""Doc comment parser.

A doc comment is a sequence of lines. Each line is one of:

    @param name description      opens a parameter description
    @tag value                   any other tag, last value wins
    free text                    appended to the open parameter, or the body

Lines may carry a leading ``--``. Free text lines that start with
whitespace keep exactly one leading space.
"""

from __future__ import annotations

import re

from .models import Param, TagMap

LINESPLIT_PATTERN = re.compile(r"\r\n|\r|\n")
PARAM_PATTERN = re.compile(r"\s*(?:--)?\s*@param\s+(\w+)\s*(.*)", re.DOTALL)
AT_PATTERN = re.compile(r"\s*(?:--)?\s*(@\w+)\s*(.*)", re.DOTALL)
# Matches every string
TEXT_PATTERN = re.compile(r"\s*(?:--)?(.*)", re.DOTALL)


def parse_comment(text: str | None) -> TagMap:
    """Parse the raw text of a comment into a TagMap.

    The first character (the doc marker, or whatever the comment starts
    with) is dropped before parsing. Missing or empty text yields an empty
    TagMap.
    """
    result = TagMap()
    if not text:
        return result

    params: dict[str, str] = {}
    body: list[str] = []
    current: str | None = None

    for line in LINESPLIT_PATTERN.split(text[1:]):
        if m := PARAM_PATTERN.fullmatch(line):
            current = m.group(1)
            params[current] = m.group(2)
        elif m := AT_PATTERN.fullmatch(line):
            result.tags[m.group(1)] = m.group(2)
        else:
            m = TEXT_PATTERN.fullmatch(line)
            captured = m.group(1)
            if current is not None and not captured.strip():
                # Blank line ends the parameter block
                current = None
                body.append("\n")
                continue
            if line[:1].isspace():
                captured = " " + captured
            captured += "\n"
            if current is not None:
                description = params[current]
                if not description.endswith("\n"):
                    description += "\n"
                params[current] = description + captured
            else:
                body.append(captured)

    comment = "".join(body).replace("\n", "")
    result.params = [Param(name, desc) for name, desc in params.items()]
    result.comment = comment
    end = comment.find(".")
    result.short_comment = comment[: end + 1] if end >= 0 else comment
    return result
