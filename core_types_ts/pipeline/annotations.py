"""
Annotation formatting.

Converts the annotation fields of a node to a JSDoc block and back:

    /**
     * Title
     *
     * Description
     * @example { name: "Joe" }
     * @default { user: "" }
     * @see http://username
     */

Parsing is best-effort: unknown or malformed tags are dropped.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from .core_types.nodes import Annotations, TypeNode

TAG_PATTERN = re.compile(r"^@(\w+)(?:\s(.*))?$")
# Text lines starting with `@` (after any backslashes) get one more backslash
ESCAPED_AT = re.compile(r"^(\\*)@")


@dataclass
class CommentBlock:
    """The content lines of a JSDoc block, without delimiters."""

    lines: list[str] = field(default_factory=list)

    def render(self, indent: str = "") -> list[str]:
        """Render the block as source lines prefixed by ``indent``."""
        if len(self.lines) == 1:
            return [f"{indent}/** {self.lines[0]} */"]
        rendered = [f"{indent}/**"]
        for line in self.lines:
            rendered.append(f"{indent} * {line}" if line else f"{indent} *")
        rendered.append(f"{indent} */")
        return rendered


def _escape_line(line: str) -> str:
    return ESCAPED_AT.sub(r"\\\1@", line)


def _unescape_line(line: str) -> str:
    return line[1:] if ESCAPED_AT.match(line) and line.startswith("\\") else line


def _escape(text: str) -> list[str]:
    return [_escape_line(line) for line in text.replace("*/", "*\\/").split("\n")]


def _tag(name: str, text: str) -> list[str]:
    first, *rest = text.replace("*/", "*\\/").split("\n")
    return [f"@{name} {first}" if first else f"@{name}", *(_escape_line(line) for line in rest)]


def to_comment(node: TypeNode) -> CommentBlock | None:
    """Build the JSDoc block for a node, or None when it has no annotations."""
    lines: list[str] = []
    if node.title:
        lines.extend(_escape(node.title))
    if node.description:
        if lines:
            lines.append("")
        lines.extend(_escape(node.description))
    for example in node.examples or []:
        lines.extend(_tag("example", example))
    if node.default:
        lines.extend(_tag("default", node.default))
    for see in node.see or []:
        lines.extend(_tag("see", see))
    return CommentBlock(lines) if lines else None


def _comment_lines(text: str) -> list[str]:
    """Strip the comment delimiters and the ` * ` prefix of each line."""
    body = text.strip().removeprefix("/**").removesuffix("*/")

    if "\n" not in body:
        # `/** text */`: only the delimiter spaces belong to the comment
        line = body.removeprefix(" ").removesuffix(" ")
        return [line.replace("*\\/", "*/")] if line.strip() else []

    first, *rest = body.split("\n")
    lines = [first.removeprefix(" ")]
    for i, line in enumerate(rest):
        if i == len(rest) - 1:
            line = line.rstrip()
        line = line.lstrip(" \t")
        if line.startswith("*"):
            line = line[1:].removeprefix(" ")
        lines.append(line)
    lines = [line.replace("*\\/", "*/") for line in lines]

    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return lines


def from_comment(text: str | None) -> Annotations:
    """
    Recover annotations from a JSDoc block.

    Args:
        text: The full comment text including ``/**`` and ``*/``

    Returns:
        Annotations; empty when there is no comment
    """
    annotations = Annotations()
    if not text:
        return annotations

    body: list[str] = []
    tags: list[tuple[str, list[str]]] = []
    for line in _comment_lines(text):
        if line.startswith("@"):
            match = TAG_PATTERN.match(line)
            # Malformed tags swallow their continuation lines
            tags.append((match.group(1), [match.group(2) or ""]) if match else ("", []))
        elif tags:
            tags[-1][1].append(_unescape_line(line))
        else:
            body.append(_unescape_line(line))

    if body:
        split = body.index("") if "" in body else len(body)
        annotations.title = "\n".join(body[:split]) or None
        annotations.description = "\n".join(body[split + 1 :]).strip("\n") or None

    for name, value_lines in tags:
        value = "\n".join(value_lines).rstrip("\n")
        if name == "example":
            annotations.examples = [*(annotations.examples or []), value]
        elif name == "default":
            annotations.default = value
        elif name == "see":
            annotations.see = [*(annotations.see or []), value]

    return annotations
