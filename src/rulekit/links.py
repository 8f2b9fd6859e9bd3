"""Cross-reference rewriting for index routing tables.

Three Markdown link forms into the ``guides/`` sub-tree are recognised,
each with or without a leading ``./`` and an optional ``#fragment``:

- inline links, ``[Keys](./guides/01-query-keys.md)``
- inline links with an angle-bracket target, ``[Keys](<guides/01-query-keys.md>)``
- reference definitions, ``[keys]: ./guides/01-query-keys.md``

Link titles after the target are not supported, and neither are HTML anchors.
"""

from __future__ import annotations

import re
from typing import NamedTuple

GUIDE_TARGET = r"(?:\./)?guides/(?P<identifier>[^()<>\s#/]+)\.md(?P<fragment>#[^()<>\s]*)?"

# e.g. (./guides/01-query-keys.md#usage) or (<guides/01-query-keys.md>)
INLINE_LINK_PATTERN = re.compile(
    rf"(?P<lead>\()(?P<open><?){GUIDE_TARGET}(?P<close>>?)(?P<tail>\))",
)

# e.g. [keys]: ./guides/01-query-keys.md
REFERENCE_LINK_PATTERN = re.compile(
    rf"^(?P<lead>[ ]{{0,3}}\[[^\]\n]+\]:[ \t]*)(?P<open><?){GUIDE_TARGET}(?P<close>>?)(?P<tail>[ \t]*)$",
    re.MULTILINE,
)


class LinkRewrite(NamedTuple):
    """Rewritten content plus guide identifiers that had no mapping."""

    content: str
    unresolved: list[str]


def rewrite_guide_links(content: str, mapping: dict[str, str]) -> LinkRewrite:
    """Point guide links at their generated output paths.

    Only links into ``guides/`` are considered. Links to guides missing
    from ``mapping`` are left untouched and reported as unresolved.

    Args:
        content: Index content
        mapping: Guide identifier to output path

    Returns:
        Rewritten content and the unresolved guide identifiers, in order of appearance
    """
    unresolved: list[str] = []

    def _replace(match: re.Match[str]) -> str:
        identifier = match.group("identifier")
        target = mapping.get(identifier)
        if target is None:
            if identifier not in unresolved:
                unresolved.append(identifier)
            return match.group(0)
        return "".join(
            (
                match.group("lead"),
                match.group("open"),
                target,
                match.group("fragment") or "",
                match.group("close"),
                match.group("tail"),
            ),
        )

    matches = sorted(
        [*REFERENCE_LINK_PATTERN.finditer(content), *INLINE_LINK_PATTERN.finditer(content)],
        key=lambda m: m.start(),
    )
    parts = []
    position = 0
    for match in matches:
        if match.start() < position:
            continue
        parts.append(content[position:match.start()])
        parts.append(_replace(match))
        position = match.end()
    parts.append(content[position:])
    return LinkRewrite("".join(parts), unresolved)
