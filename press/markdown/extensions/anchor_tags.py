# press/markdown/extensions/anchor_tags.py
"""
A Markdown extension that hands headings and list items to AnchorRenderer hooks.

- Runs after the inline processor and after the attr_list and toc tree
  processors, so each hook receives finished inner HTML. Attributes those
  extensions set on a heading or list item are replaced by the hook output.
- Walks the tree in document order. Children are rendered before their parent,
  so a list item containing a nested list sees the nested items already tagged.
- Headings (h1-h6) go to AnchorRenderer.header(text, level).
- List items go to AnchorRenderer.list_item(text, list_type) with list_type
  "ordered" or "unordered" depending on the enclosing list.
- The returned HTML is stored in the raw HTML stash and restored untouched by
  Python-Markdown's RawHtmlPostprocessor.
- Quotes in text reach the hooks as &quot; and &#39;, the way other Markdown
  engines hand text to header callbacks.
- A new AnchorRenderer is created for every conversion.

Usage:
    markdown.markdown(text, extensions=[AnchorTagsExtension(policy="scoped")])
"""

import logging
import re
from html import escape
from xml.etree import ElementTree as ET

from markdown import util
from markdown.extensions import Extension
from markdown.serializers import to_html_string
from markdown.treeprocessors import Treeprocessor

from ..anchors import DEFAULT_POLICY, AnchorPolicy, AnchorRenderer

logger = logging.getLogger(__name__)

_HEADING_TAGS = {f"h{i}" for i in range(1, 7)}
_LIST_TYPES = {"ol": "ordered", "ul": "unordered"}

# Backslash-escaped characters are kept as STX<codepoint>ETX until the end of the pipeline
_ESCAPED_CHAR_RE = re.compile(f"{util.STX}([0-9]+){util.ETX}")


def _escape_quotes(text):
    return text.replace('"', "&quot;").replace("'", "&#39;")


class AnchorTagger(Treeprocessor):
    def __init__(self, md, *, policy=DEFAULT_POLICY):
        super().__init__(md)
        self.policy = AnchorPolicy.from_value(policy)
        self.renderer = None

    def run(self, root: ET.Element):
        # Fresh counters for every document
        self.renderer = AnchorRenderer(self.policy)
        self._process_container(root)
        logger.debug(f"Anchor tagging finished: {self.renderer!r}")
        return root

    def _process_container(self, parent: ET.Element):
        for node in list(parent):
            self._process_container(node)

            tag = node.tag.lower() if isinstance(node.tag, str) else ""
            if tag in _HEADING_TAGS:
                fragment = self.renderer.header(self._inner_html(node), int(tag[1]))
            elif tag == "li":
                list_type = _LIST_TYPES.get(str(parent.tag).lower())
                fragment = self.renderer.list_item(self._inner_html(node), list_type)
            else:
                continue

            self._splice(parent, node, self.md.htmlStash.store(fragment))

    def _inner_html(self, node: ET.Element) -> str:
        # The serializer leaves quotes in character data as they are
        for child in node.iter():
            if child.text:
                child.text = _escape_quotes(child.text)
            if child is not node and child.tail:
                child.tail = _escape_quotes(child.tail)

        html = to_html_string(node)
        start = html.index(">") + 1
        end = html.rindex("</")
        return self._restore(html[start:end])

    def _restore(self, html: str) -> str:
        """Resolve raw HTML placeholders and backslash escapes into final HTML."""
        stash = self.md.htmlStash.rawHtmlBlocks

        def stashed(match):
            index = int(match.group(1))
            if index >= len(stash):
                return match.group(0)
            entry = stash[index]
            if isinstance(entry, ET.Element):
                return self.md.serializer(entry)
            return str(entry)

        previous = None
        while previous != html:
            previous = html
            html = util.HTML_PLACEHOLDER_RE.sub(stashed, html)

        html = html.replace(util.AMP_SUBSTITUTE, "&")
        return _ESCAPED_CHAR_RE.sub(
            lambda m: _escape_quotes(escape(chr(int(m.group(1))), quote=False)), html
        )

    @staticmethod
    def _splice(parent: ET.Element, node: ET.Element, placeholder: str):
        """Replace node with placeholder text, keeping its tail."""
        index = list(parent).index(node)
        text = "\n" + placeholder + (node.tail or "\n")
        if index == 0:
            parent.text = (parent.text or "") + text
        else:
            previous = parent[index - 1]
            previous.tail = (previous.tail or "") + text
        parent.remove(node)


class AnchorTagsExtension(Extension):
    def __init__(self, **kwargs):
        self.config = {
            "policy": [
                DEFAULT_POLICY.value,
                "Anchor policy: heading_id, marker_id, section or scoped",
            ],
        }
        super().__init__(**kwargs)

    def extendMarkdown(self, md):
        # Priority 4: after inline (20), prettify (10), attr_list (8) and toc (5),
        # before unescape (0)
        md.treeprocessors.register(
            AnchorTagger(md, policy=self.getConfig("policy")),
            "anchor_tags",
            priority=4,
        )


def makeExtension(**kwargs):
    return AnchorTagsExtension(**kwargs)
