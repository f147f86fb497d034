# press/markdown/renderer.py

import markdown

from .config import get_markdown_config


def render_markdown(text, context=None):
    """
    Render one Markdown document to HTML with anchor-tagged headings and list items.

    A new Markdown instance is built per call, so anchor counters never carry
    over from one document to the next.

    Args:
        text: Raw markdown text
        context: Optional dict; "anchor_policy" overrides the configured policy
    """
    context = context or {}

    md = markdown.Markdown(**get_markdown_config(policy=context.get("anchor_policy")))
    return md.convert(text or "")
