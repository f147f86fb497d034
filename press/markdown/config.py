from press.conf import get_markdown_settings

from .extensions.anchor_tags import AnchorTagsExtension


def get_markdown_config(policy=None):
    """
    Configuration for Python-Markdown rendering.

    Built-in extensions come from PRESS_MARKDOWN["EXTENSIONS"]. The anchor
    tagging extension is always appended. Its tree processor runs after those
    of attr_list and toc, whatever the list order.

    Args:
        policy: Optional anchor policy overriding PRESS_MARKDOWN["ANCHOR_POLICY"]
    """
    options = get_markdown_settings()

    return {
        "extensions": [
            *options["EXTENSIONS"],
            AnchorTagsExtension(policy=policy or options["ANCHOR_POLICY"]),
        ],
        "output_format": "html",
    }
