# press/templatetags/markdown_tags.py

from django import template
from django.utils.safestring import mark_safe

from press.markdown.renderer import render_markdown

register = template.Library()


@register.filter(name="markdown")
def markdown_filter(value):
    return mark_safe(render_markdown(value))


@register.simple_tag
def markdown_with_policy(value, policy):
    """Render markdown with a specific anchor policy, e.g. {% markdown_with_policy body "heading_id" %}"""
    return mark_safe(render_markdown(value, context={"anchor_policy": policy}))
