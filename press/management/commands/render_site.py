"""
Management command to render a directory of Markdown documents into static HTML.

Every *.md file below the content directory becomes an .html file at the same
relative path below the output directory, wrapped in the press/page.html
template. Each document is rendered with its own anchor counters.
"""

import logging
from collections import Counter
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError
from django.template.loader import render_to_string

from press.conf import get_markdown_settings, get_site_config
from press.markdown.anchors import AnchorPolicy
from press.markdown.renderer import render_markdown
from press.markdown.utils import collect_anchors, extract_title

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Render Markdown documents to static HTML pages with anchor-tagged headings and list items'

    def add_arguments(self, parser):
        parser.add_argument(
            '--content',
            type=str,
            help='Directory of Markdown sources (default: PRESS_SITE["CONTENT_DIR"])',
        )
        parser.add_argument(
            '--output',
            type=str,
            help='Directory to write HTML into (default: PRESS_SITE["OUTPUT_DIR"])',
        )
        parser.add_argument(
            '--policy',
            type=str,
            choices=[policy.value for policy in AnchorPolicy],
            help='Anchor policy (default: PRESS_MARKDOWN["ANCHOR_POLICY"])',
        )

    def handle(self, *args, **options):
        config = get_site_config()
        content_dir = Path(options.get('content') or config['CONTENT_DIR'])
        output_dir = Path(options.get('output') or config['OUTPUT_DIR'])
        try:
            policy = AnchorPolicy.from_value(
                options.get('policy') or get_markdown_settings()['ANCHOR_POLICY']
            ).value
        except ValueError as e:
            raise CommandError(str(e)) from e

        if not content_dir.is_dir():
            raise CommandError(f'Content directory not found: {content_dir}')

        sources = sorted(content_dir.rglob('*.md'))
        total = len(sources)
        self.stdout.write(f'Rendering {total} document(s) from {content_dir}\n')

        for i, source in enumerate(sources, 1):
            relative = source.relative_to(content_dir)
            target = output_dir / relative.with_suffix('.html')

            body = render_markdown(
                source.read_text(encoding='utf-8'),
                context={'anchor_policy': policy},
            )

            duplicates = [
                anchor for anchor, count in Counter(collect_anchors(body)).items() if count > 1
            ]
            if duplicates:
                logger.warning(f"Duplicate anchors in {relative}: {', '.join(duplicates)}")

            page = render_to_string(
                'press/page.html',
                {'title': extract_title(body) or relative.stem, 'body': body},
            )

            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(page, encoding='utf-8')
            self.stdout.write(f'[{i}/{total}] {relative} -> {target}')

        self.stdout.write(
            self.style.SUCCESS(f'\nCompleted! Rendered {total} document(s) into {output_dir}')
        )
