"""
Management command to build the static site with the external generator.

Runs PRESS_SITE["BUILD_COMMAND"] with --config <file> and relays the
generator's stdout and stderr. A failed build exits non-zero.
"""

from django.core.management.base import BaseCommand, CommandError

from press.build import run_build
from press.conf import get_site_config
from press.exceptions import BuildError


class Command(BaseCommand):
    help = 'Build the static site with the configured site generator'

    def add_arguments(self, parser):
        parser.add_argument(
            '--config',
            type=str,
            help='Generator config file (default: PRESS_SITE["CONFIG_FILE"])',
        )

    def handle(self, *args, **options):
        config = get_site_config()

        try:
            result = run_build(config, config_file=options.get('config'))
        except BuildError as e:
            if e.stdout:
                self.stdout.write(e.stdout)
            if e.stderr:
                self.stderr.write(e.stderr)
            raise CommandError(f'Build failed: {e}') from e

        if result.stdout:
            self.stdout.write(result.stdout)
        if result.stderr:
            self.stderr.write(result.stderr)
        self.stdout.write(
            self.style.SUCCESS(f'Site built into {config["OUTPUT_DIR"]}')
        )
