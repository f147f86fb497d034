"""
Management command to deploy the static site to its hosting branch.

Builds first (unless --skip-build) and only publishes if the build succeeded.
The generator output directory is then committed to PRESS_SITE["BRANCH"] on
PRESS_SITE["REMOTE"], and pushed unless PUSH is off or --no-push is given.
"""

from django.core.management import call_command
from django.core.management.base import BaseCommand, CommandError

from press.conf import get_site_config
from press.exceptions import PublishError
from press.publish import publish_directory


class Command(BaseCommand):
    help = 'Build the site and publish the output directory to the hosting branch'

    def add_arguments(self, parser):
        parser.add_argument(
            '--config',
            type=str,
            help='Generator config file passed on to build_site',
        )
        parser.add_argument(
            '--no-push',
            action='store_true',
            help='Commit to the hosting branch without pushing',
        )
        parser.add_argument(
            '--skip-build',
            action='store_true',
            help='Publish the existing output directory without building',
        )

    def handle(self, *args, **options):
        config = get_site_config()
        push = config['PUSH'] and not options.get('no_push')

        if not options.get('skip_build'):
            # A CommandError from build_site propagates and stops the deploy here
            build_options = {'stdout': self.stdout, 'stderr': self.stderr}
            if options.get('config'):
                build_options['config'] = options['config']
            call_command('build_site', **build_options)

        try:
            committed = publish_directory(
                config['OUTPUT_DIR'],
                remote=config['REMOTE'],
                branch=config['BRANCH'],
                push=push,
                message=config['COMMIT_MESSAGE'],
                repo_dir=config['SOURCE_DIR'],
            )
        except PublishError as e:
            raise CommandError(f'Deploy failed: {e}') from e

        if not committed:
            self.stdout.write(self.style.WARNING('Nothing to deploy, hosting branch is up to date'))
        elif push:
            self.stdout.write(
                self.style.SUCCESS(f'Deployed to {config["REMOTE"]}/{config["BRANCH"]}')
            )
        else:
            self.stdout.write(
                self.style.WARNING(f'Committed to {config["BRANCH"]} without pushing')
            )
