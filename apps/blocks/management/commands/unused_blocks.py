from django.core.management.base import BaseCommand, CommandError

from apps.blocks.services.regions import get_composer

from ._context import add_context_arguments, context_from_options


class Command(BaseCommand):
    help = (
        "List blocks that render in no region of the front or back theme. "
        "With --path/--locale/--role, blocks hidden by their visibility rules "
        "for that request also count as unused."
    )

    def add_arguments(self, parser):
        add_context_arguments(parser)
        parser.add_argument(
            "--ignore-visibility",
            action="store_true",
            help="Only consider status, placement and handler, not visibility rules.",
        )

    def handle(self, *args, **options):
        context = None if options.get("ignore_visibility") else context_from_options(options)
        try:
            blocks = get_composer().unused(context)
        except Exception as exc:
            raise CommandError(f"Error listing unused blocks: {exc}")

        for block in blocks:
            state = "enabled" if block.status else "disabled"
            self.stdout.write(f"{block.id}\t{block.handler}\t{state}\t{block.title}")
        self.stdout.write(self.style.SUCCESS(f"{len(blocks)} unused block(s)."))
