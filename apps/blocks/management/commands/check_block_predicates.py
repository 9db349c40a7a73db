from django.core.management.base import BaseCommand, CommandError

from apps.blocks.models import Block, VisibilityChoices
from apps.blocks.services.predicates import check_predicate

from ._context import add_context_arguments, context_from_options


class Command(BaseCommand):
    help = (
        "Evaluate the predicate of every block with custom visibility against a "
        "simulated request and report the ones that fail."
    )

    def add_arguments(self, parser):
        add_context_arguments(parser)

    def handle(self, *args, **options):
        context = context_from_options(options)
        failures = 0
        blocks = Block.objects.filter(visibility=VisibilityChoices.CUSTOM).order_by("pk")
        for block in blocks:
            try:
                allowed = check_predicate(block.pages, context)
            except Exception as exc:
                failures += 1
                self.stderr.write(
                    self.style.ERROR(f"Block {block.pk} ({block}): {type(exc).__name__}: {exc}")
                )
            else:
                verdict = "shown" if allowed else "hidden"
                self.stdout.write(f"Block {block.pk} ({block}): {verdict}")

        if failures:
            raise CommandError(f"{failures} block predicate(s) failed.")
        self.stdout.write(self.style.SUCCESS("All block predicates evaluated."))
