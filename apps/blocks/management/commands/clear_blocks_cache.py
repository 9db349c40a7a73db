from django.core.management.base import BaseCommand

from apps.blocks.services.cache import ResultCache


class Command(BaseCommand):
    help = "Drop cached block listings and visibility decisions for all themes."

    def handle(self, *args, **options):
        cache = ResultCache()
        cache.invalidate()
        self.stdout.write(self.style.SUCCESS(f"Cleared cache group '{cache.group}'."))
