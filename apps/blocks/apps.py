from importlib import import_module

from django.apps import AppConfig

from apps.blocks.conf import settings


class BlocksConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.blocks"
    verbose_name = "Blocks"

    def ready(self):
        from .registry import handler_registry

        # Builtin predicates register themselves on import.
        from . import predicates  # noqa: F401

        # Load handler entry points: "module:callable" receives the registry,
        # a bare module path registers on import.
        for entry in getattr(settings, "BLOCKS_HANDLERS", []):
            try:
                module_path, callable_name = entry.split(":", 1)
            except ValueError:
                import_module(entry)
            else:
                module = import_module(module_path)
                registrar = getattr(module, callable_name)
                registrar(handler_registry)

        # Cache invalidation on block, placement and handler changes.
        from .signals import cache_invalidation  # noqa: F401
