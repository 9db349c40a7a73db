"""Block records: content units placed into theme regions."""

from django.contrib.auth.models import Group
from django.core.exceptions import ValidationError
from django.db import models

from apps.blocks.services.context import CORE_HANDLER, Visibility
from apps.blocks.services.predicates import get_predicate


class VisibilityChoices(models.TextChoices):
    """How ``Block.pages`` is interpreted."""

    EXCLUDE = Visibility.EXCLUDE, "All pages except those listed"
    INCLUDE = Visibility.INCLUDE, "Only the listed pages"
    CUSTOM = Visibility.CUSTOM, "Custom predicate"


class Block(models.Model):
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    body = models.TextField(
        blank=True,
        default="",
        help_text="HTML content rendered by the core handler.",
    )
    handler = models.CharField(
        max_length=100,
        default=CORE_HANDLER,
        help_text="Namespace of the handler that renders this block.",
    )
    status = models.BooleanField(default=True, help_text="Only enabled blocks are rendered.")
    visibility = models.CharField(
        max_length=10,
        choices=VisibilityChoices.choices,
        default=VisibilityChoices.EXCLUDE,
    )
    pages = models.TextField(
        blank=True,
        default="",
        help_text=(
            "One path per line, '*' is a wildcard and '/' is the front page. "
            "For custom visibility, the name of a registered predicate."
        ),
    )
    # Allowed locale codes; empty means every locale.
    locale = models.JSONField(default=list, blank=True)
    roles = models.ManyToManyField(
        Group,
        blank=True,
        related_name="blocks",
        help_text="Restrict the block to these roles; leave empty for everyone.",
    )
    settings = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("title", "id")

    def __str__(self):
        return self.title or f"Block #{self.pk}"

    @property
    def is_core(self) -> bool:
        return self.handler == CORE_HANDLER

    def clean(self):
        super().clean()
        errors = {}
        if not (self.handler or "").strip():
            errors["handler"] = "Invalid block handler."
        if not isinstance(self.locale, list) or not all(isinstance(code, str) for code in self.locale):
            errors["locale"] = "Locale must be a list of language codes."
        if self.visibility == VisibilityChoices.CUSTOM and get_predicate(self.pages) is None:
            errors["pages"] = f"Unknown visibility predicate {self.pages.strip()!r}."
        if errors:
            raise ValidationError(errors)
