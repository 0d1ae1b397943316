from __future__ import annotations

from django.conf import settings
from django.db import models
from django.db.models import Q


class CustomQuerySet(models.QuerySet):

    def for_cocktail(self, cocktail):
        return self.filter(cocktail=cocktail)

    def visible_to(self, member_id):
        """Open recipes plus the private ones owned by ``member_id``."""
        if member_id is None:
            return self.filter(open=True)
        return self.filter(Q(open=True) | Q(member_id=member_id))


class Custom(models.Model):
    member = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='customs')
    cocktail = models.ForeignKey('cocktails.Cocktail', on_delete=models.PROTECT, related_name='customs')
    name = models.CharField(max_length=100)
    comment = models.TextField(blank=True, default='')
    recipe = models.TextField(blank=True, default='')
    summary = models.CharField(max_length=255, blank=True, default='')
    open = models.BooleanField(default=True)
    image = models.CharField(max_length=500, blank=True, default='')
    created = models.DateTimeField(auto_now_add=True)
    updated = models.DateTimeField(auto_now=True)

    objects = CustomQuerySet.as_manager()

    def __str__(self) -> str:
        return self.name

    class Meta:
        verbose_name = 'Custom cocktail'
        verbose_name_plural = 'Custom cocktails'
        ordering = ['-id']

    def is_visible_to(self, member_id) -> bool:
        return self.open or self.member_id == member_id


class CustomIngredient(models.Model):
    custom = models.ForeignKey(Custom, on_delete=models.CASCADE, related_name='custom_ingredients')
    ingredient = models.ForeignKey('cocktails.Ingredient', on_delete=models.PROTECT, related_name='custom_ingredients')
    unit = models.ForeignKey('cocktails.Unit', on_delete=models.PROTECT, related_name='custom_ingredients')
    amount = models.FloatField()

    class Meta:
        verbose_name = 'Custom ingredient'
        verbose_name_plural = 'Custom ingredients'
        ordering = ['id']

    def __str__(self) -> str:
        return f"{self.ingredient} {self.unit.display_with_quantity(self.amount)}"
