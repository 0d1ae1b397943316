from __future__ import annotations

from django.db import models


class Unit(models.Model):
    name = models.CharField(max_length=50, unique=True)
    plural = models.CharField(max_length=50, blank=True, default='')

    def __str__(self) -> str:
        return self.name

    class Meta:
        ordering = ['name']

    def display_with_quantity(self, quantity) -> str:
        if isinstance(quantity, float) and quantity.is_integer():
            quantity = int(quantity)
        if quantity == 1:
            return f"{quantity} {self.name}"
        plural = self.plural or (self.name + 's')
        return f"{quantity} {plural}"


class Ingredient(models.Model):
    name = models.CharField(max_length=200, unique=True)
    image = models.ImageField(upload_to='ingredients/', null=True, blank=True)

    def __str__(self) -> str:
        return self.name

    class Meta:
        ordering = ['name']


class Cocktail(models.Model):
    name = models.CharField(max_length=200)
    localized_name = models.CharField(max_length=200, blank=True, default='')
    image = models.ImageField(upload_to='cocktails/', null=True, blank=True)
    heart_count = models.PositiveIntegerField(default=0)
    created = models.DateTimeField(auto_now_add=True)
    updated = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return self.name

    class Meta:
        ordering = ['name']


def image_url(field) -> str | None:
    """URL of an ImageField value, or None when nothing is stored."""
    if field and getattr(field, 'name', None):
        return field.url
    return None
