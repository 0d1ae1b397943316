"""Persistence for the custom cocktail aggregate.

The stores never cascade on their own: removing a recipe's ingredient rows
is always an explicit call made by the service.
"""
from __future__ import annotations

from django.core.paginator import Paginator

from customs.exceptions import CustomNotFound
from customs.models import Custom, CustomIngredient


class CustomStore:

    def save(self, custom: Custom) -> int:
        custom.save()
        return custom.pk

    def find_by_id(self, custom_id) -> Custom | None:
        return (
            Custom.objects.select_related('member', 'cocktail')
            .filter(pk=custom_id)
            .first()
        )

    def find_custom_by_id(self, custom_id) -> Custom:
        custom = self.find_by_id(custom_id)
        if custom is None:
            raise CustomNotFound()
        return custom

    def find_owner_id(self, custom_id):
        return Custom.objects.filter(pk=custom_id).values_list('member_id', flat=True).first()

    def find_all_custom(self, member_id, cocktail, page_size: int) -> Paginator:
        qs = (
            Custom.objects.for_cocktail(cocktail)
            .visible_to(member_id)
            .select_related('member')
            .order_by('-id')
        )
        return Paginator(qs, page_size)

    def modify_custom_cocktail(self, custom_id, patch: dict) -> int:
        return Custom.objects.filter(pk=custom_id).update(**patch)

    def delete_custom_by_id(self, custom_id) -> int:
        deleted, _ = Custom.objects.filter(pk=custom_id).delete()
        return deleted

    def find_all_ids(self) -> list[int]:
        return list(Custom.objects.order_by('id').values_list('id', flat=True))


class CustomIngredientStore:

    def save(self, custom_ingredient: CustomIngredient) -> int:
        custom_ingredient.save()
        return custom_ingredient.pk

    def delete_by_custom_id(self, custom_id) -> int:
        deleted, _ = CustomIngredient.objects.filter(custom_id=custom_id).delete()
        return deleted

    def find_all_by_custom(self, custom) -> list[CustomIngredient]:
        return list(
            CustomIngredient.objects.filter(custom=custom)
            .select_related('ingredient', 'unit')
            .order_by('id')
        )
