"""Custom cocktail operations.

Every mutating operation runs in one database transaction. Image uploads
live outside the database, so a failed create or modify deletes the file
it just uploaded before the error propagates.
"""
from __future__ import annotations

import logging

from django.conf import settings
from django.core.paginator import EmptyPage
from django.db import transaction
from django.utils import timezone

from cocktails.catalog import find_cocktail_by_id, find_ingredient_by_id, find_unit_by_id
from customs.exceptions import CustomNotAvailable, ImageRequired
from customs.images import ImageStore
from customs.models import Custom, CustomIngredient
from customs.permissions import check_custom_permission, is_owner_or_privileged
from customs.serializers import (
    CustomCocktailSerializer,
    CustomCreateSerializer,
    CustomDetailSerializer,
    CustomModifySerializer,
)
from customs.store import CustomIngredientStore, CustomStore
from members.directory import find_member_by_id
from members.exceptions import Forbidden

logger = logging.getLogger(__name__)


class CustomService:

    def __init__(self, images: ImageStore | None = None):
        self.images = images if images is not None else ImageStore()
        self.customs = CustomStore()
        self.custom_ingredients = CustomIngredientStore()

    # ---- Helpers ----
    @staticmethod
    def _validate(serializer_class, payload) -> dict:
        serializer = serializer_class(data=payload)
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data

    def _save_ingredients(self, custom: Custom, ingredients) -> None:
        for line in ingredients:
            unit = find_unit_by_id(line['unit_id'])
            ingredient = find_ingredient_by_id(line['ingredient_id'])
            self.custom_ingredients.save(CustomIngredient(
                custom=custom,
                ingredient=ingredient,
                unit=unit,
                amount=line['amount'],
            ))

    def _discard_upload(self, url: str) -> None:
        logger.warning("Removing orphaned upload %s", url)
        try:
            self.images.delete(url)
        except Exception:
            logger.exception("Could not remove orphaned upload %s", url)

    # ---- Public API ----
    def create_custom_cocktail(self, image, payload, member_id) -> int:
        data = self._validate(CustomCreateSerializer, payload)
        if image is None:
            raise ImageRequired()
        image_url = self.images.upload(image)
        try:
            with transaction.atomic():
                cocktail = find_cocktail_by_id(data['cocktail_id'])
                member = find_member_by_id(member_id)
                custom = Custom(
                    member=member,
                    cocktail=cocktail,
                    name=data['name'],
                    comment=data['comment'],
                    recipe=data['recipe'],
                    summary=data['summary'],
                    open=data['open'],
                    image=image_url,
                )
                self.customs.save(custom)
                self._save_ingredients(custom, data['ingredients'])
        except Exception:
            self._discard_upload(image_url)
            raise
        logger.info("Member %s created custom cocktail %s", member_id, custom.pk)
        return custom.pk

    def delete_custom_cocktail(self, user_id, custom_id) -> None:
        check_custom_permission(user_id, custom_id)
        with transaction.atomic():
            self.custom_ingredients.delete_by_custom_id(custom_id)
            custom = self.customs.find_custom_by_id(custom_id)
            if not is_owner_or_privileged(user_id, custom):
                raise Forbidden()
            self.images.delete(custom.image)
            self.customs.delete_custom_by_id(custom_id)
        logger.info("Member %s deleted custom cocktail %s", user_id, custom_id)

    def modify_custom_cocktail(self, user_id, custom_id, image, payload) -> None:
        check_custom_permission(user_id, custom_id)
        data = self._validate(CustomModifySerializer, payload)
        uploaded = None
        try:
            with transaction.atomic():
                self.custom_ingredients.delete_by_custom_id(custom_id)
                custom = self.customs.find_custom_by_id(custom_id)
                if not is_owner_or_privileged(user_id, custom):
                    raise Forbidden()
                self._save_ingredients(custom, data['ingredients'])

                if image is not None:
                    self.images.delete(custom.image)
                    uploaded = self.images.upload(image)
                    image_url = uploaded
                else:
                    image_url = custom.image

                self.customs.modify_custom_cocktail(custom_id, {
                    'name': data['name'],
                    'summary': data.get('summary', custom.summary),
                    'comment': data.get('comment', custom.comment),
                    'recipe': data.get('recipe', custom.recipe),
                    'image': image_url,
                    'open': data.get('open', custom.open),
                    'updated': timezone.now(),
                })
        except Exception:
            if uploaded:
                self._discard_upload(uploaded)
            raise
        logger.info("Member %s modified custom cocktail %s", user_id, custom_id)

    def get_custom_list(self, member_id, cocktail_id, page: int = 1, size: int | None = None) -> dict:
        size = size or settings.CUSTOM_PAGE_SIZE
        cocktail = find_cocktail_by_id(cocktail_id)
        paginator = self.customs.find_all_custom(member_id, cocktail, size)
        try:
            items = paginator.page(page).object_list
        except EmptyPage:
            items = []
        total = paginator.count
        return {
            'cocktail_name': cocktail.name,
            'custom_cocktails': CustomCocktailSerializer(items, many=True).data,
            'current_page': page,
            'total_page': paginator.num_pages if total else 0,
            'total_elements': total,
        }

    def find_custom(self, member_id, custom_id) -> dict:
        custom = self.customs.find_custom_by_id(custom_id)
        if not custom.is_visible_to(member_id):
            raise CustomNotAvailable()
        rows = self.custom_ingredients.find_all_by_custom(custom)
        return CustomDetailSerializer(custom, context={'custom_ingredients': rows}).data

    def find_all_custom_id_list(self) -> list[int]:
        return self.customs.find_all_ids()
