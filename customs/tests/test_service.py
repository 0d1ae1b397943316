from unittest import mock

from django.test import TestCase
from rest_framework.exceptions import ValidationError

from cocktails.exceptions import CocktailNotFound, IngredientNotFound, UnitNotFound
from cocktails.models import Cocktail
from customs.exceptions import CustomNotAvailable, CustomNotFound, ImageRequired
from customs.models import Custom, CustomIngredient
from customs.service import CustomService
from customs.tests.base import CustomDataMixin, RecordingImageStore, png_upload
from members.exceptions import Forbidden, MemberNotFound


class CreateCustomCocktailTests(CustomDataMixin, TestCase):
    def setUp(self):
        self.images = RecordingImageStore()
        self.service = CustomService(images=self.images)

    def test_create_persists_recipe_and_every_ingredient_line(self):
        custom_id = self.service.create_custom_cocktail(png_upload(), self.payload(), self.owner.id)

        custom = Custom.objects.get(pk=custom_id)
        self.assertEqual(custom.member_id, self.owner.id)
        self.assertEqual(custom.cocktail_id, self.cocktail.id)
        self.assertEqual(custom.name, 'Dirty Martini')
        self.assertEqual(custom.comment, 'Extra brine')
        self.assertEqual(custom.recipe, 'Stir with ice and strain.')
        self.assertEqual(custom.summary, 'Savory and cold')
        self.assertTrue(custom.open)

        detail = self.service.find_custom(self.owner.id, custom_id)
        self.assertEqual(len(detail['custom_ingredients']), 2)
        submitted = {(self.gin.id, self.oz.id, 2.5), (self.vermouth.id, self.oz.id, 0.5)}
        returned = {(i['id'], i['unit']['id'], i['amount']) for i in detail['custom_ingredients']}
        self.assertEqual(returned, submitted)

    def test_create_stores_the_uploaded_image_url(self):
        custom_id = self.service.create_custom_cocktail(png_upload('mine.PNG'), self.payload(), self.owner.id)

        custom = Custom.objects.get(pk=custom_id)
        self.assertEqual(self.images.uploaded, [custom.image])
        self.assertTrue(custom.image.startswith('/media/customs/'))
        self.assertTrue(custom.image.endswith('.png'))
        self.assertTrue(self.images.exists(custom.image))

    def test_create_private_recipe(self):
        custom_id = self.service.create_custom_cocktail(png_upload(), self.payload(open=False), self.owner.id)
        self.assertFalse(Custom.objects.get(pk=custom_id).open)

    def test_create_without_image_is_rejected(self):
        with self.assertRaises(ImageRequired) as cm:
            self.service.create_custom_cocktail(None, self.payload(), self.owner.id)
        self.assertEqual(cm.exception.get_codes(), ['IMAGE_REQUIRED'])
        self.assertFalse(Custom.objects.exists())
        self.assertEqual(self.images.uploaded, [])

    def test_create_rejects_empty_ingredient_list(self):
        with self.assertRaises(ValidationError) as cm:
            self.service.create_custom_cocktail(png_upload(), self.payload(ingredients=[]), self.owner.id)
        self.assertIn('ingredients', cm.exception.detail)
        self.assertEqual(self.images.uploaded, [])

    def test_create_rejects_non_positive_amount(self):
        lines = [{'ingredient_id': self.gin.id, 'unit_id': self.oz.id, 'amount': 0}]
        with self.assertRaises(ValidationError):
            self.service.create_custom_cocktail(png_upload(), self.payload(ingredients=lines), self.owner.id)
        self.assertFalse(Custom.objects.exists())

    def test_create_for_unknown_cocktail_removes_the_upload(self):
        with self.assertRaises(CocktailNotFound):
            self.service.create_custom_cocktail(png_upload(), self.payload(cocktail_id=9999), self.owner.id)

        self.assertFalse(Custom.objects.exists())
        self.assertEqual(len(self.images.uploaded), 1)
        self.assertEqual(self.images.deleted, self.images.uploaded)
        self.assertFalse(self.images.exists(self.images.uploaded[0]))

    def test_failed_cleanup_does_not_mask_the_original_error(self):
        with mock.patch.object(self.images, 'delete', side_effect=OSError('storage offline')):
            with self.assertLogs('customs.service', level='ERROR'):
                with self.assertRaises(CocktailNotFound):
                    self.service.create_custom_cocktail(png_upload(), self.payload(cocktail_id=9999), self.owner.id)
        self.assertFalse(Custom.objects.exists())

    def test_create_for_unknown_member_fails(self):
        with self.assertRaises(MemberNotFound):
            self.service.create_custom_cocktail(png_upload(), self.payload(), 9999)
        self.assertFalse(Custom.objects.exists())

    def test_create_with_unknown_ingredient_leaves_nothing_behind(self):
        lines = [
            {'ingredient_id': self.gin.id, 'unit_id': self.oz.id, 'amount': 2},
            {'ingredient_id': 9999, 'unit_id': self.oz.id, 'amount': 1},
        ]
        with self.assertRaises(IngredientNotFound):
            self.service.create_custom_cocktail(png_upload(), self.payload(ingredients=lines), self.owner.id)

        self.assertFalse(Custom.objects.exists())
        self.assertFalse(CustomIngredient.objects.exists())
        self.assertFalse(self.images.exists(self.images.uploaded[0]))

    def test_create_with_unknown_unit_fails(self):
        lines = [{'ingredient_id': self.gin.id, 'unit_id': 9999, 'amount': 2}]
        with self.assertRaises(UnitNotFound):
            self.service.create_custom_cocktail(png_upload(), self.payload(ingredients=lines), self.owner.id)


class ModifyCustomCocktailTests(CustomDataMixin, TestCase):
    def setUp(self):
        self.images = RecordingImageStore()
        self.service = CustomService(images=self.images)
        self.custom_id = self.service.create_custom_cocktail(png_upload(), self.payload(), self.owner.id)
        self.original_image = Custom.objects.get(pk=self.custom_id).image

    def modify_payload(self, ingredients=None, **overrides):
        data = self.payload(ingredients=ingredients, **overrides)
        data.pop('cocktail_id')
        return data

    def test_modify_replaces_the_whole_ingredient_set(self):
        lines = [
            {'ingredient_id': self.vermouth.id, 'unit_id': self.oz.id, 'amount': 1},
            {'ingredient_id': self.lemon.id, 'unit_id': self.piece.id, 'amount': 1},
        ]
        self.service.modify_custom_cocktail(self.owner.id, self.custom_id, None, self.modify_payload(lines))

        self.assertEqual(
            self.ingredient_set(self.custom_id),
            {(self.vermouth.id, self.oz.id, 1.0), (self.lemon.id, self.piece.id, 1.0)},
        )

    def test_modify_updates_scalar_fields(self):
        payload = self.modify_payload(name='Gibson', summary='Onion garnish', comment='c', recipe='r', open=False)
        self.service.modify_custom_cocktail(self.owner.id, self.custom_id, None, payload)

        custom = Custom.objects.get(pk=self.custom_id)
        self.assertEqual(custom.name, 'Gibson')
        self.assertEqual(custom.summary, 'Onion garnish')
        self.assertEqual(custom.comment, 'c')
        self.assertEqual(custom.recipe, 'r')
        self.assertFalse(custom.open)
        self.assertEqual(custom.member_id, self.owner.id)
        self.assertEqual(custom.cocktail_id, self.cocktail.id)

    def test_modify_without_open_keeps_a_private_recipe_private(self):
        Custom.objects.filter(pk=self.custom_id).update(open=False)
        payload = self.modify_payload(name='Still Private')
        payload.pop('open')

        self.service.modify_custom_cocktail(self.owner.id, self.custom_id, None, payload)

        custom = Custom.objects.get(pk=self.custom_id)
        self.assertEqual(custom.name, 'Still Private')
        self.assertFalse(custom.open)

    def test_modify_without_optional_text_keeps_stored_values(self):
        payload = self.modify_payload(name='Trimmed')
        for field in ('comment', 'recipe', 'summary'):
            payload.pop(field)

        self.service.modify_custom_cocktail(self.owner.id, self.custom_id, None, payload)

        custom = Custom.objects.get(pk=self.custom_id)
        self.assertEqual(custom.comment, 'Extra brine')
        self.assertEqual(custom.recipe, 'Stir with ice and strain.')
        self.assertEqual(custom.summary, 'Savory and cold')

    def test_modify_without_image_keeps_the_existing_url(self):
        self.service.modify_custom_cocktail(self.owner.id, self.custom_id, None, self.modify_payload())

        self.assertEqual(Custom.objects.get(pk=self.custom_id).image, self.original_image)
        self.assertEqual(self.images.deleted, [])
        self.assertTrue(self.images.exists(self.original_image))

    def test_modify_with_image_swaps_the_stored_file(self):
        self.service.modify_custom_cocktail(self.owner.id, self.custom_id, png_upload('new.png', 'blue'), self.modify_payload())

        new_image = Custom.objects.get(pk=self.custom_id).image
        self.assertNotEqual(new_image, self.original_image)
        self.assertEqual(self.images.deleted, [self.original_image])
        self.assertFalse(self.images.exists(self.original_image))
        self.assertTrue(self.images.exists(new_image))

    def test_modify_by_other_member_is_forbidden(self):
        before = self.ingredient_set(self.custom_id)
        with self.assertRaises(Forbidden) as cm:
            self.service.modify_custom_cocktail(self.other.id, self.custom_id, None, self.modify_payload(name='Stolen'))

        self.assertEqual(cm.exception.get_codes(), 'FORBIDDEN')
        self.assertEqual(Custom.objects.get(pk=self.custom_id).name, 'Dirty Martini')
        self.assertEqual(self.ingredient_set(self.custom_id), before)

    def test_staff_can_modify_any_recipe(self):
        self.service.modify_custom_cocktail(self.staff.id, self.custom_id, None, self.modify_payload(name='Moderated'))
        self.assertEqual(Custom.objects.get(pk=self.custom_id).name, 'Moderated')

    def test_modify_unknown_recipe(self):
        with self.assertRaises(CustomNotFound):
            self.service.modify_custom_cocktail(self.owner.id, 9999, None, self.modify_payload())

    def test_failed_rebuild_keeps_previous_ingredients(self):
        before = self.ingredient_set(self.custom_id)
        lines = [{'ingredient_id': 9999, 'unit_id': self.oz.id, 'amount': 1}]
        with self.assertRaises(IngredientNotFound):
            self.service.modify_custom_cocktail(self.owner.id, self.custom_id, None, self.modify_payload(lines, name='Broken'))

        self.assertEqual(self.ingredient_set(self.custom_id), before)
        self.assertEqual(Custom.objects.get(pk=self.custom_id).name, 'Dirty Martini')

    def test_in_body_owner_check_still_applies_without_guard(self):
        before = self.ingredient_set(self.custom_id)
        with mock.patch('customs.service.check_custom_permission'):
            with self.assertRaises(Forbidden):
                self.service.modify_custom_cocktail(self.other.id, self.custom_id, None, self.modify_payload())
        self.assertEqual(self.ingredient_set(self.custom_id), before)


class DeleteCustomCocktailTests(CustomDataMixin, TestCase):
    def setUp(self):
        self.images = RecordingImageStore()
        self.service = CustomService(images=self.images)
        self.custom_id = self.service.create_custom_cocktail(png_upload(), self.payload(), self.owner.id)
        self.image = Custom.objects.get(pk=self.custom_id).image

    def test_owner_deletes_recipe_ingredients_and_image(self):
        self.service.delete_custom_cocktail(self.owner.id, self.custom_id)

        self.assertFalse(Custom.objects.filter(pk=self.custom_id).exists())
        self.assertFalse(CustomIngredient.objects.filter(custom_id=self.custom_id).exists())
        self.assertEqual(self.images.deleted, [self.image])
        self.assertFalse(self.images.exists(self.image))

    def test_other_member_cannot_delete(self):
        before = self.ingredient_set(self.custom_id)
        with self.assertRaises(Forbidden):
            self.service.delete_custom_cocktail(self.other.id, self.custom_id)

        self.assertTrue(Custom.objects.filter(pk=self.custom_id).exists())
        self.assertEqual(self.ingredient_set(self.custom_id), before)
        self.assertEqual(self.images.deleted, [])

    def test_staff_can_delete_any_recipe(self):
        self.service.delete_custom_cocktail(self.staff.id, self.custom_id)
        self.assertFalse(Custom.objects.filter(pk=self.custom_id).exists())

    def test_delete_unknown_recipe(self):
        with self.assertRaises(CustomNotFound) as cm:
            self.service.delete_custom_cocktail(self.owner.id, 9999)
        self.assertEqual(cm.exception.get_codes(), 'FAIL_TO_FIND_CUSTOM')

    def test_ingredient_removal_is_rolled_back_when_owner_check_fails(self):
        before = self.ingredient_set(self.custom_id)
        with mock.patch('customs.service.check_custom_permission'):
            with self.assertRaises(Forbidden):
                self.service.delete_custom_cocktail(self.other.id, self.custom_id)

        self.assertEqual(self.ingredient_set(self.custom_id), before)
        self.assertTrue(self.images.exists(self.image))


class FindCustomTests(CustomDataMixin, TestCase):
    def setUp(self):
        self.service = CustomService(images=RecordingImageStore())

    def test_private_recipe_is_hidden_from_other_members(self):
        custom = self.make_custom(open=False)
        with self.assertRaises(CustomNotAvailable) as cm:
            self.service.find_custom(self.other.id, custom.id)
        self.assertEqual(cm.exception.get_codes(), 'NOT_AVAILABLE')

    def test_owner_sees_private_recipe(self):
        custom = self.make_custom(open=False)
        detail = self.service.find_custom(self.owner.id, custom.id)
        self.assertEqual(detail['id'], custom.id)
        self.assertFalse(detail['open'])

    def test_open_recipe_detail(self):
        custom = self.make_custom(image='/media/customs/abc.png')
        detail = self.service.find_custom(self.other.id, custom.id)

        self.assertEqual(detail['name'], 'House Martini')
        self.assertEqual(detail['image'], '/media/customs/abc.png')
        self.assertEqual(detail['user'], {'id': self.owner.id, 'nickname': 'Owner'})
        self.assertEqual(detail['cocktail'], {
            'id': self.cocktail.id,
            'name': 'Martini',
            'localized_name': '마티니',
            'image': None,
            'heart_count': 7,
        })
        self.assertEqual(detail['custom_ingredients'], [
            {'id': self.gin.id, 'name': 'Gin', 'image': None, 'amount': 2.0,
             'unit': {'id': self.oz.id, 'name': 'oz'}},
            {'id': self.vermouth.id, 'name': 'Dry Vermouth', 'image': None, 'amount': 1.0,
             'unit': {'id': self.oz.id, 'name': 'oz'}},
        ])

    def test_unknown_recipe(self):
        with self.assertRaises(CustomNotFound):
            self.service.find_custom(self.owner.id, 9999)


class CustomListTests(CustomDataMixin, TestCase):
    def setUp(self):
        self.service = CustomService(images=RecordingImageStore())

    def test_first_page_of_visible_recipes(self):
        visible = [self.make_custom(name=f'Open {i}') for i in range(3)]
        self.make_custom(member=self.other, open=False, name='Secret')

        page = self.service.get_custom_list(self.owner.id, self.cocktail.id, page=1, size=2)

        self.assertEqual(page['cocktail_name'], 'Martini')
        self.assertEqual(page['current_page'], 1)
        self.assertEqual(page['total_page'], 2)
        self.assertEqual(page['total_elements'], 3)
        self.assertEqual([c['id'] for c in page['custom_cocktails']], [visible[2].id, visible[1].id])
        self.assertEqual(page['custom_cocktails'][0]['user'], {'id': self.owner.id, 'nickname': 'Owner'})
        self.assertEqual(set(page['custom_cocktails'][0]), {'id', 'image', 'name', 'summary', 'user'})

    def test_owner_sees_own_private_recipes(self):
        self.make_custom(open=False, name='Mine')
        self.make_custom(member=self.other, open=False, name='Theirs')

        page = self.service.get_custom_list(self.owner.id, self.cocktail.id, page=1, size=10)

        self.assertEqual([c['name'] for c in page['custom_cocktails']], ['Mine'])

    def test_page_past_the_end_is_empty(self):
        self.make_custom()
        page = self.service.get_custom_list(self.owner.id, self.cocktail.id, page=5, size=10)
        self.assertEqual(page['custom_cocktails'], [])
        self.assertEqual(page['current_page'], 5)
        self.assertEqual(page['total_page'], 1)
        self.assertEqual(page['total_elements'], 1)

    def test_no_recipes(self):
        page = self.service.get_custom_list(self.owner.id, self.cocktail.id, page=1, size=10)
        self.assertEqual(page['total_page'], 0)
        self.assertEqual(page['total_elements'], 0)

    def test_only_recipes_of_the_requested_cocktail(self):
        other_cocktail = Cocktail.objects.create(name='Negroni')
        self.make_custom()
        page = self.service.get_custom_list(self.owner.id, other_cocktail.id, page=1, size=10)
        self.assertEqual(page['cocktail_name'], 'Negroni')
        self.assertEqual(page['custom_cocktails'], [])

    def test_unknown_cocktail(self):
        with self.assertRaises(CocktailNotFound):
            self.service.get_custom_list(self.owner.id, 9999)


class CustomIdListTests(CustomDataMixin, TestCase):
    def test_every_recipe_regardless_of_visibility(self):
        service = CustomService(images=RecordingImageStore())
        created = [
            self.make_custom(),
            self.make_custom(open=False),
            self.make_custom(member=self.other, open=False),
        ]
        self.assertEqual(service.find_all_custom_id_list(), [c.id for c in created])
