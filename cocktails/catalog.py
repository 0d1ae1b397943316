"""Read-only lookups of the cocktail catalog by primary key."""
from cocktails.exceptions import CocktailNotFound, IngredientNotFound, UnitNotFound
from cocktails.models import Cocktail, Ingredient, Unit


def find_cocktail_by_id(cocktail_id) -> Cocktail:
    try:
        return Cocktail.objects.get(pk=cocktail_id)
    except Cocktail.DoesNotExist:
        raise CocktailNotFound()


def find_ingredient_by_id(ingredient_id) -> Ingredient:
    try:
        return Ingredient.objects.get(pk=ingredient_id)
    except Ingredient.DoesNotExist:
        raise IngredientNotFound()


def find_unit_by_id(unit_id) -> Unit:
    try:
        return Unit.objects.get(pk=unit_id)
    except Unit.DoesNotExist:
        raise UnitNotFound()
