from rest_framework.exceptions import NotFound


class CocktailNotFound(NotFound):
    default_detail = 'Cocktail not found.'
    default_code = 'FAIL_TO_FIND_COCKTAIL'


class IngredientNotFound(NotFound):
    default_detail = 'Ingredient not found.'
    default_code = 'FAIL_TO_FIND_INGREDIENT'


class UnitNotFound(NotFound):
    default_detail = 'Unit not found.'
    default_code = 'FAIL_TO_FIND_UNIT'
