from django.apps import AppConfig


class CocktailsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'cocktails'
    verbose_name = 'Cocktail catalog'
