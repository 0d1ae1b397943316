from django.contrib import admin
from django.db.models import Count
from django.db.models.functions import Lower
from django.urls import reverse as django_reverse
from django.utils.html import format_html

from cocktails.models import Cocktail, Ingredient, Unit


def customs_link(count, **filters) -> str:
    changelist = django_reverse('admin:customs_custom_changelist')
    query = '&'.join(f"{key}={value}" for key, value in filters.items())
    return format_html('<a href="{}?{}">{}</a>', changelist, query, count)


@admin.register(Cocktail)
class CocktailAdmin(admin.ModelAdmin):
    list_display = ('name', 'localized_name', 'heart_count', 'customs_count')
    search_fields = ('name', 'localized_name')
    ordering = ('name',)

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.annotate(custom_count=Count('customs', distinct=True)).order_by(Lower('name'))

    def customs_count(self, obj):
        return customs_link(obj.custom_count, cocktail__id__exact=obj.pk)
    customs_count.short_description = 'Custom recipes'


@admin.register(Ingredient)
class IngredientAdmin(admin.ModelAdmin):
    search_fields = ('name',)
    list_display = ('name', 'customs_count')
    ordering = ('name',)

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.annotate(custom_count=Count('custom_ingredients__custom', distinct=True)).order_by(Lower('name'))

    def customs_count(self, obj):
        return obj.custom_count
    customs_count.short_description = 'Custom recipes using'


@admin.register(Unit)
class UnitAdmin(admin.ModelAdmin):
    search_fields = ('name',)
    list_display = ('name', 'plural')
    ordering = ('name',)

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.order_by(Lower('name'))
