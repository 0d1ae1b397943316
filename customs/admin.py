from django.contrib import admin
from django.utils.html import format_html

from customs.models import Custom, CustomIngredient


class CustomIngredientInline(admin.TabularInline):
    model = CustomIngredient
    extra = 0
    autocomplete_fields = ('ingredient', 'unit')


@admin.register(Custom)
class CustomAdmin(admin.ModelAdmin):
    list_display = ('name', 'cocktail', 'member', 'open', 'ingredients_count', 'image_link')
    list_filter = ('open', 'cocktail')
    search_fields = ('name', 'summary', 'member__nickname', 'cocktail__name')
    autocomplete_fields = ('cocktail', 'member')
    readonly_fields = ('created', 'updated')
    inlines = [CustomIngredientInline]
    ordering = ('-id',)

    actions = ['make_open', 'make_private']

    def make_open(self, request, queryset):
        updated = queryset.update(open=True)
        self.message_user(request, f"Opened {updated} custom cocktail(s).")
    make_open.short_description = 'Make selected custom cocktails public'

    def make_private(self, request, queryset):
        updated = queryset.update(open=False)
        self.message_user(request, f"Hid {updated} custom cocktail(s).")
    make_private.short_description = 'Make selected custom cocktails private'

    def ingredients_count(self, obj):
        return obj.custom_ingredients.count()
    ingredients_count.short_description = 'Ingredients'

    def image_link(self, obj):
        if not obj.image:
            return '-'
        return format_html('<a href="{}" target="_blank">{}</a>', obj.image, obj.image)
    image_link.short_description = 'Image'
