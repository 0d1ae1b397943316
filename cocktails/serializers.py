from rest_framework import serializers

from cocktails.models import Cocktail, Unit, image_url


class UnitSerializer(serializers.ModelSerializer):
    class Meta:
        model = Unit
        fields = ['id', 'name']


class CocktailSummarySerializer(serializers.ModelSerializer):
    image = serializers.SerializerMethodField()

    class Meta:
        model = Cocktail
        fields = ['id', 'name', 'localized_name', 'image', 'heart_count']

    def get_image(self, obj):
        return image_url(obj.image)
