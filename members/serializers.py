from rest_framework import serializers

from members.models import Member


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = Member
        fields = ['id', 'nickname']
