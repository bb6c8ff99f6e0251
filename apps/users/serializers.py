"""
Serializers for the Users app.

All serializers use camelCase field names to match the web client.
"""
from django.contrib.auth import get_user_model
from rest_framework import serializers

User = get_user_model()


class AccountSerializer(serializers.ModelSerializer):
    """
    Read-only account summary returned alongside trip listings.
    """
    displayName = serializers.CharField(source='display_name', read_only=True)
    homeCity = serializers.CharField(source='home_city', read_only=True, allow_null=True)
    isDemo = serializers.BooleanField(source='is_demo', read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'displayName',
            'homeCity',
            'credits',
            'isDemo',
        ]
        read_only_fields = fields


class TravelerProfileSerializer(serializers.Serializer):
    """
    A reusable traveler profile stored on the account.

    ``preferences`` maps an interest (e.g. "museums") to a weight.
    """
    id = serializers.CharField(required=False, allow_blank=False)
    name = serializers.CharField(min_length=1)
    travelerType = serializers.CharField(required=False, allow_blank=True)
    kids = serializers.ListField(child=serializers.CharField(allow_blank=True), required=False)
    preferences = serializers.DictField(child=serializers.FloatField(), required=False)
    budget = serializers.CharField(required=False, allow_blank=True)
    pace = serializers.CharField(required=False, allow_blank=True)
    mobility = serializers.CharField(required=False, allow_blank=True)
    goals = serializers.CharField(required=False, allow_blank=True)
