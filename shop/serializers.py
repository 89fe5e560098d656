from rest_framework import serializers
from .models import ShopSettings


class ShopSettingsSerializer(serializers.ModelSerializer):
    class Meta:
        model = ShopSettings
        fields = [
            'id', 'shop_name', 'shop_address', 'shop_phone',
            'gst_number', 'tax_percentage', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_tax_percentage(self, value):
        if value < 0:
            raise serializers.ValidationError("Tax percentage cannot be negative.")
        return value

    def validate_shop_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("Shop name is required.")
        return value.strip()
