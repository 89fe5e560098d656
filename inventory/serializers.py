from rest_framework import serializers
from .models import MenuItem


class MenuItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = MenuItem
        fields = ['id', 'name', 'price', 'category', 'is_active', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']

    def validate_name(self, value):
        """Validate a non-empty, unique item name"""
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Item name is required.")
        queryset = MenuItem.objects.filter(name__iexact=value)
        if self.instance:
            queryset = queryset.exclude(id=self.instance.id)
        if queryset.exists():
            raise serializers.ValidationError("Menu item with this name already exists.")
        return value

    def validate_price(self, value):
        if value < 0:
            raise serializers.ValidationError("Price cannot be negative.")
        return value

    def validate_category(self, value):
        return value.strip()


class MenuStatusUpdateSerializer(serializers.Serializer):
    menu_ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)
    is_active = serializers.BooleanField(default=True)
