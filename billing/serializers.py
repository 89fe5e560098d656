from rest_framework import serializers

from .models import Bill, BillItem
from .services import PAYMENT_METHODS
from .totals import format_amount


class BillItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = BillItem
        fields = ['id', 'item_name_snapshot', 'price_snapshot', 'quantity', 'line_total', 'created_at']
        read_only_fields = fields


class BillListSerializer(serializers.ModelSerializer):
    display_total = serializers.SerializerMethodField()

    class Meta:
        model = Bill
        fields = [
            'id', 'bill_number', 'date', 'subtotal', 'tax_amount', 'discount',
            'total', 'display_total', 'payment_method', 'status', 'created_at', 'updated_at'
        ]
        read_only_fields = fields

    def get_display_total(self, obj):
        return format_amount(obj.total)


class BillSerializer(BillListSerializer):
    items = BillItemSerializer(many=True, read_only=True)

    class Meta(BillListSerializer.Meta):
        fields = BillListSerializer.Meta.fields + ['items']
        read_only_fields = fields


class AddCartItemSerializer(serializers.Serializer):
    menu_item_id = serializers.UUIDField()


class QuantityChangeSerializer(serializers.Serializer):
    change = serializers.IntegerField()

    def validate_change(self, value):
        if value == 0:
            raise serializers.ValidationError("Change must not be zero.")
        return value


class CartUpdateSerializer(serializers.Serializer):
    # Unbounded: a negative discount or one above the subtotal is accepted.
    discount = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    payment_method = serializers.ChoiceField(
        choices=PAYMENT_METHODS, required=False, allow_null=True, allow_blank=True
    )


class SaveBillSerializer(serializers.Serializer):
    print = serializers.BooleanField(default=False)
