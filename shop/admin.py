from django.contrib import admin

from .models import ShopSettings


@admin.register(ShopSettings)
class ShopSettingsAdmin(admin.ModelAdmin):
    list_display = ['shop_name', 'shop_phone', 'gst_number', 'tax_percentage', 'updated_at']

    def has_add_permission(self, request):
        return not ShopSettings.objects.exists()
