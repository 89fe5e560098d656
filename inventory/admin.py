from django.contrib import admin

from .models import MenuItem


@admin.register(MenuItem)
class MenuItemAdmin(admin.ModelAdmin):
    list_display = ['name', 'category', 'price', 'is_active', 'updated_at']
    list_filter = ['is_active', 'category']
    search_fields = ['name', 'category']
