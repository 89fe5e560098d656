from django.contrib import admin

from .models import Bill, BillItem


class BillItemInline(admin.TabularInline):
    model = BillItem
    extra = 0
    readonly_fields = ['item_name_snapshot', 'price_snapshot', 'quantity', 'line_total', 'created_at']


@admin.register(Bill)
class BillAdmin(admin.ModelAdmin):
    list_display = ['bill_number', 'date', 'total', 'payment_method', 'status']
    list_filter = ['status', 'payment_method']
    search_fields = ['bill_number']
    readonly_fields = ['bill_number', 'created_at', 'updated_at']
    inlines = [BillItemInline]
