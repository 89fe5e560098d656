from django.urls import path
from . import views

app_name = 'billing'

urlpatterns = [
    # Menu for sale
    path('menu/', views.sale_menu, name='sale-menu'),

    # Cart
    path('cart/', views.cart_detail, name='cart-detail'),
    path('cart/items/', views.add_cart_item, name='cart-add-item'),
    path('cart/items/<str:line_id>/', views.cart_item_detail, name='cart-item-detail'),
    path('cart/clear/', views.clear_cart, name='cart-clear'),
    path('cart/save/', views.save_cart, name='cart-save'),
    path('cart/hold/', views.hold_cart, name='cart-hold'),

    # Refresh queries
    path('drafts/', views.draft_list, name='draft-list'),
    path('today-revenue/', views.today_revenue_view, name='today-revenue'),

    # Bill history
    path('bills/', views.bill_list, name='bill-list'),
    path('bills/<uuid:bill_id>/', views.bill_detail, name='bill-detail'),
    path('bills/<uuid:bill_id>/load/', views.load_bill, name='bill-load'),
    path('bills/<uuid:bill_id>/receipt/', views.bill_receipt, name='bill-receipt'),
    path('bills/<uuid:bill_id>/view/', views.bill_view, name='bill-view'),
]
