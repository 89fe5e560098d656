from django.urls import path
from . import views

app_name = 'inventory'

urlpatterns = [
    # Menu URLs
    path('items/', views.MenuListCreateView.as_view(), name='menu-list-create'),
    path('items/<uuid:pk>/', views.MenuRetrieveUpdateDestroyView.as_view(), name='menu-detail'),

    # Additional Menu URLs
    path('items/bulk-update-status/', views.bulk_update_menu_status, name='menu-bulk-update-status'),
    path('categories/', views.menu_categories, name='menu-categories'),
]
