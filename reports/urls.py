from django.urls import path
from . import views

app_name = 'reports'

urlpatterns = [
    path('revenue/', views.revenue_report, name='revenue'),
    path('revenue/export/', views.export_revenue_report, name='revenue-export'),
]
