
from django.contrib import admin
from django.urls import path, include
from drf_yasg.views import get_schema_view
from drf_yasg import openapi
from rest_framework import permissions
from django.conf.urls.static import static
from django.conf import settings

# Setup Swagger schema view
schema_view = get_schema_view(
    openapi.Info(
        title='API Documentation BILLDESK',
        default_version='v1',
        description="API for billing, bill history and revenue reports of a shop counter",
    ),
    public=True,
    permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    path('admin/', admin.site.urls),
    path("settings/", include("shop.urls")),
    path("menu/", include("inventory.urls")),
    path("billing/", include('billing.urls')),
    path("reports/", include('reports.urls')),
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
]

if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
