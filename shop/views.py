from rest_framework import generics
from drf_yasg.utils import swagger_auto_schema
import logging

from .models import ShopSettings
from .serializers import ShopSettingsSerializer

logger = logging.getLogger(__name__)


class ShopSettingsView(generics.RetrieveUpdateAPIView):
    """
    get: Read the shop settings
    put/patch: Update shop name, contact details, GST number and tax rate
    """
    serializer_class = ShopSettingsSerializer

    def get_object(self):
        return ShopSettings.load()

    @swagger_auto_schema(responses={200: ShopSettingsSerializer})
    def put(self, request, *args, **kwargs):
        return super().put(request, *args, **kwargs)

    def perform_update(self, serializer):
        settings = serializer.save()
        logger.info("Shop settings updated: %s, tax %s%%", settings.shop_name, settings.tax_percentage)
