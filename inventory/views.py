from rest_framework import generics, status
from rest_framework.decorators import api_view
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters
from drf_yasg.utils import swagger_auto_schema
import logging

from .models import MenuItem
from .serializers import MenuItemSerializer, MenuStatusUpdateSerializer

logger = logging.getLogger(__name__)


class MenuListCreateView(generics.ListCreateAPIView):
    """
    get: List all menu items
    post: Create a new menu item
    """
    queryset = MenuItem.objects.all()
    serializer_class = MenuItemSerializer
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['is_active', 'category']
    search_fields = ['name', 'category']
    ordering_fields = ['name', 'price', 'created_at']
    ordering = ['name']

    def perform_create(self, serializer):
        item = serializer.save()
        logger.info("Menu item created: %s (%s)", item.name, item.price)


class MenuRetrieveUpdateDestroyView(generics.RetrieveUpdateDestroyAPIView):
    """
    get: Get menu item details
    put/patch: Update menu item
    delete: Delete menu item (bill snapshots are not affected)
    """
    queryset = MenuItem.objects.all()
    serializer_class = MenuItemSerializer

    def perform_destroy(self, instance):
        logger.info("Menu item deleted: %s", instance.name)
        instance.delete()


@swagger_auto_schema(method='post', request_body=MenuStatusUpdateSerializer)
@api_view(['POST'])
def bulk_update_menu_status(request):
    """Activate or deactivate several menu items at once"""
    serializer = MenuStatusUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    updated_count = MenuItem.objects.filter(
        id__in=serializer.validated_data['menu_ids']
    ).update(is_active=serializer.validated_data['is_active'])

    return Response({
        "detail": f"Updated {updated_count} menu items",
        "updated_count": updated_count
    }, status=status.HTTP_200_OK)


@api_view(['GET'])
def menu_categories(request):
    """Distinct categories of active menu items"""
    categories = (
        MenuItem.objects.filter(is_active=True)
        .exclude(category='')
        .values_list('category', flat=True)
        .distinct()
        .order_by('category')
    )
    return Response({'categories': list(categories)})
