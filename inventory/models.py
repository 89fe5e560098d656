from django.db import models
from shop.models import TimeStampedModel
import uuid


class MenuItem(TimeStampedModel):
    """Item offered for sale at the counter"""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    category = models.CharField(max_length=100, blank=True, default='')
    is_active = models.BooleanField(default=True)

    def __str__(self):
        return '{}  {}'.format(self.name, self.price)

    class Meta:
        db_table = 'menu_items'
        ordering = ['name']
        indexes = [
            models.Index(fields=['is_active'], name='idx_menu_items_is_active'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name='menu_items_price_gte_0',
            ),
        ]
