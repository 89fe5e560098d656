from django.db import models, transaction
from django.utils import timezone
from shop.models import TimeStampedModel
from decimal import Decimal
import uuid

# Money columns keep full precision; display rounds to 2 places.
MONEY_FIELD = dict(max_digits=16, decimal_places=6)


class BillCounter(models.Model):
    """Last issued bill number. It only moves forward; deleting bills never lowers it."""
    last_number = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'bill_counter'

    @classmethod
    def next_number(cls):
        with transaction.atomic():
            counter = cls.objects.select_for_update().filter(pk=1).first()
            if counter is None:
                # seed from bills written before the counter existed
                seed = Bill.objects.aggregate(max_number=models.Max('bill_number'))['max_number'] or 0
                counter = cls.objects.create(pk=1, last_number=seed)
            counter.last_number += 1
            counter.save(update_fields=['last_number'])
        return counter.last_number


class Bill(TimeStampedModel):
    STATUS_DRAFT = "draft"
    STATUS_SAVED = "saved"
    STATUS_PRINTED = "printed"
    STATUS_CHOICES = (
        (STATUS_DRAFT, "Draft"),
        (STATUS_SAVED, "Saved"),
        (STATUS_PRINTED, "Printed"),
    )

    PAYMENT_METHOD_CHOICES = (
        ("cash", "Cash"),
        ("card", "Card"),
        ("upi", "UPI"),
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    bill_number = models.PositiveIntegerField(unique=True, editable=False)
    date = models.DateTimeField(default=timezone.now)

    # Pricing fields
    subtotal = models.DecimalField(default=Decimal('0'), **MONEY_FIELD)
    tax_amount = models.DecimalField(default=Decimal('0'), **MONEY_FIELD)
    discount = models.DecimalField(default=Decimal('0'), **MONEY_FIELD)
    total = models.DecimalField(default=Decimal('0'), **MONEY_FIELD)

    payment_method = models.CharField(max_length=20, choices=PAYMENT_METHOD_CHOICES, null=True, blank=True)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_SAVED)

    def save(self, *args, **kwargs):
        if self.bill_number is None:
            self.bill_number = BillCounter.next_number()
        super().save(*args, **kwargs)

    @property
    def is_draft(self):
        return self.status == self.STATUS_DRAFT

    def calculate_total(self):
        """Total derived from the stored subtotal, tax and discount"""
        return self.subtotal + self.tax_amount - self.discount

    def __str__(self):
        return f"Bill #{self.bill_number} - {self.status}"

    class Meta:
        db_table = 'bills'
        ordering = ['-date']
        indexes = [
            models.Index(fields=['-date'], name='idx_bills_date'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(status__in=['draft', 'saved', 'printed']),
                name='bills_status_valid',
            ),
        ]


class BillItem(models.Model):
    """Point-in-time copy of a menu item's name and price on a bill"""
    bill = models.ForeignKey(Bill, related_name='items', on_delete=models.CASCADE)
    item_name_snapshot = models.CharField(max_length=255)
    price_snapshot = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.PositiveIntegerField()
    line_total = models.DecimalField(**MONEY_FIELD)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.quantity} x {self.item_name_snapshot}"

    class Meta:
        db_table = 'bill_items'
        ordering = ['id']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gt=0),
                name='bill_items_quantity_gt_0',
            ),
        ]
