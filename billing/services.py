"""
Bill lifecycle: composing a cart, saving it as a bill, loading a bill back
for editing, and deleting bills.

A ``BillingSession`` is owned by the caller (the API keeps one per browser
session in ``request.session``); nothing here is process-global.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import Sum
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from shop.models import ShopSettings
from .exceptions import EmptyCartError, CartLineNotFound, MenuItemUnavailable, BillNotFound
from .models import Bill, BillItem
from .totals import CartLine, calculate_totals, to_decimal

logger = logging.getLogger(__name__)

SESSION_KEY = 'billing_session'

# Snapshots do not record the menu category.
PLACEHOLDER_CATEGORY = 'Uncategorized'

PAYMENT_METHODS = [value for value, _ in Bill.PAYMENT_METHOD_CHOICES]


@dataclass
class SaveResult:
    bill: Bill
    created: bool
    drafts: list
    today_revenue: Decimal


def get_bill(bill_id, with_items=False):
    queryset = Bill.objects.all()
    if with_items:
        queryset = queryset.prefetch_related('items')
    try:
        return queryset.get(id=bill_id)
    except (Bill.DoesNotExist, DjangoValidationError, ValueError):
        raise BillNotFound()


def saved_drafts():
    """Bills kept as drafts, newest first"""
    return list(Bill.objects.filter(status=Bill.STATUS_DRAFT).order_by('-created_at'))


def today_revenue(now=None):
    """Sum of non-draft bill totals dated since local midnight"""
    local_now = timezone.localtime(now)
    start_of_day = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
    total = Bill.objects.exclude(status=Bill.STATUS_DRAFT).filter(
        date__gte=start_of_day
    ).aggregate(total=Sum('total'))['total']
    return total or Decimal('0')


def delete_bill(bill_id):
    """Remove a bill's snapshots, then the bill row"""
    with transaction.atomic():
        bill = get_bill(bill_id)
        removed, _ = BillItem.objects.filter(bill=bill).delete()
        bill.delete()
    logger.info("Deleted bill #%s with %s items", bill.bill_number, removed)
    return bill


def bill_matches(bill, query):
    """Search used by the bill history: number, payment method or dd/mm/yyyy date"""
    query = query.lower()
    if query in str(bill.bill_number):
        return True
    if bill.payment_method and query in bill.payment_method.lower():
        return True
    return query in timezone.localtime(bill.date).strftime('%d/%m/%Y')


def search_bills(query=''):
    bills = Bill.objects.exclude(status=Bill.STATUS_DRAFT).order_by('-date')
    query = (query or '').strip()
    if not query:
        return list(bills)
    return [bill for bill in bills if bill_matches(bill, query)]


def normalize_payment_method(value):
    if value is None or not str(value).strip():
        return None
    method = str(value).strip().lower()
    if method not in PAYMENT_METHODS:
        raise ValidationError({'payment_method': f"Unknown payment method '{value}'"})
    return method


@dataclass
class BillingSession:
    cart: List[CartLine] = field(default_factory=list)
    discount: Decimal = Decimal('0')
    payment_method: Optional[str] = None
    bill_id: Optional[str] = None

    # -------------------------
    # Session storage
    # -------------------------
    def to_dict(self):
        return {
            'cart': [line.to_dict() for line in self.cart],
            'discount': str(self.discount),
            'payment_method': self.payment_method,
            'bill_id': self.bill_id,
        }

    @classmethod
    def from_dict(cls, data):
        if not data:
            return cls()
        return cls(
            cart=[CartLine.from_dict(line) for line in data.get('cart', [])],
            discount=to_decimal(data.get('discount'), Decimal('0')),
            payment_method=data.get('payment_method'),
            bill_id=data.get('bill_id'),
        )

    @classmethod
    def from_request(cls, request):
        return cls.from_dict(request.session.get(SESSION_KEY))

    def store(self, request):
        request.session[SESSION_KEY] = self.to_dict()

    # -------------------------
    # Cart
    # -------------------------
    @property
    def is_editing(self):
        return self.bill_id is not None

    def find_line(self, menu_item_id):
        menu_item_id = str(menu_item_id)
        for line in self.cart:
            if line.menu_item_id == menu_item_id:
                return line
        return None

    def add_item(self, menu_item):
        """Add one unit of a menu item; a second add increments its line"""
        if not menu_item.is_active:
            raise MenuItemUnavailable()
        line = self.find_line(menu_item.id)
        if line:
            line.quantity += 1
        else:
            line = CartLine(
                menu_item_id=str(menu_item.id),
                name=menu_item.name,
                unit_price=menu_item.price,
                quantity=1,
                category=menu_item.category,
            )
            self.cart.append(line)
        return line

    def update_quantity(self, menu_item_id, change):
        """Apply +/- change; a line that reaches zero leaves the cart"""
        line = self.find_line(menu_item_id)
        if line is None:
            raise CartLineNotFound()
        line.quantity = max(0, line.quantity + int(change))
        if line.quantity == 0:
            self.cart.remove(line)
        return line

    def remove_item(self, menu_item_id):
        line = self.find_line(menu_item_id)
        if line is None:
            raise CartLineNotFound()
        self.cart.remove(line)

    def set_discount(self, value):
        try:
            self.discount = to_decimal(value, Decimal('0'))
        except ValueError as exc:
            raise ValidationError({'discount': str(exc)})

    def set_payment_method(self, value):
        self.payment_method = normalize_payment_method(value)

    def totals(self, tax_percentage):
        return calculate_totals(self.cart, tax_percentage, self.discount)

    def clear(self):
        self.cart = []
        self.discount = Decimal('0')
        self.payment_method = None
        self.bill_id = None

    # -------------------------
    # Persistence
    # -------------------------
    def save(self, print_after=False, settings=None):
        """Finalize the cart as a saved (or printed) bill"""
        status = Bill.STATUS_PRINTED if print_after else Bill.STATUS_SAVED
        return self._persist(status, settings)

    def hold(self, settings=None):
        """Persist the cart as a draft to finish later"""
        return self._persist(Bill.STATUS_DRAFT, settings)

    def _persist(self, status, settings):
        if not self.cart:
            raise EmptyCartError()

        settings = settings or ShopSettings.load()
        totals = self.totals(settings.tax_percentage)
        bill_data = {
            'subtotal': totals.subtotal,
            'tax_amount': totals.tax_amount,
            'discount': self.discount,
            'total': totals.total,
            'payment_method': self.payment_method or None,
            'status': status,
        }

        created = not self.is_editing
        with transaction.atomic():
            if self.is_editing:
                bill = get_bill(self.bill_id)
                for attr, value in bill_data.items():
                    setattr(bill, attr, value)
                bill.save()
                # Full replace of the snapshots, not a diff
                BillItem.objects.filter(bill=bill).delete()
            else:
                bill = Bill.objects.create(**bill_data)

            BillItem.objects.bulk_create([
                BillItem(
                    bill=bill,
                    item_name_snapshot=line.name,
                    price_snapshot=line.unit_price,
                    quantity=line.quantity,
                    line_total=line.line_total,
                )
                for line in self.cart
            ])

        logger.info(
            "%s bill #%s as %s: %s items, total %s",
            "Created" if created else "Updated",
            bill.bill_number, status, len(self.cart), totals.total,
        )
        self.clear()
        return SaveResult(
            bill=bill,
            created=created,
            drafts=saved_drafts(),
            today_revenue=today_revenue(),
        )

    def load(self, bill_id):
        """Bind an existing bill and rebuild the cart from its snapshots"""
        bill = get_bill(bill_id, with_items=True)
        self.cart = [
            CartLine(
                menu_item_id=str(item.id),
                name=item.item_name_snapshot,
                unit_price=item.price_snapshot,
                quantity=item.quantity,
                category=PLACEHOLDER_CATEGORY,
            )
            for item in bill.items.all()
        ]
        self.discount = bill.discount
        self.payment_method = bill.payment_method
        self.bill_id = str(bill.id)
        logger.info("Loaded bill #%s for editing", bill.bill_number)
        return bill
