"""
Revenue figures for a closed date range: totals, average bill value,
a per-day series and a per-payment-method series.
"""

from calendar import monthrange
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from django.utils import timezone

from billing.models import Bill

TWO_PLACES = Decimal('0.01')
DAY_LABEL_FORMAT = '%b %d'
NOT_SPECIFIED = 'Not Specified'

PERIODS = ('today', 'week', 'month', 'year')


@dataclass
class DailyRevenue:
    day: date
    label: str
    revenue: Decimal = Decimal('0')
    bills: int = 0


@dataclass
class PaymentMethodRevenue:
    method: str
    amount: Decimal = Decimal('0')
    count: int = 0


@dataclass
class RevenueReport:
    start: Optional[date]
    end: Optional[date]
    total_revenue: Decimal = Decimal('0')
    bill_count: int = 0
    average_bill_value: Decimal = Decimal('0')
    daily: List[DailyRevenue] = field(default_factory=list)
    payment_methods: List[PaymentMethodRevenue] = field(default_factory=list)

    def to_dict(self):
        return {
            'start_date': self.start.isoformat() if self.start else None,
            'end_date': self.end.isoformat() if self.end else None,
            'total_revenue': float(round2(self.total_revenue)),
            'bill_count': self.bill_count,
            'average_bill_value': float(round2(self.average_bill_value)),
            'daily': [
                {'date': bucket.label, 'revenue': float(bucket.revenue), 'bills': bucket.bills}
                for bucket in self.daily
            ],
            'payment_methods': [
                {'method': bucket.method, 'amount': float(bucket.amount), 'count': bucket.count}
                for bucket in self.payment_methods
            ],
        }


def round2(value):
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def payment_label(method):
    method = method or NOT_SPECIFIED
    return method[:1].upper() + method[1:]


def period_range(period, today=None):
    """(start, end) dates for today / this week (Mon-Sun) / this month / this year"""
    today = today or timezone.localdate()
    if period == 'today':
        return today, today
    if period == 'week':
        start = today - timedelta(days=today.weekday())
        return start, start + timedelta(days=6)
    if period == 'month':
        return today.replace(day=1), today.replace(day=monthrange(today.year, today.month)[1])
    if period == 'year':
        return date(today.year, 1, 1), date(today.year, 12, 31)
    raise ValueError(f"Unknown period '{period}'")


def day_bounds(start, end):
    """Aware datetimes covering local days start..end inclusive, end exclusive"""
    tz = timezone.get_current_timezone()
    start_dt = timezone.make_aware(datetime.combine(start, time.min), tz)
    end_dt = timezone.make_aware(datetime.combine(end + timedelta(days=1), time.min), tz)
    return start_dt, end_dt


def bills_in_range(start, end):
    """Saved and printed bills dated within [start, end], oldest first"""
    start_dt, end_dt = day_bounds(start, end)
    return list(
        Bill.objects.exclude(status=Bill.STATUS_DRAFT)
        .filter(date__gte=start_dt, date__lt=end_dt)
        .order_by('date')
    )


def aggregate_revenue(bills, start=None, end=None):
    """Group bills by local calendar day and by payment method"""
    report = RevenueReport(start=start, end=end)
    days = {}
    methods = {}

    for bill in bills:
        report.total_revenue += bill.total
        report.bill_count += 1

        local_day = timezone.localtime(bill.date).date()
        bucket = days.get(local_day)
        if bucket is None:
            bucket = days[local_day] = DailyRevenue(day=local_day, label=local_day.strftime(DAY_LABEL_FORMAT))
        bucket.revenue += bill.total
        bucket.bills += 1

        label = payment_label(bill.payment_method)
        method_bucket = methods.get(label)
        if method_bucket is None:
            method_bucket = methods[label] = PaymentMethodRevenue(method=label)
        method_bucket.amount += bill.total
        method_bucket.count += 1

    if report.bill_count:
        report.average_bill_value = report.total_revenue / report.bill_count

    report.daily = sorted(days.values(), key=lambda bucket: bucket.day)
    for bucket in report.daily:
        bucket.revenue = round2(bucket.revenue)
    report.payment_methods = list(methods.values())
    for bucket in report.payment_methods:
        bucket.amount = round2(bucket.amount)
    return report


def build_report(start, end):
    bills = bills_in_range(start, end)
    return aggregate_revenue(bills, start, end), bills
