"""
Receipt rendering for 58mm thermal printers (32 columns of monospace text)
and the HTML views used for printing and for the bill history.
"""

from django.conf import settings as django_settings
from django.template.loader import render_to_string
from django.utils import timezone

from .totals import format_amount, format_percentage

TEXT_CURRENCY = 'Rs.'
HTML_CURRENCY = '₹'

ITEM_HEADER = 'Item             Qty Price Total'


def receipt_width():
    return getattr(django_settings, 'RECEIPT_WIDTH', 32)


def center(text, width=32):
    padding = max(0, (width - len(text)) // 2)
    return ' ' * padding + text


def line(left, right, width=32):
    space = width - len(left) - len(right)
    return left + ' ' * max(1, space) + right


def divider(width=32):
    return '-' * width


def item_line(name, quantity, price, total):
    if len(name) > 16:
        name = name[:13] + '...'
    else:
        name = name.ljust(16)
    return '{} {} {} {}'.format(
        name,
        str(quantity).rjust(3),
        format_amount(price).rjust(5),
        format_amount(total).rjust(6),
    )


def money(value, currency=TEXT_CURRENCY):
    return f"{currency}{format_amount(value)}"


def format_bill_date(value, fmt='%d/%m/%Y %H:%M:%S'):
    return timezone.localtime(value).strftime(fmt)


def build_receipt(bill, items, shop_settings, width=None):
    """Plain-text receipt for a persisted bill and its snapshots"""
    width = width or receipt_width()
    rule = divider(width)
    lines = [center(shop_settings.shop_name, width)]
    if shop_settings.shop_phone:
        lines.append(center(f"Ph: {shop_settings.shop_phone}", width))
    lines.append(rule)
    lines.append(f"Bill #: {bill.bill_number}")
    lines.append(f"Date: {format_bill_date(bill.date)}")
    if bill.payment_method:
        lines.append(f"Payment: {bill.payment_method}")
    lines.append(rule)
    lines.append(ITEM_HEADER)
    lines.append(rule)

    for item in items:
        lines.append(item_line(item.item_name_snapshot, item.quantity, item.price_snapshot, item.line_total))

    lines.append(rule)
    lines.append(line('Subtotal:', money(bill.subtotal), width))
    lines.append(line(f"Tax ({format_percentage(shop_settings.tax_percentage)}%):", money(bill.tax_amount), width))
    if bill.discount > 0:
        lines.append(line('Discount:', money(bill.discount), width))
    lines.append(rule)
    lines.append(line('TOTAL:', money(bill.total), width))
    lines.append(rule)
    lines.append(center('Thank you!', width))
    lines.append(center('Visit again!', width))

    # blank trailer lines for the paper feed
    return '\n'.join(lines) + '\n\n\n'


def render_receipt_html(bill, items, shop_settings):
    """Print page for the receipt; it opens the print dialog after a short delay"""
    return render_to_string('billing/receipt.html', {
        'bill': bill,
        'receipt': build_receipt(bill, items, shop_settings),
        'print_delay_ms': getattr(django_settings, 'RECEIPT_PRINT_DELAY_MS', 250),
    })


def render_bill_html(bill, items, shop_settings):
    """Styled table view of a bill for the history screen"""
    rows = [
        {
            'name': item.item_name_snapshot,
            'price': money(item.price_snapshot, HTML_CURRENCY),
            'quantity': item.quantity,
            'total': money(item.line_total, HTML_CURRENCY),
        }
        for item in items
    ]
    return render_to_string('billing/bill_detail.html', {
        'bill': bill,
        'shop': shop_settings,
        'date': format_bill_date(bill.date, '%d/%m/%Y %H:%M'),
        'payment_method': bill.payment_method or 'N/A',
        'rows': rows,
        'subtotal': money(bill.subtotal, HTML_CURRENCY),
        'tax_amount': money(bill.tax_amount, HTML_CURRENCY),
        'discount': money(bill.discount, HTML_CURRENCY),
        'total': money(bill.total, HTML_CURRENCY),
    })
