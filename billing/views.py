from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response
from rest_framework.exceptions import ValidationError
from django.http import HttpResponse
from django.db.models import Q
from django.urls import reverse
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi

from inventory.models import MenuItem
from inventory.serializers import MenuItemSerializer
from shop.models import ShopSettings
from .exceptions import MenuItemUnavailable
from .receipt import build_receipt, render_receipt_html, render_bill_html
from .serializers import (
    BillSerializer, BillListSerializer, AddCartItemSerializer,
    QuantityChangeSerializer, CartUpdateSerializer, SaveBillSerializer
)
from .services import (
    BillingSession, delete_bill, get_bill, saved_drafts, search_bills, today_revenue
)
from .totals import format_amount, format_percentage


def cart_payload(session, shop_settings):
    """Current cart with totals recomputed from scratch"""
    totals = session.totals(shop_settings.tax_percentage)
    return {
        'bill_id': session.bill_id,
        'items': [
            {
                'menu_item_id': line.menu_item_id,
                'name': line.name,
                'category': line.category,
                'unit_price': format_amount(line.unit_price),
                'quantity': line.quantity,
                'line_total': format_amount(line.line_total),
            }
            for line in session.cart
        ],
        'items_count': len(session.cart),
        'discount': format_amount(session.discount),
        'payment_method': session.payment_method,
        'tax_percentage': format_percentage(shop_settings.tax_percentage),
        'totals': totals.formatted(),
    }


def cart_response(request, session, shop_settings=None, status_code=status.HTTP_200_OK, **extra):
    session.store(request)
    data = cart_payload(session, shop_settings or ShopSettings.load())
    data.update(extra)
    return Response(data, status=status_code)


@swagger_auto_schema(
    method='get',
    operation_description="Active menu items offered for sale",
    manual_parameters=[
        openapi.Parameter('q', openapi.IN_QUERY, description="Search by name or category", type=openapi.TYPE_STRING),
    ]
)
@api_view(['GET'])
def sale_menu(request):
    """Active menu items, optionally filtered by name or category"""
    menu_items = MenuItem.objects.filter(is_active=True).order_by('name')
    query = request.query_params.get('q', '').strip()
    if query:
        menu_items = menu_items.filter(Q(name__icontains=query) | Q(category__icontains=query))
    return Response(MenuItemSerializer(menu_items, many=True).data)


@swagger_auto_schema(method='patch', request_body=CartUpdateSerializer)
@api_view(['GET', 'PATCH'])
def cart_detail(request):
    """Get the cart, or set its discount and payment method"""
    session = BillingSession.from_request(request)
    if request.method == 'PATCH':
        serializer = CartUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        if 'discount' in serializer.validated_data:
            session.set_discount(serializer.validated_data['discount'])
        if 'payment_method' in serializer.validated_data:
            session.set_payment_method(serializer.validated_data['payment_method'])
    return cart_response(request, session)


@swagger_auto_schema(method='post', request_body=AddCartItemSerializer)
@api_view(['POST'])
def add_cart_item(request):
    """Add one unit of a menu item to the cart"""
    serializer = AddCartItemSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        menu_item = MenuItem.objects.get(id=serializer.validated_data['menu_item_id'])
    except MenuItem.DoesNotExist:
        raise MenuItemUnavailable("Menu item not found")

    session = BillingSession.from_request(request)
    session.add_item(menu_item)
    return cart_response(request, session, status_code=status.HTTP_201_CREATED)


@swagger_auto_schema(method='patch', request_body=QuantityChangeSerializer)
@api_view(['PATCH', 'DELETE'])
def cart_item_detail(request, line_id):
    """Change the quantity of a cart line, or remove it"""
    session = BillingSession.from_request(request)
    if request.method == 'DELETE':
        session.remove_item(line_id)
    else:
        serializer = QuantityChangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        session.update_quantity(line_id, serializer.validated_data['change'])
    return cart_response(request, session)


@api_view(['POST'])
def clear_cart(request):
    """Discard the cart, discount, payment method and any bill being edited"""
    session = BillingSession.from_request(request)
    session.clear()
    return cart_response(request, session)


def save_result_payload(result, message):
    return {
        'message': message,
        'bill': BillSerializer(result.bill).data,
        'drafts': BillListSerializer(result.drafts, many=True).data,
        'today_revenue': format_amount(result.today_revenue),
    }


@swagger_auto_schema(
    method='post',
    operation_description="Save the cart as a bill; with print=true the bill is marked printed and the receipt returned",
    request_body=SaveBillSerializer,
    responses={201: BillSerializer, 400: 'Cart is empty'}
)
@api_view(['POST'])
def save_cart(request):
    """Save, or save and print, the current cart"""
    serializer = SaveBillSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    print_after = serializer.validated_data['print']

    session = BillingSession.from_request(request)
    result = session.save(print_after=print_after)
    session.store(request)

    data = save_result_payload(result, "Bill saved & printed!" if print_after else "Bill saved!")
    if print_after:
        data['receipt'] = build_receipt(result.bill, result.bill.items.all(), ShopSettings.load())
        data['print_url'] = reverse('billing:bill-receipt', args=[result.bill.id]) + '?output=html'

    return Response(data, status=status.HTTP_201_CREATED if result.created else status.HTTP_200_OK)


@api_view(['POST'])
def hold_cart(request):
    """Keep the current cart as a draft bill"""
    session = BillingSession.from_request(request)
    result = session.hold()
    session.store(request)
    data = save_result_payload(result, "Bill kept as draft")
    return Response(data, status=status.HTTP_201_CREATED if result.created else status.HTTP_200_OK)


@api_view(['POST'])
def load_bill(request, bill_id):
    """Load a bill into the cart for editing"""
    session = BillingSession.from_request(request)
    bill = session.load(bill_id)
    return cart_response(request, session, message=f"Editing Bill #{bill.bill_number}")


@api_view(['GET'])
def draft_list(request):
    """Bills kept as drafts, newest first"""
    return Response(BillListSerializer(saved_drafts(), many=True).data)


@api_view(['GET'])
def today_revenue_view(request):
    """Revenue of today's saved and printed bills"""
    return Response({'today_revenue': format_amount(today_revenue())})


@swagger_auto_schema(
    method='get',
    manual_parameters=[
        openapi.Parameter('q', openapi.IN_QUERY, description="Bill number, payment method or dd/mm/yyyy date", type=openapi.TYPE_STRING),
    ]
)
@api_view(['GET'])
def bill_list(request):
    """Saved and printed bills, newest first"""
    bills = search_bills(request.query_params.get('q', ''))
    return Response({
        'results_count': len(bills),
        'bills': BillListSerializer(bills, many=True).data,
    })


@api_view(['GET', 'DELETE'])
def bill_detail(request, bill_id):
    """Get a bill with its items, or delete it"""
    if request.method == 'DELETE':
        bill = delete_bill(bill_id)
        session = BillingSession.from_request(request)
        if session.bill_id == str(bill_id):
            session.clear()
            session.store(request)
        return Response({'message': f"Bill #{bill.bill_number} deleted"}, status=status.HTTP_200_OK)

    bill = get_bill(bill_id, with_items=True)
    return Response(BillSerializer(bill).data)


@swagger_auto_schema(
    method='get',
    manual_parameters=[
        openapi.Parameter('output', openapi.IN_QUERY, description="text (default) or html", type=openapi.TYPE_STRING),
    ]
)
@api_view(['GET'])
def bill_receipt(request, bill_id):
    """Thermal receipt for a bill, as plain text or as a print page"""
    bill = get_bill(bill_id, with_items=True)
    shop_settings = ShopSettings.load()
    items = bill.items.all()

    output = request.query_params.get('output', 'text')
    if output == 'html':
        return HttpResponse(render_receipt_html(bill, items, shop_settings), content_type='text/html; charset=utf-8')
    if output != 'text':
        raise ValidationError({'output': "Expected 'text' or 'html'"})
    return HttpResponse(build_receipt(bill, items, shop_settings), content_type='text/plain; charset=utf-8')


@api_view(['GET'])
def bill_view(request, bill_id):
    """HTML detail view of a bill"""
    bill = get_bill(bill_id, with_items=True)
    html = render_bill_html(bill, bill.items.all(), ShopSettings.load())
    return HttpResponse(html, content_type='text/html; charset=utf-8')
