from datetime import date
import logging

from rest_framework.decorators import api_view
from rest_framework.exceptions import ValidationError, NotFound
from rest_framework.response import Response
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi

from shop.models import ShopSettings
from .aggregator import PERIODS, build_report, period_range
from .exports import generate_bills_pdf, generate_bills_excel

logger = logging.getLogger(__name__)

RANGE_PARAMETERS = [
    openapi.Parameter('period', openapi.IN_QUERY, description="today, week, month (default) or year", type=openapi.TYPE_STRING),
    openapi.Parameter('start', openapi.IN_QUERY, description="Start date YYYY-MM-DD (overrides period)", type=openapi.TYPE_STRING),
    openapi.Parameter('end', openapi.IN_QUERY, description="End date YYYY-MM-DD (overrides period)", type=openapi.TYPE_STRING),
]


def parse_date(value, name):
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationError({name: "Use the YYYY-MM-DD format"})


def requested_range(params):
    """Explicit start/end when both are given, otherwise the named period"""
    start = params.get('start')
    end = params.get('end')
    if start or end:
        if not (start and end):
            raise ValidationError({'non_field_errors': ["Both start and end are required"]})
        start_date, end_date = parse_date(start, 'start'), parse_date(end, 'end')
        if start_date > end_date:
            raise ValidationError({'end': "End date must not be before start date"})
        return start_date, end_date

    period = params.get('period', 'month')
    if period not in PERIODS:
        raise ValidationError({'period': f"Expected one of: {', '.join(PERIODS)}"})
    return period_range(period)


@swagger_auto_schema(method='get', manual_parameters=RANGE_PARAMETERS)
@api_view(['GET'])
def revenue_report(request):
    """Revenue totals, daily series and payment method split for a date range"""
    start_date, end_date = requested_range(request.query_params)
    report, _ = build_report(start_date, end_date)
    return Response(report.to_dict())


@swagger_auto_schema(
    method='get',
    manual_parameters=RANGE_PARAMETERS + [
        openapi.Parameter('output', openapi.IN_QUERY, description="pdf (default) or excel", type=openapi.TYPE_STRING),
    ]
)
@api_view(['GET'])
def export_revenue_report(request):
    """Download the bills of a date range as PDF or Excel"""
    output = request.query_params.get('output', 'pdf')
    if output not in ('pdf', 'excel'):
        raise ValidationError({'output': "Expected 'pdf' or 'excel'"})

    start_date, end_date = requested_range(request.query_params)
    report, bills = build_report(start_date, end_date)
    if not bills:
        raise NotFound("No bills found for selected date range")

    shop_name = ShopSettings.load().shop_name
    logger.info("Exporting %s bills (%s to %s) as %s", len(bills), start_date, end_date, output)
    if output == 'excel':
        return generate_bills_excel(report, bills, shop_name)
    return generate_bills_pdf(report, bills, shop_name)
