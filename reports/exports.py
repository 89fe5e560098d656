import io
from decimal import Decimal
from xml.sax.saxutils import escape

import openpyxl
from openpyxl.styles import Font, Alignment, PatternFill
from openpyxl.utils import get_column_letter
from django.http import HttpResponse
from django.utils import timezone
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer

from billing.receipt import TEXT_CURRENCY
from billing.totals import format_amount

BILL_COLUMNS = ['Bill #', 'Date', 'Payment', 'Subtotal', 'Tax', 'Discount', 'Total']

EXCEL_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


def rs(value):
    return f"{TEXT_CURRENCY}{format_amount(value)}"


def period_label(start_date, end_date):
    return f"Period: {start_date.strftime('%d/%m/%Y')} to {end_date.strftime('%d/%m/%Y')}"


def bill_row(bill):
    return [
        str(bill.bill_number),
        timezone.localtime(bill.date).strftime('%d/%m/%Y %H:%M'),
        bill.payment_method or 'N/A',
        rs(bill.subtotal),
        rs(bill.tax_amount),
        rs(bill.discount),
        rs(bill.total),
    ]


def generate_bills_pdf(report, bills, shop_name=''):
    """PDF list of bills for the report period with its summary figures"""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4)
    story = []

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        'ReportTitle',
        parent=styles['Heading1'],
        fontSize=18,
        spaceAfter=20,
        alignment=1  # center
    )

    # Paragraph text is parsed as markup
    title = f"{escape(shop_name)} - Bills Report" if shop_name else "Bills Report"
    story.append(Paragraph(title, title_style))
    story.append(Paragraph(period_label(report.start, report.end), styles['Heading2']))
    story.append(Spacer(1, 10))
    story.append(Paragraph(f"Total Bills: {report.bill_count}", styles['Normal']))
    story.append(Paragraph(f"Total Revenue: {rs(report.total_revenue)}", styles['Normal']))
    story.append(Paragraph(f"Average Bill: {rs(report.average_bill_value)}", styles['Normal']))
    story.append(Spacer(1, 20))

    data = [BILL_COLUMNS] + [bill_row(bill) for bill in bills]
    data.append(['', '', '', '', '', 'TOTAL', rs(report.total_revenue)])

    table = Table(data, repeatRows=1)
    table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.grey),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
        ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 9),
        ('BOTTOMPADDING', (0, 0), (-1, 0), 10),
        ('BACKGROUND', (0, -1), (-1, -1), colors.lightgrey),
        ('FONTNAME', (0, -1), (-1, -1), 'Helvetica-Bold'),
        ('GRID', (0, 0), (-1, -1), 1, colors.black)
    ]))
    story.append(table)

    doc.build(story)

    buffer.seek(0)
    response = HttpResponse(buffer, content_type='application/pdf')
    response['Content-Disposition'] = f'attachment; filename="bills_report_{report.start}_{report.end}.pdf"'
    return response


def generate_bills_excel(report, bills, shop_name=''):
    """Excel workbook: one sheet of bills and one of daily and payment method totals"""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Bills"

    header_font = Font(bold=True, size=12)
    title_font = Font(bold=True, size=16)
    header_fill = PatternFill(start_color='DDDDDD', end_color='DDDDDD', fill_type='solid')

    ws['A1'] = f"{shop_name} - Bills Report" if shop_name else "Bills Report"
    ws['A1'].font = title_font
    ws['A1'].alignment = Alignment(horizontal='center')
    ws['A2'] = period_label(report.start, report.end)
    ws.merge_cells('A1:G1')
    ws.merge_cells('A2:G2')

    for col, header in enumerate(BILL_COLUMNS, 1):
        cell = ws.cell(row=4, column=col, value=header)
        cell.font = header_font
        cell.fill = header_fill

    row = 5
    for bill in bills:
        ws.cell(row=row, column=1, value=bill.bill_number)
        ws.cell(row=row, column=2, value=timezone.localtime(bill.date).strftime('%d/%m/%Y %H:%M'))
        ws.cell(row=row, column=3, value=bill.payment_method or 'N/A')
        ws.cell(row=row, column=4, value=float(bill.subtotal))
        ws.cell(row=row, column=5, value=float(bill.tax_amount))
        ws.cell(row=row, column=6, value=float(bill.discount))
        ws.cell(row=row, column=7, value=float(bill.total))
        row += 1

    row += 1
    for label, value in (
        ("Total Bills:", report.bill_count),
        ("Total Revenue:", float(report.total_revenue)),
        ("Average Bill:", float(report.average_bill_value.quantize(Decimal('0.01')))),
    ):
        ws.cell(row=row, column=6, value=label).font = header_font
        ws.cell(row=row, column=7, value=value).font = header_font
        row += 1

    summary = wb.create_sheet("Summary")
    summary.append(['Date', 'Revenue', 'Bills'])
    for bucket in report.daily:
        summary.append([bucket.label, float(bucket.revenue), bucket.bills])
    summary.append([])
    summary.append(['Payment Method', 'Amount', 'Count'])
    for bucket in report.payment_methods:
        summary.append([bucket.method, float(bucket.amount), bucket.count])
    for cell in summary[1]:
        cell.font = header_font

    autosize_columns(ws, first_row=4)
    autosize_columns(summary)

    response = HttpResponse(content_type=EXCEL_CONTENT_TYPE)
    response['Content-Disposition'] = f'attachment; filename="bills_report_{report.start}_{report.end}.xlsx"'
    wb.save(response)
    return response


def autosize_columns(ws, first_row=1):
    # title rows are merged and would stretch column A
    for column in ws.iter_cols(min_row=first_row):
        max_length = max((len(str(cell.value)) for cell in column if cell.value is not None), default=0)
        ws.column_dimensions[get_column_letter(column[0].column)].width = min(max_length + 2, 50)
