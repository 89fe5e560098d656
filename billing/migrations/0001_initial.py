import uuid
from decimal import Decimal

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Bill',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('bill_number', models.PositiveIntegerField(editable=False, unique=True)),
                ('date', models.DateTimeField(default=django.utils.timezone.now)),
                ('subtotal', models.DecimalField(decimal_places=6, default=Decimal('0'), max_digits=16)),
                ('tax_amount', models.DecimalField(decimal_places=6, default=Decimal('0'), max_digits=16)),
                ('discount', models.DecimalField(decimal_places=6, default=Decimal('0'), max_digits=16)),
                ('total', models.DecimalField(decimal_places=6, default=Decimal('0'), max_digits=16)),
                ('payment_method', models.CharField(blank=True, choices=[('cash', 'Cash'), ('card', 'Card'), ('upi', 'UPI')], max_length=20, null=True)),
                ('status', models.CharField(choices=[('draft', 'Draft'), ('saved', 'Saved'), ('printed', 'Printed')], default='saved', max_length=10)),
            ],
            options={
                'db_table': 'bills',
                'ordering': ['-date'],
                'indexes': [models.Index(fields=['-date'], name='idx_bills_date')],
                'constraints': [models.CheckConstraint(condition=models.Q(('status__in', ['draft', 'saved', 'printed'])), name='bills_status_valid')],
            },
        ),
        migrations.CreateModel(
            name='BillItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('item_name_snapshot', models.CharField(max_length=255)),
                ('price_snapshot', models.DecimalField(decimal_places=2, max_digits=10)),
                ('quantity', models.PositiveIntegerField()),
                ('line_total', models.DecimalField(decimal_places=6, max_digits=16)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('bill', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='billing.bill')),
            ],
            options={
                'db_table': 'bill_items',
                'ordering': ['id'],
                'constraints': [models.CheckConstraint(condition=models.Q(('quantity__gt', 0)), name='bill_items_quantity_gt_0')],
            },
        ),
    ]
