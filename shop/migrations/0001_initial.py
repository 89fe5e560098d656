import uuid
from decimal import Decimal

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='ShopSettings',
            fields=[
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('shop_name', models.CharField(default='My Shop', max_length=255)),
                ('shop_address', models.TextField(blank=True, default='')),
                ('shop_phone', models.CharField(blank=True, default='', max_length=50)),
                ('gst_number', models.CharField(blank=True, default='', max_length=50)),
                ('tax_percentage', models.DecimalField(decimal_places=2, default=Decimal('5.00'), max_digits=5)),
            ],
            options={
                'verbose_name_plural': 'Settings',
                'db_table': 'settings',
                'constraints': [models.CheckConstraint(condition=models.Q(('tax_percentage__gte', 0)), name='settings_tax_percentage_gte_0')],
            },
        ),
    ]
