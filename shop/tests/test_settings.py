from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from shop.models import ShopSettings


class ShopSettingsModelTests(TestCase):
    def test_load_creates_defaults_once(self):
        first = ShopSettings.load()
        second = ShopSettings.load()

        self.assertEqual(first.pk, second.pk)
        self.assertEqual(first.shop_name, 'My Shop')
        self.assertEqual(first.tax_percentage, Decimal('5.00'))
        self.assertEqual(ShopSettings.objects.count(), 1)

    def test_second_row_refused(self):
        ShopSettings.load()
        with self.assertRaises(ValidationError):
            ShopSettings.objects.create(shop_name='Another')

    def test_existing_row_can_be_saved(self):
        settings = ShopSettings.load()
        settings.shop_name = 'Renamed'
        settings.save()
        self.assertEqual(ShopSettings.load().shop_name, 'Renamed')

    def test_negative_tax_violates_constraint(self):
        settings = ShopSettings.load()
        settings.tax_percentage = Decimal('-1')
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                settings.save()


class ShopSettingsAPITests(APITestCase):
    def setUp(self):
        self.url = reverse('shop:settings')

    def test_get_returns_defaults(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['shop_name'], 'My Shop')

    def test_patch_updates_single_row(self):
        response = self.client.patch(self.url, {'shop_name': ' Corner Cafe ', 'tax_percentage': '12.5'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['shop_name'], 'Corner Cafe')
        self.assertEqual(ShopSettings.objects.get().tax_percentage, Decimal('12.50'))

    def test_invalid_values_rejected(self):
        response = self.client.patch(self.url, {'tax_percentage': '-1'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('tax_percentage', response.data['details'])

        response = self.client.patch(self.url, {'shop_name': '   '}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
