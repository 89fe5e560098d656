from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from billing.services import BillingSession
from inventory.models import MenuItem


class MenuAPITests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.coffee = MenuItem.objects.create(name='Coffee', price=Decimal('100.00'), category='Drinks')
        cls.vada = MenuItem.objects.create(name='Vada', price=Decimal('25.00'), category='Snacks')
        cls.soup = MenuItem.objects.create(name='Soup', price=Decimal('60.00'), category='Starters', is_active=False)

    def setUp(self):
        self.list_url = reverse('inventory:menu-list-create')

    def test_create_item(self):
        response = self.client.post(
            self.list_url, {'name': '  Lassi ', 'price': '45.00', 'category': 'Drinks'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['name'], 'Lassi')
        self.assertTrue(response.data['is_active'])

    def test_duplicate_name_rejected_case_insensitively(self):
        response = self.client.post(self.list_url, {'name': 'coffee', 'price': '10'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('name', response.data['details'])

    def test_negative_price_rejected(self):
        response = self.client.post(self.list_url, {'name': 'Free Water', 'price': '-1'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('price', response.data['details'])

    def test_filter_and_search(self):
        response = self.client.get(self.list_url, {'is_active': 'true'})
        self.assertEqual([item['name'] for item in response.data], ['Coffee', 'Vada'])

        response = self.client.get(self.list_url, {'search': 'snack'})
        self.assertEqual([item['name'] for item in response.data], ['Vada'])

        response = self.client.get(self.list_url, {'ordering': '-price'})
        self.assertEqual(response.data[0]['name'], 'Coffee')

    def test_update_keeps_own_name(self):
        url = reverse('inventory:menu-detail', args=[self.coffee.id])
        response = self.client.patch(url, {'name': 'Coffee', 'price': '110.00'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['price'], Decimal('110.00'))

    def test_delete_leaves_bill_snapshots(self):
        session = BillingSession()
        session.add_item(self.vada)
        bill = session.save().bill

        response = self.client.delete(reverse('inventory:menu-detail', args=[self.vada.id]))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(bill.items.get().item_name_snapshot, 'Vada')

    def test_bulk_status_update(self):
        response = self.client.post(
            reverse('inventory:menu-bulk-update-status'),
            {'menu_ids': [str(self.coffee.id), str(self.soup.id)], 'is_active': False},
            format='json'
        )
        self.assertEqual(response.data['updated_count'], 2)
        self.assertEqual(list(MenuItem.objects.filter(is_active=True)), [self.vada])

    def test_categories_of_active_items(self):
        response = self.client.get(reverse('inventory:menu-categories'))
        self.assertEqual(response.data['categories'], ['Drinks', 'Snacks'])
