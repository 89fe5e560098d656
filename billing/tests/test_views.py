from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from billing.models import Bill
from inventory.models import MenuItem
from shop.models import ShopSettings


class BillingAPITestCase(APITestCase):
    @classmethod
    def setUpTestData(cls):
        ShopSettings.objects.create(shop_name='Corner Cafe', shop_phone='12345', tax_percentage=Decimal('5.00'))
        cls.coffee = MenuItem.objects.create(name='Coffee', price=Decimal('100.00'), category='Drinks')
        cls.tea = MenuItem.objects.create(name='Tea', price=Decimal('20.00'), category='Drinks')
        MenuItem.objects.create(name='Seasonal Soup', price=Decimal('80.00'), is_active=False)

    def add(self, item):
        return self.client.post(reverse('billing:cart-add-item'), {'menu_item_id': str(item.id)}, format='json')

    def save(self, **data):
        return self.client.post(reverse('billing:cart-save'), data, format='json')


class CartAPITests(BillingAPITestCase):
    def test_sale_menu_lists_active_items(self):
        response = self.client.get(reverse('billing:sale-menu'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([item['name'] for item in response.data], ['Coffee', 'Tea'])

        response = self.client.get(reverse('billing:sale-menu'), {'q': 'tea'})
        self.assertEqual([item['name'] for item in response.data], ['Tea'])

    def test_cart_lives_in_the_session(self):
        self.add(self.coffee)
        response = self.add(self.coffee)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        response = self.client.get(reverse('billing:cart-detail'))
        self.assertEqual(response.data['items_count'], 1)
        self.assertEqual(response.data['items'][0]['quantity'], 2)
        self.assertEqual(response.data['totals'], {
            'subtotal': '200.00', 'tax_amount': '10.00', 'total': '210.00'
        })

    def test_discount_and_payment_method(self):
        self.add(self.coffee)
        response = self.client.patch(
            reverse('billing:cart-detail'), {'discount': '10', 'payment_method': 'upi'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['discount'], '10.00')
        self.assertEqual(response.data['payment_method'], 'upi')
        self.assertEqual(response.data['totals']['total'], '95.00')

    def test_unknown_payment_method_rejected(self):
        response = self.client.patch(reverse('billing:cart-detail'), {'payment_method': 'cheque'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(response.data['error'])
        self.assertIn('payment_method', response.data['details'])

    def test_inactive_or_unknown_item_rejected(self):
        inactive = MenuItem.objects.get(name='Seasonal Soup')
        self.assertEqual(self.add(inactive).status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.post(
            reverse('billing:cart-add-item'),
            {'menu_item_id': '00000000-0000-0000-0000-000000000000'},
            format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_change_quantity_and_remove(self):
        self.add(self.tea)
        url = reverse('billing:cart-item-detail', args=[str(self.tea.id)])

        response = self.client.patch(url, {'change': 2}, format='json')
        self.assertEqual(response.data['items'][0]['quantity'], 3)

        response = self.client.delete(url)
        self.assertEqual(response.data['items'], [])

        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_clear(self):
        self.add(self.tea)
        response = self.client.post(reverse('billing:cart-clear'))
        self.assertEqual(response.data['items'], [])
        self.assertIsNone(response.data['bill_id'])


class SaveAPITests(BillingAPITestCase):
    def test_empty_cart_save_is_rejected(self):
        response = self.save()
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['message'], 'Validation error')
        self.assertEqual(response.data['details'], ['Cart is empty'])
        self.assertFalse(Bill.objects.exists())

    def test_save_returns_bill_and_refresh_data(self):
        self.add(self.coffee)
        self.add(self.coffee)
        self.client.patch(reverse('billing:cart-detail'), {'discount': '10'}, format='json')

        response = self.save()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['message'], 'Bill saved!')
        self.assertEqual(response.data['bill']['status'], 'saved')
        self.assertEqual(response.data['bill']['display_total'], '200.00')
        self.assertEqual(len(response.data['bill']['items']), 1)
        self.assertEqual(response.data['today_revenue'], '200.00')
        self.assertEqual(response.data['drafts'], [])
        self.assertNotIn('receipt', response.data)

        cart = self.client.get(reverse('billing:cart-detail')).data
        self.assertEqual(cart['items'], [])

    def test_save_and_print(self):
        self.add(self.tea)
        response = self.save(print=True)

        self.assertEqual(response.data['message'], 'Bill saved & printed!')
        self.assertEqual(response.data['bill']['status'], 'printed')
        self.assertIn('Corner Cafe', response.data['receipt'])
        self.assertTrue(response.data['print_url'].endswith('/receipt/?output=html'))

        page = self.client.get(response.data['print_url'])
        self.assertEqual(page.status_code, status.HTTP_200_OK)
        self.assertIn(b'window.print()', page.content)

    def test_hold_then_edit_and_save(self):
        self.add(self.tea)
        held = self.client.post(reverse('billing:cart-hold'))
        self.assertEqual(held.status_code, status.HTTP_201_CREATED)
        bill_id = held.data['bill']['id']
        self.assertEqual(held.data['bill']['status'], 'draft')
        self.assertEqual(len(self.client.get(reverse('billing:draft-list')).data), 1)

        loaded = self.client.post(reverse('billing:bill-load', args=[bill_id]))
        self.assertEqual(loaded.data['message'], 'Editing Bill #1')
        self.assertEqual(loaded.data['bill_id'], bill_id)

        line_id = loaded.data['items'][0]['menu_item_id']
        self.client.patch(reverse('billing:cart-item-detail', args=[line_id]), {'change': 1}, format='json')
        saved = self.save()

        self.assertEqual(saved.status_code, status.HTTP_200_OK)
        self.assertEqual(saved.data['bill']['id'], bill_id)
        self.assertEqual(saved.data['bill']['status'], 'saved')
        self.assertEqual(saved.data['bill']['items'][0]['quantity'], 2)
        self.assertEqual(saved.data['drafts'], [])
        self.assertEqual(self.client.get(reverse('billing:today-revenue')).data['today_revenue'], '42.00')


class BillHistoryAPITests(BillingAPITestCase):
    def setUp(self):
        self.add(self.coffee)
        self.client.patch(reverse('billing:cart-detail'), {'payment_method': 'cash'}, format='json')
        self.bill_id = self.save().data['bill']['id']

    def test_list_and_search(self):
        response = self.client.get(reverse('billing:bill-list'))
        self.assertEqual(response.data['results_count'], 1)

        response = self.client.get(reverse('billing:bill-list'), {'q': 'card'})
        self.assertEqual(response.data['results_count'], 0)

    def test_detail_and_views(self):
        response = self.client.get(reverse('billing:bill-detail', args=[self.bill_id]))
        self.assertEqual(response.data['bill_number'], 1)
        self.assertEqual(response.data['items'][0]['item_name_snapshot'], 'Coffee')

        receipt = self.client.get(reverse('billing:bill-receipt', args=[self.bill_id]))
        self.assertEqual(receipt['Content-Type'], 'text/plain; charset=utf-8')
        self.assertIn(b'Payment: cash', receipt.content)

        bad = self.client.get(reverse('billing:bill-receipt', args=[self.bill_id]), {'output': 'pdf'})
        self.assertEqual(bad.status_code, status.HTTP_400_BAD_REQUEST)

        view = self.client.get(reverse('billing:bill-view', args=[self.bill_id]))
        self.assertIn('₹105.00', view.content.decode())

    def test_delete_clears_session_bound_to_bill(self):
        self.client.post(reverse('billing:bill-load', args=[self.bill_id]))

        response = self.client.delete(reverse('billing:bill-detail', args=[self.bill_id]))
        self.assertEqual(response.data['message'], 'Bill #1 deleted')

        cart = self.client.get(reverse('billing:cart-detail')).data
        self.assertIsNone(cart['bill_id'])
        self.assertEqual(cart['items'], [])

        missing = self.client.get(reverse('billing:bill-detail', args=[self.bill_id]))
        self.assertEqual(missing.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(missing.data['message'], 'Resource not found')
