#!/usr/bin/env python3
"""
Order placement, visibility and status management tests
"""
import unittest
from datetime import datetime, timedelta

from cakeshop import db
from cakeshop.models import Order, Product
from shop_testing import login_admin, make_app, order_item, order_payload, register


class OrderTestCase(unittest.TestCase):
    def setUp(self):
        self.app = make_app()
        self.customer = self.app.test_client()
        register(self.customer, email='jane@mail.com')
        self.admin = self.app.test_client()
        login_admin(self.admin)

    def set_stock(self, product_id, stock):
        with self.app.app_context():
            db.session.get(Product, product_id).stock = stock
            db.session.commit()

    def get_stock(self, product_id):
        with self.app.app_context():
            return db.session.get(Product, product_id).stock

    def place_order(self, client=None, **kwargs):
        response = (client or self.customer).post('/orders', json=order_payload(**kwargs))
        self.assertEqual(response.status_code, 201, response.get_json())
        return response.get_json()['order']


class TestCreateOrder(OrderTestCase):
    def test_order_is_pending_with_snapshot_total(self):
        order = self.place_order(items=[
            order_item(1, 'Chocolate Dream Cake', quantity=2, price=45.99),
            order_item(3, 'Red Velvet Romance', quantity=1, price=48.99),
        ])

        self.assertEqual(order['status'], 'pending')
        self.assertEqual(order['total'], 140.97)
        self.assertEqual([i['productId'] for i in order['items']], [1, 3])
        self.assertEqual(order['shippingAddress']['zipCode'], '62704')
        self.assertEqual(order['paymentIntentId'], 'pi_mock_1700000000000')

    def test_submitted_price_is_trusted(self):
        order = self.place_order(items=[order_item(1, quantity=1, price=1.5)])
        self.assertEqual(order['total'], 1.5)

    def test_stock_is_decremented(self):
        self.place_order(items=[order_item(1, quantity=4)])
        self.assertEqual(self.get_stock(1), 11)

    def test_stock_never_goes_negative(self):
        self.set_stock(1, 3)
        self.place_order(items=[order_item(1, quantity=5)])
        self.assertEqual(self.get_stock(1), 0)

    def test_missing_product_is_skipped(self):
        order = self.place_order(items=[
            order_item(999, 'Discontinued Cake', quantity=1, price=10),
            order_item(2, 'Vanilla Berry Delight', quantity=2, price=42.99),
        ])
        self.assertEqual(order['total'], 95.98)
        self.assertEqual(self.get_stock(2), 10)

    def test_later_price_change_keeps_order_total(self):
        order = self.place_order(items=[order_item(1, quantity=2, price=45.99)])

        update = {
            'name': 'Chocolate Dream Cake',
            'description': 'Rich, moist chocolate cake with layers of dark chocolate ganache.',
            'price': 10.0,
            'category': 'Chocolate',
            'image': 'https://images.unsplash.com/photo-1578985545062-69928b1d9587',
            'images': [],
            'stock': 15,
        }
        self.assertEqual(self.admin.put('/products/1', json=update).status_code, 200)

        fetched = self.customer.get(f"/orders/{order['id']}").get_json()['order']
        self.assertEqual(fetched['total'], 91.98)
        self.assertEqual(fetched['items'][0]['price'], 45.99)

    def test_requires_login(self):
        response = self.app.test_client().post('/orders', json=order_payload())
        self.assertEqual(response.status_code, 401)

    def test_rejects_empty_items(self):
        response = self.customer.post('/orders', json=order_payload(items=[]))
        self.assertEqual(response.status_code, 400)

    def test_rejects_bad_shipping_address(self):
        payload = order_payload()
        payload['shippingAddress']['zipCode'] = '1234'
        payload['shippingAddress']['phone'] = 'call me'
        response = self.customer.post('/orders', json=payload)
        self.assertEqual(response.status_code, 400)
        fields = {detail['field'] for detail in response.get_json()['details']}
        self.assertEqual(fields, {'shippingAddress.zipCode', 'shippingAddress.phone'})
        self.assertEqual(self.get_stock(1), 15)

    def test_rejects_fractional_cent_price(self):
        response = self.customer.post('/orders', json=order_payload(items=[order_item(1, quantity=3, price=0.333)]))
        self.assertEqual(response.status_code, 400)
        fields = {detail['field'] for detail in response.get_json()['details']}
        self.assertEqual(fields, {'items.0.price'})
        self.assertEqual(self.get_stock(1), 15)

    def test_total_equals_sum_of_stored_lines(self):
        order = self.place_order(items=[order_item(1, quantity=3, price=0.33)])
        self.assertEqual(order['total'], 0.99)
        line_sum = sum(item['price'] * item['quantity'] for item in order['items'])
        self.assertAlmostEqual(order['total'], line_sum, places=2)

    def test_accepts_zip_plus_four(self):
        payload = order_payload()
        payload['shippingAddress']['zipCode'] = '62704-1234'
        response = self.customer.post('/orders', json=payload)
        self.assertEqual(response.status_code, 201)


class TestOrderVisibility(OrderTestCase):
    def test_owner_and_admin_can_read(self):
        order = self.place_order()
        self.assertEqual(self.customer.get(f"/orders/{order['id']}").status_code, 200)
        self.assertEqual(self.admin.get(f"/orders/{order['id']}").status_code, 200)

    def test_other_customer_is_unauthorized(self):
        order = self.place_order()
        other = self.app.test_client()
        register(other, email='sam@mail.com', first_name='Sam', last_name='Sponge')

        response = other.get(f"/orders/{order['id']}")
        self.assertEqual(response.status_code, 401)

    def test_missing_order(self):
        self.assertEqual(self.customer.get('/orders/999').status_code, 404)

    def test_anonymous_listing_is_unauthorized(self):
        self.assertEqual(self.app.test_client().get('/orders').status_code, 401)

    def test_listing_is_scoped_and_newest_first(self):
        first = self.place_order()
        second = self.place_order()
        other = self.app.test_client()
        register(other, email='sam@mail.com', first_name='Sam', last_name='Sponge')
        third = self.place_order(client=other)

        with self.app.app_context():
            base = datetime(2024, 5, 1)
            for offset, order_id in enumerate((first['id'], second['id'], third['id'])):
                db.session.get(Order, order_id).created_at = base + timedelta(hours=offset)
            db.session.commit()

        mine = [o['id'] for o in self.customer.get('/orders').get_json()['orders']]
        self.assertEqual(mine, [second['id'], first['id']])

        everything = [o['id'] for o in self.admin.get('/orders').get_json()['orders']]
        self.assertEqual(everything, [third['id'], second['id'], first['id']])


class TestOrderStatus(OrderTestCase):
    def test_admin_updates_status(self):
        order = self.place_order()
        response = self.admin.put(f"/orders/{order['id']}", json={'status': 'shipped'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['order']['status'], 'shipped')

    def test_any_transition_is_allowed(self):
        order = self.place_order()
        for status in ('delivered', 'pending', 'cancelled', 'processing'):
            response = self.admin.put(f"/orders/{order['id']}", json={'status': status})
            self.assertEqual(response.get_json()['order']['status'], status)

    def test_customer_cannot_update(self):
        order = self.place_order()
        response = self.customer.put(f"/orders/{order['id']}", json={'status': 'delivered'})
        self.assertEqual(response.status_code, 401)

    def test_unknown_status(self):
        order = self.place_order()
        response = self.admin.put(f"/orders/{order['id']}", json={'status': 'lost'})
        self.assertEqual(response.status_code, 400)

    def test_missing_order(self):
        response = self.admin.put('/orders/999', json={'status': 'shipped'})
        self.assertEqual(response.status_code, 404)


if __name__ == '__main__':
    unittest.main()
