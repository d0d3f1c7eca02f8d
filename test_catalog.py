#!/usr/bin/env python3
"""
Product catalogue tests: filtering, pagination and admin maintenance
"""
import unittest

from cakeshop import db
from cakeshop.models import Product
from shop_testing import login_admin, make_app, register

NEW_PRODUCT = {
    'name': 'Pistachio Rose Cake',
    'description': 'Pistachio sponge with rosewater buttercream and crushed pistachios.',
    'price': 54.5,
    'category': 'Nut',
    'image': 'https://images.unsplash.com/photo-pistachio?w=800',
    'images': ['https://images.unsplash.com/photo-pistachio?w=800'],
    'stock': 6,
}


class TestCatalogListing(unittest.TestCase):
    def setUp(self):
        self.app = make_app()
        self.client = self.app.test_client()

    def test_default_pagination(self):
        """10 products with a page size of 8 give two pages"""
        response = self.client.get('/products')
        self.assertEqual(response.status_code, 200)
        data = response.get_json()

        self.assertEqual(len(data['products']), 8)
        self.assertEqual(data['pagination'], {'page': 1, 'limit': 8, 'total': 10, 'totalPages': 2})

        second = self.client.get('/products?page=2').get_json()
        self.assertEqual(len(second['products']), 2)
        self.assertEqual([p['name'] for p in second['products']], ['Black Forest Cake', 'Coconut Paradise'])

    def test_category_filter_is_case_insensitive(self):
        for category in ('Chocolate', 'chocolate', 'CHOCOLATE'):
            data = self.client.get(f'/products?category={category}').get_json()
            names = [p['name'] for p in data['products']]
            self.assertEqual(names, ['Chocolate Dream Cake', 'Black Forest Cake'])
            self.assertTrue(all(p['category'] == 'Chocolate' for p in data['products']))
            self.assertEqual(data['pagination']['total'], 2)
            self.assertEqual(data['pagination']['totalPages'], 1)

    def test_category_is_exact_match(self):
        data = self.client.get('/products?category=Choc').get_json()
        self.assertEqual(data['products'], [])
        self.assertEqual(data['pagination']['totalPages'], 0)

    def test_search_matches_name_or_description(self):
        data = self.client.get('/products?search=COCONUT').get_json()
        self.assertEqual([p['name'] for p in data['products']], ['Coconut Paradise'])

        data = self.client.get('/products?search=mascarpone').get_json()
        self.assertEqual([p['name'] for p in data['products']], ['Coffee Tiramisu Cake'])

    def test_category_then_search(self):
        data = self.client.get('/products?category=fruit&search=lemon').get_json()
        self.assertEqual([p['name'] for p in data['products']], ['Lemon Sunshine Cake'])

    def test_search_treats_wildcards_literally(self):
        data = self.client.get('/products?search=%25').get_json()
        self.assertEqual(data['pagination']['total'], 0)

    def test_limit_is_respected(self):
        data = self.client.get('/products?limit=3&page=4').get_json()
        self.assertEqual(len(data['products']), 1)
        self.assertEqual(data['pagination']['totalPages'], 4)

    def test_page_past_the_end_is_empty(self):
        for page in (3, 100000000000000000000):
            response = self.client.get(f'/products?page={page}')
            self.assertEqual(response.status_code, 200)
            data = response.get_json()
            self.assertEqual(data['products'], [])
            self.assertEqual(data['pagination']['page'], page)
            self.assertEqual(data['pagination']['total'], 10)


class TestProductDetail(unittest.TestCase):
    def setUp(self):
        self.app = make_app()
        self.client = self.app.test_client()

    def test_detail_includes_reviews(self):
        response = self.client.get('/products/1')
        self.assertEqual(response.status_code, 200)
        data = response.get_json()

        self.assertEqual(data['product']['name'], 'Chocolate Dream Cake')
        self.assertEqual(data['product']['price'], 45.99)
        self.assertEqual(len(data['product']['images']), 2)
        self.assertEqual([r['userName'] for r in data['reviews']], ['Sarah Johnson', 'Mike Chen'])

    def test_missing_product(self):
        response = self.client.get('/products/999')
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()['error'], 'Product not found')


class TestProductAdministration(unittest.TestCase):
    def setUp(self):
        self.app = make_app()
        self.admin = self.app.test_client()
        login_admin(self.admin)

    def test_admin_creates_product(self):
        response = self.admin.post('/products', json=NEW_PRODUCT)
        self.assertEqual(response.status_code, 201)
        product = response.get_json()['product']
        self.assertEqual(product['name'], 'Pistachio Rose Cake')
        self.assertEqual(product['price'], 54.5)
        self.assertEqual(product['stock'], 6)

        listing = self.admin.get('/products?category=nut').get_json()
        self.assertEqual(listing['pagination']['total'], 1)

    def test_customer_cannot_create_product(self):
        customer = self.app.test_client()
        register(customer)
        response = customer.post('/products', json=NEW_PRODUCT)
        self.assertEqual(response.status_code, 401)

    def test_anonymous_cannot_create_product(self):
        response = self.app.test_client().post('/products', json=NEW_PRODUCT)
        self.assertEqual(response.status_code, 401)

    def test_invalid_product_reports_fields(self):
        payload = dict(NEW_PRODUCT, price=0, stock=-1, image='not a url')
        response = self.admin.post('/products', json=payload)
        self.assertEqual(response.status_code, 400)
        body = response.get_json()
        self.assertEqual(body['error'], 'Invalid input')
        fields = {detail['field'] for detail in body['details']}
        self.assertEqual(fields, {'price', 'stock', 'image'})

    def test_price_must_be_whole_cents(self):
        response = self.admin.post('/products', json=dict(NEW_PRODUCT, price=54.555))
        self.assertEqual(response.status_code, 400)
        self.assertEqual([d['field'] for d in response.get_json()['details']], ['price'])

    def test_image_urls_are_stored_as_submitted(self):
        payload = dict(NEW_PRODUCT, image='https://cakeshop.com', images=['https://cakeshop.com'])
        response = self.admin.post('/products', json=payload)
        self.assertEqual(response.status_code, 201)
        product = response.get_json()['product']
        self.assertEqual(product['image'], 'https://cakeshop.com')
        self.assertEqual(product['images'], ['https://cakeshop.com'])

    def test_update_product(self):
        payload = dict(NEW_PRODUCT, name='Chocolate Dream Cake XL', stock=2)
        response = self.admin.put('/products/1', json=payload)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['product']['name'], 'Chocolate Dream Cake XL')

        with self.app.app_context():
            self.assertEqual(db.session.get(Product, 1).stock, 2)

    def test_update_missing_product(self):
        response = self.admin.put('/products/999', json=NEW_PRODUCT)
        self.assertEqual(response.status_code, 404)

    def test_delete_product(self):
        response = self.admin.delete('/products/2')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.admin.get('/products/2').status_code, 404)
        self.assertEqual(self.admin.get('/products').get_json()['pagination']['total'], 9)


if __name__ == '__main__':
    unittest.main()
