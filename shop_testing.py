"""
Shared fixtures for the storefront tests
"""
from cakeshop import create_app
from cakeshop.config import TestingConfig
from cakeshop.seed import ADMIN_EMAIL, ADMIN_PASSWORD

SHIPPING_ADDRESS = {
    'fullName': 'Jane Baker',
    'address': '12 Frosting Lane',
    'city': 'Springfield',
    'state': 'IL',
    'zipCode': '62704',
    'country': 'US',
    'phone': '+1 (217) 555-0134',
}


def make_app(**overrides):
    """Build an isolated app with its own in-memory store"""
    config = type('TestConfig', (TestingConfig,), overrides)
    return create_app(config)


def register(client, email='jane@mail.com', password='password123', first_name='Jane', last_name='Baker'):
    return client.post('/auth/register', json={
        'email': email,
        'password': password,
        'firstName': first_name,
        'lastName': last_name,
    })


def login(client, email, password):
    return client.post('/auth/login', json={'email': email, 'password': password})


def login_admin(client):
    return login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


def order_item(product_id=1, name='Chocolate Dream Cake', quantity=1, price=45.99):
    return {
        'productId': product_id,
        'productName': name,
        'productImage': 'https://images.unsplash.com/photo-1578985545062-69928b1d9587',
        'quantity': quantity,
        'price': price,
    }


def order_payload(items=None, **overrides):
    payload = {
        'items': items if items is not None else [order_item()],
        'shippingAddress': dict(SHIPPING_ADDRESS),
        'paymentIntentId': 'pi_mock_1700000000000',
    }
    payload.update(overrides)
    return payload
