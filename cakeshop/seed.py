"""
Sample catalogue, reviews and the admin account loaded into an empty store
"""
import logging
from datetime import datetime
from decimal import Decimal

from cakeshop.models import Product, Review, User, UserRole

logger = logging.getLogger(__name__)

ADMIN_EMAIL = 'admin@cakeshop.com'
ADMIN_PASSWORD = 'admin123'

SAMPLE_PRODUCTS = [
    {
        'name': 'Chocolate Dream Cake',
        'description': 'Rich, moist chocolate cake with layers of dark chocolate ganache and chocolate buttercream. Perfect for chocolate lovers!',
        'price': '45.99',
        'category': 'Chocolate',
        'image': 'https://images.unsplash.com/photo-1578985545062-69928b1d9587?w=800&q=80',
        'images': [
            'https://images.unsplash.com/photo-1578985545062-69928b1d9587?w=800&q=80',
            'https://images.unsplash.com/photo-1606890737304-57a1ca8a5b62?w=800&q=80',
        ],
        'stock': 15,
    },
    {
        'name': 'Vanilla Berry Delight',
        'description': 'Light and fluffy vanilla sponge cake layered with fresh berries and cream cheese frosting.',
        'price': '42.99',
        'category': 'Fruit',
        'image': 'https://images.unsplash.com/photo-1565958011703-44f9829ba187?w=800&q=80',
        'stock': 12,
    },
    {
        'name': 'Red Velvet Romance',
        'description': 'Classic red velvet cake with tangy cream cheese frosting. A timeless favorite!',
        'price': '48.99',
        'category': 'Classic',
        'image': 'https://images.unsplash.com/photo-1586985289688-ca3cf47d3e6e?w=800&q=80',
        'stock': 10,
    },
    {
        'name': 'Lemon Sunshine Cake',
        'description': 'Zesty lemon cake with lemon curd filling and light lemon buttercream. Refreshing and delicious!',
        'price': '41.99',
        'category': 'Fruit',
        'image': 'https://images.unsplash.com/photo-1519915212116-7cfef71f1d3e?w=800&q=80',
        'stock': 18,
    },
    {
        'name': 'Caramel Heaven',
        'description': 'Decadent caramel cake with salted caramel drizzle and caramel buttercream frosting.',
        'price': '49.99',
        'category': 'Caramel',
        'image': 'https://images.unsplash.com/photo-1558618666-fcd25c85cd64?w=800&q=80',
        'stock': 8,
    },
    {
        'name': 'Strawberry Shortcake',
        'description': 'Classic strawberry shortcake with fresh strawberries and whipped cream.',
        'price': '39.99',
        'category': 'Fruit',
        'image': 'https://images.unsplash.com/photo-1565299624946-b28f40a0ae38?w=800&q=80',
        'stock': 20,
    },
    {
        'name': 'Coffee Tiramisu Cake',
        'description': 'Italian-inspired tiramisu cake with espresso-soaked layers and mascarpone frosting.',
        'price': '52.99',
        'category': 'Coffee',
        'image': 'https://images.unsplash.com/photo-1571115177098-24ec42ed204d?w=800&q=80',
        'stock': 9,
    },
    {
        'name': 'Funfetti Celebration',
        'description': 'Colorful vanilla cake with rainbow sprinkles and vanilla buttercream. Perfect for celebrations!',
        'price': '38.99',
        'category': 'Classic',
        'image': 'https://images.unsplash.com/photo-1535141192574-5d4897c12636?w=800&q=80',
        'stock': 25,
    },
    {
        'name': 'Black Forest Cake',
        'description': 'Traditional German chocolate cake with cherry filling and whipped cream.',
        'price': '46.99',
        'category': 'Chocolate',
        'image': 'https://images.unsplash.com/photo-1606313564200-e75d5e30476c?w=800&q=80',
        'stock': 11,
    },
    {
        'name': 'Coconut Paradise',
        'description': 'Tropical coconut cake with coconut cream filling and toasted coconut flakes.',
        'price': '44.99',
        'category': 'Tropical',
        'image': 'https://images.unsplash.com/photo-1621303837174-89787a7d4729?w=800&q=80',
        'stock': 14,
    },
]

# (product index, reviewer, rating, comment, written on)
SAMPLE_REVIEWS = [
    (0, 'Sarah Johnson', 5, 'Absolutely delicious! The chocolate is rich and not too sweet.', datetime(2024, 1, 15)),
    (0, 'Mike Chen', 4, 'Great cake, but a bit pricey. Worth it for special occasions!', datetime(2024, 2, 1)),
    (1, 'Emily Davis', 5, 'The berries were so fresh and the frosting was perfect!', datetime(2024, 1, 20)),
]


def seed_sample_data(session):
    """Load the sample data unless the store already holds products"""
    if session.query(Product).count() > 0:
        logger.info('Store already populated, skipping sample data')
        return

    products = []
    for data in SAMPLE_PRODUCTS:
        product = Product(
            name=data['name'],
            description=data['description'],
            price=Decimal(data['price']),
            category=data['category'],
            image_url=data['image'],
            images=data.get('images', [data['image']]),
            stock=data['stock'],
        )
        session.add(product)
        products.append(product)
    session.flush()

    for index, user_name, rating, comment, created_at in SAMPLE_REVIEWS:
        session.add(Review(
            product_id=products[index].id,
            user_name=user_name,
            rating=rating,
            comment=comment,
            created_at=created_at,
        ))

    if session.query(User).filter_by(email=ADMIN_EMAIL).first() is None:
        admin = User(
            email=ADMIN_EMAIL,
            first_name='Admin',
            last_name='User',
            role=UserRole.ADMIN.value,
        )
        admin.set_password(ADMIN_PASSWORD)
        session.add(admin)

    session.commit()
    logger.info(f'Seeded {len(products)} products and {len(SAMPLE_REVIEWS)} reviews')
