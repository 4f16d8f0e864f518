"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the storefront's validation rules
and match the field names expected by the API's Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()

CATEGORIES = [
    "smartphones",
    "laptops",
    "tablets",
    "headphones",
    "cameras",
    "gaming",
    "smartwatches",
    "accessories",
    "speakers",
    "home-appliances",
]
BRANDS = ["Apple", "Samsung", "Google", "Sony", "Dell", "Lenovo", "Bose", "Canon", "Nintendo", "Garmin"]
PAYMENT_METHODS = ["card", "paypal", "stripe", "cash_on_delivery"]


# ---------- Identity headers ----------


def customer_headers(user_id: str | None = None) -> dict:
    """Headers the upstream gateway would forward for a signed-in customer."""
    return {
        "X-User-Id": user_id or f"cust-lt-{uuid.uuid4().hex[:8]}",
        "X-User-Email": fake.email(),
        "X-User-Name": fake.name()[:100],
    }


def admin_headers() -> dict:
    return {"X-User-Id": "admin-loadtest", "X-User-Role": "admin", "X-User-Email": "ops@electrostore.example"}


# ---------- Catalogue ----------


def valid_sku(prefix: str = "LT") -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8].upper()}"


def image_data() -> dict:
    return {"url": f"https://cdn.example.com/{uuid.uuid4().hex[:12]}.jpg", "alt_text": fake.sentence(nb_words=3)[:255]}


def product_data(stock: int | None = None, sku: str | None = None) -> dict:
    """Generate a CreateProductRequest payload."""
    brand = random.choice(BRANDS)
    price = round(random.uniform(19.0, 2499.0), 2)
    discounted = random.random() < 0.3
    return {
        "name": f"{brand} {fake.word().capitalize()} {random.randint(2, 20)}"[:100],
        "description": fake.paragraph(nb_sentences=3),
        "short_description": fake.sentence(nb_words=8)[:200],
        "price": price,
        "discount_price": round(price * random.uniform(0.7, 0.95), 2) if discounted else None,
        "category": random.choice(CATEGORIES),
        "subcategory": fake.word()[:100],
        "brand": brand,
        "model": f"{brand[:2].upper()}-{random.randint(100, 999)}",
        "sku": sku or valid_sku("PROD"),
        "images": [image_data() for _ in range(random.randint(1, 3))],
        "stock": stock if stock is not None else random.randint(50, 500),
        "featured": random.random() < 0.1,
        "trending": random.random() < 0.1,
        "best_seller": random.random() < 0.1,
    }


def product_update_data() -> dict:
    """Generate an UpdateProductRequest payload that never breaks the discount rule."""
    return {
        "short_description": fake.sentence(nb_words=8)[:200],
        "featured": random.random() < 0.2,
        "remove_discount": random.random() < 0.5,
    }


def review_data() -> dict:
    return {"rating": random.randint(1, 5), "comment": fake.sentence(nb_words=15)[:500]}


# ---------- Ordering ----------


def shipping_address() -> dict:
    return {
        "full_name": fake.name()[:100],
        "phone": f"+1-{random.randint(200, 999)}-{random.randint(200, 999)}-{random.randint(1000, 9999)}",
        "address": fake.street_address()[:255],
        "city": fake.city()[:100],
        "state": fake.state_abbr(),
        "zip_code": fake.zipcode()[:20],
        "country": "United States",
    }


def order_data(product_ids: list[str], max_quantity: int = 3) -> dict:
    """Generate a PlaceOrderRequest payload for the given products."""
    return {
        "items": [{"product_id": pid, "quantity": random.randint(1, max_quantity)} for pid in product_ids],
        "shipping_address": shipping_address(),
        "payment_info": {"method": random.choice(PAYMENT_METHODS), "status": "pending"},
        "tax_price": round(random.uniform(0, 50), 2),
        "shipping_price": random.choice([0.0, 4.99, 9.99]),
        "discount_amount": 0.0,
        "order_notes": fake.sentence(nb_words=6) if random.random() < 0.2 else None,
    }


def cancellation_reason() -> str:
    return random.choice(["Changed my mind", "Found a better price", "Ordered by mistake", "Delivery too slow"])


def tracking_number() -> str:
    return f"1Z{uuid.uuid4().hex[:16].upper()}"
