def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register(client, name: str, email: str, password: str = "pw123456") -> dict:
    response = client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()


def login(client, email: str, password: str = "pw123456") -> dict:
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()


def order_payload(**overrides) -> dict:
    """Two line items: 1 x 10 and 2 x 5, total 20"""
    payload = {
        "items": [
            {"product_id": "1", "name": "Premium Wireless Headphones", "price": 10,
             "quantity": 1, "image": "https://example.com/1.jpg", "category": "Electronics"},
            {"product_id": "2", "name": "Designer Leather Watch", "price": 5,
             "quantity": 2, "image": "https://example.com/2.jpg", "category": "Accessories"},
        ],
        "total": 20,
        "shipping_address": {
            "type": "home",
            "street": "221B Baker Street",
            "city": "Mumbai",
            "state": "Maharashtra",
            "zip": "400001",
            "country": "India",
        },
        "payment_method": "cod",
    }
    payload.update(overrides)
    return payload


def place_order(client, headers: dict, **overrides) -> dict:
    response = client.post("/api/orders", json=order_payload(**overrides), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["order"]
