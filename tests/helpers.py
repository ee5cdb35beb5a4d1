from datetime import date

from app.models.location import Location
from app.models.product import Product

PASSWORD = "s3cret-pass"


def add_product(db, producer_id, name="Asparagus", start=date(2024, 6, 3), end=date(2024, 6, 3)):
    product = Product(
        name=name,
        description=f"Fresh {name.lower()}",
        availability_start=start,
        availability_end=end,
        producer_id=producer_id,
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


def add_location(db, producer_id, name="Market hall", address="1 Place du Marché"):
    location = Location(name=name, address=address, producer_id=producer_id)
    db.add(location)
    db.commit()
    db.refresh(location)
    return location


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


def api_signup(client, email, role, full_name=None):
    response = client.post(
        "/auth/signup",
        json={"email": email, "password": PASSWORD, "role": role, "full_name": full_name},
    )
    assert response.status_code == 200, response.text
    return response.json()["access_token"]
