# storefront/product_service/main.py
from fastapi import FastAPI, HTTPException

app = FastAPI(title="Product Service (dev catalog)")


CATEGORIES = {
    1: {"id": 1, "name": "Peripherals"},
    2: {"id": 2, "name": "Displays"},
}

PRODUCTS = {
    1: {"id": 1, "title": "Keyboard", "price": 10.00, "category_id": 1},
    2: {"id": 2, "title": "Mouse", "price": 49.50, "category_id": 1},
    3: {"id": 3, "title": "Monitor", "price": 15.00, "category_id": 2},
}


@app.get("/products")
def list_products(category_id: int | None = None):
    products = PRODUCTS.values()
    if category_id is not None:
        products = [p for p in products if p["category_id"] == category_id]
    return list(products)


@app.get("/products/{product_id}")
def get_product(product_id: int):
    product = PRODUCTS.get(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@app.get("/categories")
def list_categories():
    return list(CATEGORIES.values())


@app.get("/categories/{category_id}")
def get_category(category_id: int):
    category = CATEGORIES.get(category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category
