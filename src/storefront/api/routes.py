"""FastAPI routes for products, carts and checkouts.

Each route translates between Pydantic schemas (external contract) and
Protean commands (internal domain concepts). Catalogue writes need an
employee session; the cart and checkout routes address users by id.
"""

import json

from fastapi import APIRouter, Depends, File, Form, UploadFile
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.api.auth import require_employee
from storefront.api.schemas import (
    AddToCartRequest,
    ChangeProductStatusRequest,
    CreateProductRequest,
    StatusResponse,
    UpdateCartQuantityRequest,
    UpdateCheckoutStatusRequest,
    UpdateProductRequest,
)
from storefront.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from storefront.cart.queries import cart_details
from storefront.checkout.placement import PlaceCheckout
from storefront.checkout.queries import checkout_details, list_checkouts
from storefront.checkout.removal import DeleteCheckout
from storefront.checkout.status import UpdateCheckoutStatus
from storefront.identity.caller import Caller
from storefront.product.management import (
    ChangeProductStatus,
    CreateProduct,
    DeleteProduct,
    UpdateProduct,
    load_product,
)
from storefront.product.product import Product

# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/product", tags=["products"])


@product_router.get("")
async def list_products():
    return [p.to_summary() for p in current_domain.repository_for(Product).find_all()]


@product_router.get("/active")
async def list_active_products():
    return [p.to_summary() for p in current_domain.repository_for(Product).find_active()]


@product_router.get("/{product_id}")
async def get_product(product_id: str):
    return load_product(product_id).to_summary()


@product_router.post("", status_code=201)
async def create_product(body: CreateProductRequest, caller: Caller = Depends(require_employee)):
    command = CreateProduct(
        name=body.name,
        description=body.description,
        category=body.category,
        price=body.price,
        quantity=body.quantity or 0,
        status=body.status,
        images=json.dumps(body.images) if body.images else None,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return {
        "success": True,
        "message": "Product created successfully",
        "product": load_product(product_id).to_summary(),
    }


@product_router.put("/{product_id}")
async def update_product(product_id: str, body: UpdateProductRequest, caller: Caller = Depends(require_employee)):
    command = UpdateProduct(
        product_id=product_id,
        changes=json.dumps(body.model_dump(exclude_unset=True)),
    )
    current_domain.process(command, asynchronous=False)
    return {
        "success": True,
        "message": "Product updated successfully",
        "product": load_product(product_id).to_summary(),
    }


@product_router.patch("/status/{product_id}")
async def change_product_status(
    product_id: str,
    body: ChangeProductStatusRequest | None = None,
    caller: Caller = Depends(require_employee),
):
    command = ChangeProductStatus(product_id=product_id, status=body.status if body else None)
    status = current_domain.process(command, asynchronous=False)
    return {"success": True, "message": "Product status updated", "status": status}


@product_router.delete("/delete/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str, caller: Caller = Depends(require_employee)) -> StatusResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return StatusResponse(message="Product deleted successfully")


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("/getcart/{user_id}")
async def get_cart(user_id: str):
    """The resolved cart, or ``null`` when the user has nothing in it."""
    return cart_details(user_id)


@cart_router.post("/add")
async def add_to_cart(body: AddToCartRequest):
    command = AddToCart(
        user_id=body.user_id,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return {"message": "Product added to cart", "cart": cart_details(body.user_id)}


@cart_router.put("/{user_id}/{product_id}")
async def update_cart_quantity(user_id: str, product_id: str, body: UpdateCartQuantityRequest):
    command = UpdateCartQuantity(
        user_id=user_id,
        product_id=product_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return {"message": "Cart updated", "cart": cart_details(user_id)}


@cart_router.delete("/{user_id}/{product_id}")
async def remove_from_cart(user_id: str, product_id: str):
    current_domain.process(RemoveFromCart(user_id=user_id, product_id=product_id), asynchronous=False)
    return {"message": "Item removed from cart", "cart": cart_details(user_id)}


# ---------------------------------------------------------------------------
# Checkout
# ---------------------------------------------------------------------------
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])


@checkout_router.post("/checkout", status_code=201)
async def place_checkout(
    user_id: str | None = Form(None, alias="userId"),
    address: str | None = Form(None),
    phone_number: str | None = Form(None, alias="phoneNumber"),
    email: str | None = Form(None),
    items: str | None = Form(None),
    total_price: float | None = Form(None, alias="totalPrice", ge=0),
    receipt: UploadFile | str | None = File(None),
):
    """Place a checkout from a multipart form.

    ``items`` is a JSON array of cart lines; omit it to use the saved cart.
    ``receipt`` is either an uploaded file, of which only the name is kept,
    or a reference string such as a URL.
    """
    command = PlaceCheckout(
        user_id=user_id,
        address=address,
        phone_number=phone_number,
        email=email,
        items=items or None,
        total_price=total_price,
        receipt=receipt.filename if isinstance(receipt, UploadFile) else receipt or None,
    )
    checkout_id = current_domain.process(command, asynchronous=False)
    return {"message": "Checkout created successfully", "checkout": checkout_details(checkout_id)}


@checkout_router.get("")
async def get_checkouts():
    return list_checkouts()


@checkout_router.get("/{checkout_id}")
async def get_checkout(checkout_id: str):
    try:
        return checkout_details(checkout_id)
    except ObjectNotFoundError:
        raise ObjectNotFoundError({"checkout_id": ["Checkout not found"]}) from None


@checkout_router.patch("/{checkout_id}/status")
async def update_checkout_status(checkout_id: str, body: UpdateCheckoutStatusRequest):
    command = UpdateCheckoutStatus(checkout_id=checkout_id, status=body.status)
    try:
        status = current_domain.process(command, asynchronous=False)
    except ObjectNotFoundError:
        raise ObjectNotFoundError({"checkout_id": ["Checkout not found"]}) from None
    return {"message": "Status updated successfully", "checkout": {"id": checkout_id, "status": status}}


@checkout_router.delete("/{checkout_id}", response_model=StatusResponse)
async def delete_checkout(checkout_id: str) -> StatusResponse:
    try:
        current_domain.process(DeleteCheckout(checkout_id=checkout_id), asynchronous=False)
    except ObjectNotFoundError:
        raise ObjectNotFoundError({"checkout_id": ["Checkout not found"]}) from None
    return StatusResponse(message="Checkout deleted successfully")
