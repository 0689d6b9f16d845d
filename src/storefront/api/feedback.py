"""FastAPI routes for customer feedback.

Static paths are declared before ``/{feedback_id}`` so they are not
swallowed by it.
"""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.auth import current_caller, require_user
from storefront.api.schemas import (
    FeedbackRequest,
    StatusResponse,
    SubmitOrderFeedbackRequest,
    UpdateOrderFeedbackRequest,
)
from storefront.feedback.editing import EditFeedback, UpdateOrderFeedback
from storefront.feedback.queries import (
    all_feedback,
    average_rating,
    feedback_by_id,
    feedback_for_order,
    feedback_for_product,
    feedback_for_user,
    recent_feedback,
)
from storefront.feedback.removal import DeleteAnyFeedback, DeleteFeedback
from storefront.feedback.submission import AddFeedback, SubmitOrderFeedback
from storefront.identity.caller import Caller

feedback_router = APIRouter(prefix="/feedback", tags=["feedback"])


# ---------------------------------------------------------------------------
# Order feedback
# ---------------------------------------------------------------------------
@feedback_router.post("/add/{order_id}", status_code=201)
async def submit_order_feedback(order_id: str, body: SubmitOrderFeedbackRequest):
    command = SubmitOrderFeedback(
        order_id=order_id,
        user_id=body.user_id,
        feedback=body.feedback,
        rating=body.rating,
    )
    feedback_id = current_domain.process(command, asynchronous=False)
    return {"message": "Feedback submitted successfully", "feedback": feedback_by_id(feedback_id)}


@feedback_router.get("/order/{order_id}")
async def get_order_feedback(order_id: str):
    return feedback_for_order(order_id)


@feedback_router.patch("/update/{order_id}")
async def update_order_feedback(order_id: str, body: UpdateOrderFeedbackRequest):
    command = UpdateOrderFeedback(order_id=order_id, feedback=body.feedback, rating=body.rating)
    feedback_id = current_domain.process(command, asynchronous=False)
    return {"message": "Feedback updated successfully", "feedback": feedback_by_id(feedback_id)}


@feedback_router.delete("/order/{order_id}", response_model=StatusResponse)
async def delete_order_feedback(order_id: str, caller: Caller = Depends(require_user)) -> StatusResponse:
    command = DeleteFeedback(
        order_id=order_id,
        requested_by=caller.user_id,
        requested_by_admin=caller.is_admin,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse(message="Feedback deleted successfully")


# ---------------------------------------------------------------------------
# General feedback
# ---------------------------------------------------------------------------
@feedback_router.post("/add", status_code=201)
async def add_feedback(body: FeedbackRequest, caller: Caller = Depends(require_user)):
    command = AddFeedback(
        user_id=caller.user_id,
        user_name=caller.user_name,
        rating=body.rating,
        comment=body.comment,
    )
    feedback_id = current_domain.process(command, asynchronous=False)
    return {"success": True, "message": "Feedback added successfully", "feedback": feedback_by_id(feedback_id)}


@feedback_router.put("/edit/{feedback_id}")
async def edit_feedback(feedback_id: str, body: FeedbackRequest, caller: Caller = Depends(require_user)):
    command = EditFeedback(
        feedback_id=feedback_id,
        requested_by=caller.user_id,
        requested_by_admin=caller.is_admin,
        rating=body.rating,
        comment=body.comment,
    )
    current_domain.process(command, asynchronous=False)
    return {"success": True, "message": "Feedback updated successfully", "feedback": feedback_by_id(feedback_id)}


@feedback_router.delete("/delete/{feedback_id}", response_model=StatusResponse)
async def delete_feedback(feedback_id: str, caller: Caller = Depends(require_user)) -> StatusResponse:
    command = DeleteFeedback(
        feedback_id=feedback_id,
        requested_by=caller.user_id,
        requested_by_admin=caller.is_admin,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse(message="Feedback deleted successfully")


# ---------------------------------------------------------------------------
# Listings
# ---------------------------------------------------------------------------
@feedback_router.get("")
async def get_all_feedback():
    """Moderation view with authors and orders resolved."""
    return all_feedback()


@feedback_router.get("/all")
async def get_recent_feedback():
    return recent_feedback()


@feedback_router.get("/average")
async def get_average_rating():
    return average_rating()


@feedback_router.get("/product/{product_id}")
async def get_product_feedback(product_id: str):
    return feedback_for_product(product_id)


@feedback_router.get("/user/{user_id}")
async def get_user_feedback(user_id: str):
    return feedback_for_user(user_id)


@feedback_router.get("/{feedback_id}")
async def get_feedback(feedback_id: str):
    return feedback_by_id(feedback_id)


@feedback_router.delete("/{feedback_id}")
async def delete_any_feedback(feedback_id: str, caller: Caller = Depends(current_caller)):
    """Moderation delete; the caller must hold the administrator capability."""
    command = DeleteAnyFeedback(
        feedback_id=feedback_id,
        requested_by=caller.user_id,
        requested_by_admin=caller.is_admin,
    )
    document = current_domain.process(command, asynchronous=False)
    return {"message": "Feedback deleted successfully", "feedback": document}
