"""BDD tests for checkout status and feedback on delivered orders."""

from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, scenarios, then, when
from storefront.checkout.checkout import Checkout
from storefront.checkout.placement import PlaceCheckout
from storefront.checkout.status import UpdateCheckoutStatus
from storefront.feedback.queries import feedback_for_order
from storefront.feedback.submission import SubmitOrderFeedback

scenarios("features/order_feedback.feature")


@given(parsers.cfparse('user "{user_id}" checks out the cart'), target_fixture="checkout_id")
def check_out(user_id):
    return current_domain.process(
        PlaceCheckout(
            user_id=user_id,
            address="12 Harbour Road, Colombo",
            phone_number="0771234567",
            email="bdd@example.com",
        ),
        asynchronous=False,
    )


@given(parsers.cfparse('the checkout is marked "{status}"'))
def mark_checkout(checkout_id, status):
    current_domain.process(UpdateCheckoutStatus(checkout_id=checkout_id, status=status), asynchronous=False)


@when(parsers.cfparse('the checkout is marked "{status}"'))
def try_mark_checkout(checkout_id, error, status):
    try:
        current_domain.process(UpdateCheckoutStatus(checkout_id=checkout_id, status=status), asynchronous=False)
    except ValidationError as exc:
        error["exc"] = exc


@when(parsers.cfparse('user "{user_id}" leaves feedback "{text}" with rating {rating:d}'))
def leave_feedback(checkout_id, error, user_id, text, rating):
    try:
        current_domain.process(
            SubmitOrderFeedback(order_id=checkout_id, user_id=user_id, feedback=text, rating=rating),
            asynchronous=False,
        )
    except ValidationError as exc:
        error["exc"] = exc


@then(parsers.cfparse("the checkout total is {total:f}"))
def checkout_total(checkout_id, total):
    assert current_domain.repository_for(Checkout).get(checkout_id).total_price == total


@then(parsers.cfparse('the checkout status is "{status}"'))
def checkout_status(checkout_id, status):
    assert current_domain.repository_for(Checkout).get(checkout_id).status == status


@then(parsers.cfparse('the feedback fails with "{message}"'))
@then(parsers.cfparse('the status change fails with "{message}"'))
def step_fails(error, message):
    assert error["exc"] is not None
    assert message in str(error["exc"])


@then(parsers.cfparse('the feedback for the order reads "{text}" with rating {rating:d}'))
def feedback_reads(checkout_id, text, rating):
    document = feedback_for_order(checkout_id)
    assert document["feedback"] == text
    assert document["rating"] == rating
