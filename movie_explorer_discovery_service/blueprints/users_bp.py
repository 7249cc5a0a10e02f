"""User sync and billing endpoints, called by the identity provider and billing webhooks."""
import azure.functions as func
import logging

from movie_explorer_discovery_service.blueprints.http_utils import (
    error_response,
    exception_response,
    json_body,
    json_response,
)
from movie_explorer_discovery_service.blueprints.request_models import (
    StripeCustomerRequest,
    SubscriptionUpdateRequest,
    UserSyncRequest,
)
from movie_explorer_discovery_service.models.database import SessionLocal
from movie_explorer_discovery_service.repos import UserRepository

bp = func.Blueprint()

logger = logging.getLogger(__name__)


@bp.route(route="users/sync", methods=["POST"], auth_level=func.AuthLevel.FUNCTION)
def sync_user(req: func.HttpRequest) -> func.HttpResponse:
    """Create the user on first sight, otherwise update their profile."""
    try:
        body = UserSyncRequest.model_validate(json_body(req))
    except ValueError as e:
        return error_response(str(e), 400)

    db = SessionLocal()
    try:
        repo = UserRepository(db)
        if repo.get_by_clerk_id(body.clerk_id) is None:
            user = repo.create_user(
                clerk_id=body.clerk_id,
                email=body.email,
                name=body.name,
                image_url=body.image_url
            )
            return json_response(user.to_dict(), status_code=201)

        user = repo.update_user(body.clerk_id, name=body.name, image_url=body.image_url)
        return json_response(user.to_dict())
    except Exception as e:
        return exception_response(e, f"syncing user {body.clerk_id}")
    finally:
        db.close()


@bp.route(route="users/{clerk_id}", methods=["DELETE"], auth_level=func.AuthLevel.FUNCTION)
def delete_user(req: func.HttpRequest) -> func.HttpResponse:
    """Delete a user with their favorites, watchlist and discovery history."""
    clerk_id = req.route_params.get('clerk_id')
    if not clerk_id:
        return error_response("clerk_id is required", 400)

    db = SessionLocal()
    try:
        deleted = UserRepository(db).delete_user(clerk_id)
        return json_response({"clerk_id": clerk_id, "deleted": deleted})
    except Exception as e:
        return exception_response(e, f"deleting user {clerk_id}")
    finally:
        db.close()


@bp.route(route="users/{clerk_id}/stripe-customer", methods=["POST"], auth_level=func.AuthLevel.FUNCTION)
def set_stripe_customer(req: func.HttpRequest) -> func.HttpResponse:
    """Attach a billing customer id to a user."""
    clerk_id = req.route_params.get('clerk_id')
    if not clerk_id:
        return error_response("clerk_id is required", 400)

    try:
        body = StripeCustomerRequest.model_validate(json_body(req))
    except ValueError as e:
        return error_response(str(e), 400)

    db = SessionLocal()
    try:
        user = UserRepository(db).set_stripe_customer_id(clerk_id, body.stripe_customer_id)
        return json_response(user.to_dict())
    except Exception as e:
        return exception_response(e, f"setting billing customer for user {clerk_id}")
    finally:
        db.close()


@bp.route(route="billing/subscription", methods=["POST"], auth_level=func.AuthLevel.FUNCTION)
def update_subscription(req: func.HttpRequest) -> func.HttpResponse:
    """Apply a subscription change forwarded by the billing webhook."""
    try:
        body = SubscriptionUpdateRequest.model_validate(json_body(req))
    except ValueError as e:
        return error_response(str(e), 400)

    db = SessionLocal()
    try:
        user = UserRepository(db).set_premium_status(
            body.stripe_customer_id,
            body.stripe_subscription_id,
            body.is_premium
        )
        return json_response(user.to_dict())
    except Exception as e:
        return exception_response(e, f"updating subscription for customer {body.stripe_customer_id}")
    finally:
        db.close()
