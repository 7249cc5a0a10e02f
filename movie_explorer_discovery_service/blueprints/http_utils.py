"""Response and parameter helpers shared by the HTTP blueprints."""
import json
import logging
from typing import Any, Optional

import azure.functions as func

from movie_explorer_discovery_service.exceptions import (
    AttributionNotFoundError,
    ConfigurationError,
    FetchError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


def json_response(body: Any, status_code: int = 200) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps(body, default=str),  # default=str handles datetime
        status_code=status_code,
        mimetype="application/json"
    )


def error_response(message: str, status_code: int) -> func.HttpResponse:
    return json_response({"error": message}, status_code=status_code)


def exception_response(error: Exception, action: str) -> func.HttpResponse:
    """Map a service error to its HTTP response; anything unexpected is a logged 500."""
    if isinstance(error, (AttributionNotFoundError, NotFoundError)):
        return error_response(str(error), 404)
    if isinstance(error, FetchError):
        logger.warning(f"Error {action}: {error}")
        return error_response("Movie data source unavailable", 502)
    if isinstance(error, ConfigurationError):
        logger.error(f"Configuration error {action}: {error}")
        return error_response("Service is not configured", 500)

    logger.error(f"Error {action}: {str(error)}", exc_info=True)
    return error_response("Internal server error", 500)


def route_int(req: func.HttpRequest, name: str) -> int:
    """Read an integer route parameter, raising ValueError with a client-facing message."""
    value = req.route_params.get(name)
    if not value:
        raise ValueError(f"{name} is required")
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer") from None


def query_int(req: func.HttpRequest, name: str, default: Optional[int] = None) -> Optional[int]:
    """Read an optional integer query parameter."""
    value = req.params.get(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer") from None


def json_body(req: func.HttpRequest) -> dict:
    """Decode the JSON request body, raising ValueError when it is missing or not an object."""
    try:
        body = req.get_json()
    except ValueError:
        raise ValueError("Request body must be valid JSON") from None
    if not isinstance(body, dict):
        raise ValueError("Request body must be a JSON object")
    return body
