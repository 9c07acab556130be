"""User sync API routes."""
import logging
from fastapi import APIRouter, BackgroundTasks, Depends, Request
from user_sync.api.auth import verify_api_key
from user_sync.database import get_datastore
from user_sync.datastore import BaseDatastore
from user_sync.exceptions import ServiceError, UnexpectedError
from user_sync.schemas.user import ErrorResponse, StoreUserRequest, StoreUserResponse
from user_sync.services import user_service

logger = logging.getLogger(__name__)

router = APIRouter()


async def get_store_user_request(request: Request) -> StoreUserRequest:
    """Read the JSON body; a missing, malformed or non-object body counts as empty."""
    try:
        body = await request.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    return StoreUserRequest.model_validate(body)


@router.post(
    "/store-user",
    response_model=StoreUserResponse,
    dependencies=[Depends(verify_api_key)],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": StoreUserRequest.model_json_schema()}},
        },
    },
)
async def store_user(
    background_tasks: BackgroundTasks,
    data: StoreUserRequest = Depends(get_store_user_request),
    db: BaseDatastore = Depends(get_datastore),
):
    """Create or update a user and record the login."""
    try:
        message, user = await user_service.store_user(db, data)
    except ServiceError:
        raise
    except Exception as e:
        logger.exception("Server error processing user data")
        raise UnexpectedError(details=str(e)) from e
    
    background_tasks.add_task(user_service.record_login, db, data.email, data)
    return StoreUserResponse(message=message, user=user)
