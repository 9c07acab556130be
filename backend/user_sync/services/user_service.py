"""User sync service.

``store_user`` makes sure the latest profile of a user is stored in the
``users`` table; ``record_login`` appends the matching ``user_logins`` row.
Login history is diagnostic only, so ``record_login`` never raises.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple
from user_sync.datastore import BaseDatastore
from user_sync.exceptions import DatastoreError, ValidationError
from user_sync.schemas.user import StoreUserRequest

logger = logging.getLogger(__name__)

USERS_TABLE = "users"
LOGINS_TABLE = "user_logins"

USER_CREATED = "User created successfully"
USER_UPDATED = "User updated successfully"

# Written on update only when a non-empty value was sent
OPTIONAL_UPDATE_FIELDS = ("app_version", "timezone", "document_info")
# Written on update whenever the key was sent, even as null
PROFILE_FIELDS = ("name", "picture")


def utc_now() -> str:
    """Current time as an ISO-8601 UTC string, e.g. 2024-05-01T10:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def is_blank(value: Any) -> bool:
    """Null, empty strings and zero count as not sent; empty objects do not."""
    if value is None or value == "":
        return True
    return isinstance(value, (int, float)) and not value


def _or_null(value: Any) -> Any:
    """Blank values are stored as explicit nulls."""
    return None if is_blank(value) else value


async def find_user(db: BaseDatastore, email: str) -> Optional[Dict[str, Any]]:
    """Get the id and email of the user with the given email."""
    try:
        rows = await db.select(USERS_TABLE, columns="id, email", filters={"email": email}, limit=1)
    except DatastoreError as e:
        logger.error("Error checking for existing user: %s", e.details)
        raise DatastoreError("Database query error", details=e.details, code=e.code) from e
    return rows[0] if rows else None


def build_update(data: StoreUserRequest) -> Dict[str, Any]:
    """Values written to an existing user; omitted fields keep their stored value."""
    values: Dict[str, Any] = {}
    for field in PROFILE_FIELDS:
        if field in data.model_fields_set:
            values[field] = getattr(data, field)
    values["last_login"] = utc_now()
    for field in OPTIONAL_UPDATE_FIELDS:
        value = getattr(data, field)
        if not is_blank(value):
            values[field] = value
    return values


def build_new_user(data: StoreUserRequest) -> Dict[str, Any]:
    """Row inserted for a first sighting; omitted fields are stored as null.

    ``id`` is left out when no ``user_id`` was sent so the column default applies.
    """
    now = utc_now()
    row: Dict[str, Any] = {}
    if not is_blank(data.user_id):
        row["id"] = data.user_id
    row.update({
        "email": data.email,
        "name": _or_null(data.name),
        "picture": _or_null(data.picture),
        "created_at": now if is_blank(data.install_date) else data.install_date,
        "last_login": now,
        "app_version": _or_null(data.app_version),
        "timezone": _or_null(data.timezone),
        "document_info": _or_null(data.document_info),
        "installation_source": _or_null(data.installation_source),
    })
    return row


async def update_user(
    db: BaseDatastore,
    user_id: Any,
    data: StoreUserRequest,
) -> Dict[str, Any]:
    """Update an existing user by id and return the stored row."""
    try:
        rows = await db.update(USERS_TABLE, build_update(data), filters={"id": user_id})
    except DatastoreError as e:
        logger.error("Error updating user %s: %s", user_id, e.details)
        raise DatastoreError("Error updating user", details=e.details, code=e.code) from e
    if not rows:
        logger.error("Update of user %s returned no rows", user_id)
        raise DatastoreError("Error updating user", details="User not found")
    return rows[0]


async def create_user(db: BaseDatastore, data: StoreUserRequest) -> Dict[str, Any]:
    """Insert a new user and return the stored row."""
    row = build_new_user(data)
    rows = await db.insert(USERS_TABLE, [row])
    return rows[0] if rows else row


async def store_user(
    db: BaseDatastore,
    data: StoreUserRequest,
) -> Tuple[str, Dict[str, Any]]:
    """
    Create or update the user identified by ``data.email``.
    
    Returns: (message, stored user row)
    Raises: ValidationError when email is missing, DatastoreError when the
    existence check, the insert or the update fails.
    """
    if not isinstance(data.email, str) or not data.email:
        raise ValidationError("Email is required")

    logger.debug("Received user data: %s", data.model_dump(exclude_unset=True))
    
    existing = await find_user(db, data.email)
    if existing:
        user = await update_user(db, existing["id"], data)
        return USER_UPDATED, user
    
    try:
        user = await create_user(db, data)
    except DatastoreError as e:
        if e.is_unique_violation:
            # Another request created the same email between our check and insert
            logger.warning("User %s was created concurrently, updating instead", data.email)
            existing = await find_user(db, data.email)
            if existing:
                user = await update_user(db, existing["id"], data)
                return USER_UPDATED, user
        logger.error("Error inserting user: %s", e.details)
        raise DatastoreError("Error creating user", details=e.details, code=e.code) from e
    
    return USER_CREATED, user


async def record_login(db: BaseDatastore, email: str, data: StoreUserRequest) -> None:
    """Append a login event for ``email``. Failures are logged, never raised."""
    row = {
        "email": email,
        "login_time": utc_now(),
        "document_info": _or_null(data.document_info),
        "app_version": _or_null(data.app_version),
    }
    try:
        await db.insert(LOGINS_TABLE, [row], returning=False)
    except DatastoreError as e:
        logger.error("Error logging user login for %s: %s", email, e.details)
    except Exception:
        logger.exception("Error in record_login for %s", email)
