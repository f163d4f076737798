import logging
from datetime import timedelta
from typing import Optional, Tuple

import bcrypt
import jwt
from bson import ObjectId
from fastapi import Depends, Request
from pymongo.errors import DuplicateKeyError, PyMongoError
from starlette.concurrency import run_in_threadpool

from app import config
from app.db import get_users_collection
from app.errors import AuthError, PersistenceError, ValidationError
from app.models import UserPublic, utcnow

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=config.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


def create_token(user_id: str) -> str:
    payload = {
        "userId": user_id,
        "exp": utcnow() + timedelta(days=config.TOKEN_TTL_DAYS),
    }
    return jwt.encode(payload, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


def decode_token(token: str) -> Optional[str]:
    """Return the user id carried by a valid, unexpired token."""
    try:
        payload = jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
    except jwt.PyJWTError:
        return None
    return payload.get("userId")


def _public_user(doc: dict) -> UserPublic:
    return UserPublic(
        id=str(doc["_id"]),
        name=doc["name"],
        email=doc["email"],
        created_at=doc["createdAt"],
        updated_at=doc["updatedAt"],
    )


async def create_user(users_col, name: str, email: str, password: str) -> Tuple[UserPublic, str]:
    email = email.strip().lower()
    try:
        if await users_col.find_one({"email": email}):
            raise ValidationError("User with this email already exists")

        now = utcnow()
        doc = {
            "name": name,
            "email": email,
            "password": await run_in_threadpool(hash_password, password),
            "createdAt": now,
            "updatedAt": now,
        }
        result = await users_col.insert_one(doc)
    except DuplicateKeyError:
        raise ValidationError("User with this email already exists") from None
    except PyMongoError as e:
        logger.error("Error creating user %s: %s", email, e)
        raise PersistenceError("Failed to create user") from e

    doc["_id"] = result.inserted_id
    logger.info("Created user %s", result.inserted_id)
    return _public_user(doc), create_token(str(result.inserted_id))


async def authenticate_user(users_col, email: str, password: str) -> Tuple[UserPublic, str]:
    try:
        doc = await users_col.find_one({"email": email.strip().lower()})
    except PyMongoError as e:
        logger.error("Error authenticating user: %s", e)
        raise PersistenceError("Authentication failed") from e

    if not doc or not doc.get("password"):
        raise AuthError("Invalid email or password")
    if not await run_in_threadpool(verify_password, password, doc["password"]):
        raise AuthError("Invalid email or password")
    return _public_user(doc), create_token(str(doc["_id"]))


async def get_user_from_token(users_col, token: str) -> Optional[UserPublic]:
    user_id = decode_token(token)
    if not user_id or not ObjectId.is_valid(user_id):
        return None
    try:
        doc = await users_col.find_one({"_id": ObjectId(user_id)})
    except PyMongoError as e:
        logger.error("Error getting user from token: %s", e)
        raise PersistenceError("Failed to load user") from e
    return _public_user(doc) if doc else None


async def get_current_user(request: Request, users_col=Depends(get_users_collection)) -> UserPublic:
    token = request.cookies.get(config.COOKIE_NAME)
    if not token:
        raise AuthError("Authentication required")
    user = await get_user_from_token(users_col, token)
    if user is None:
        raise AuthError("Invalid token")
    return user
