import logging
from typing import List, Optional

from bson import ObjectId
from pymongo.errors import PyMongoError

from app.errors import PersistenceError
from app.models import Analysis, utcnow

logger = logging.getLogger(__name__)


def _object_id(analysis_id: str) -> Optional[ObjectId]:
    return ObjectId(analysis_id) if ObjectId.is_valid(analysis_id) else None


def _to_analysis(doc: dict) -> Analysis:
    doc["_id"] = str(doc["_id"])
    return Analysis.model_validate(doc)


async def save_analysis(analyses_col, analysis: Analysis) -> str:
    """Insert a finished analysis and return its new id."""
    analysis.created_at = analysis.updated_at = utcnow()
    doc = analysis.model_dump(by_alias=True, exclude={"id"})
    try:
        result = await analyses_col.insert_one(doc)
    except PyMongoError as e:
        logger.error("Error saving analysis: %s", e)
        raise PersistenceError("Failed to save analysis") from e
    return str(result.inserted_id)


async def get_analyses_by_user(analyses_col, user_id: str) -> List[Analysis]:
    try:
        docs = await analyses_col.find({"userId": user_id}).sort("createdAt", -1).to_list(length=None)
    except PyMongoError as e:
        logger.error("Error getting analyses: %s", e)
        raise PersistenceError("Failed to get analyses") from e
    return [_to_analysis(doc) for doc in docs]


async def get_analysis_by_id(analyses_col, analysis_id: str, user_id: str) -> Optional[Analysis]:
    """Return the analysis only if ``user_id`` owns it."""
    oid = _object_id(analysis_id)
    if oid is None:
        return None
    try:
        doc = await analyses_col.find_one({"_id": oid, "userId": user_id})
    except PyMongoError as e:
        logger.error("Error getting analysis %s: %s", analysis_id, e)
        raise PersistenceError("Failed to get analysis") from e
    return _to_analysis(doc) if doc else None


async def update_analysis_status(analyses_col, analysis_id: str, status: str, user_id: str) -> bool:
    oid = _object_id(analysis_id)
    if oid is None:
        return False
    try:
        result = await analyses_col.update_one(
            {"_id": oid, "userId": user_id},
            {"$set": {"status": status, "updatedAt": utcnow()}},
        )
    except PyMongoError as e:
        logger.error("Error updating analysis %s: %s", analysis_id, e)
        raise PersistenceError("Failed to update analysis") from e
    return result.matched_count > 0


async def delete_analysis(analyses_col, analysis_id: str, user_id: str) -> bool:
    oid = _object_id(analysis_id)
    if oid is None:
        return False
    try:
        result = await analyses_col.delete_one({"_id": oid, "userId": user_id})
    except PyMongoError as e:
        logger.error("Error deleting analysis %s: %s", analysis_id, e)
        raise PersistenceError("Failed to delete analysis") from e
    return result.deleted_count > 0
