from motor.motor_asyncio import AsyncIOMotorClient

from app.config import MONGODB_URI, MONGO_DB

_client = AsyncIOMotorClient(MONGODB_URI)
db = _client[MONGO_DB]

# helper accessors
def get_collection(name="analyses"):
    return db[name]


# FastAPI dependencies, overridden in tests
def get_analyses_collection():
    return get_collection("analyses")


def get_users_collection():
    return get_collection("users")


async def ensure_indexes(users_col=None):
    """Create the unique index that backs the one-account-per-email rule."""
    users_col = users_col if users_col is not None else get_users_collection()
    await users_col.create_index("email", unique=True)
