import os
from dotenv import load_dotenv

load_dotenv()

MONGODB_URI = os.environ.get("MONGODB_URI", "mongodb://localhost:27017")
MONGO_DB = os.environ.get("MONGO_DB", "resume_screener")

JWT_SECRET = os.environ.get("JWT_SECRET", "change-me")
JWT_ALGORITHM = "HS256"
TOKEN_TTL_DAYS = int(os.environ.get("TOKEN_TTL_DAYS", "7"))

COOKIE_NAME = "auth-token"
COOKIE_SECURE = os.environ.get("COOKIE_SECURE", "false").lower() in ("1", "true", "yes")

# upload limits, checked before any file is read
MAX_FILES = int(os.environ.get("MAX_FILES", "20"))
MIN_JOB_DESCRIPTION_LENGTH = int(os.environ.get("MIN_JOB_DESCRIPTION_LENGTH", "50"))

CORS_ORIGINS = [o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()]

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", "12"))
