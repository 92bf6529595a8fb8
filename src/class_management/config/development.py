import os

ENVIRONMENT = "development"

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

MONGO_CONFIG = {
    "uri": os.getenv("MONGODB_URI", "mongodb://localhost:27017/class-management"),
    "database": os.getenv("MONGODB_DATABASE", "class-management"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Request body limit (JSON payloads may carry attachment metadata)
MAX_CONTENT_LENGTH = 50 * 1024 * 1024

# If enabled, app will create indexes on startup (idempotent)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo users on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
