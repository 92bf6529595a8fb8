import os

ENVIRONMENT = "testing"

SECRET_KEY = "test-secret"

MONGO_CONFIG = {
    "uri": os.getenv("MONGODB_URI", "mongodb://localhost:27017/class-management-test"),
    "database": os.getenv("MONGODB_DATABASE", "class-management-test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

MAX_CONTENT_LENGTH = 50 * 1024 * 1024

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
