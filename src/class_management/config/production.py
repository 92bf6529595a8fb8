import os

ENVIRONMENT = "production"

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

MONGO_CONFIG = {
    "uri": os.getenv("MONGODB_URI", "mongodb://localhost:27017/class-management"),
    "database": os.getenv("MONGODB_DATABASE", "class-management"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

MAX_CONTENT_LENGTH = 50 * 1024 * 1024

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
