import logging

from motor.motor_asyncio import AsyncIOMotorClient

from iain import config

LOG = logging.getLogger(__name__)

# Collection names
USERS = "users"
ACCOUNTS = "accounts"
NOTIFICATIONS = "notifications"
COMPANY_SETTINGS = "company_settings"
RESUMES = "user_resumes"
PASSWORD_RESETS = "password_resets"

client = None
db = None


async def ensure_indexes(database):
    # One credential per email, enforced by the server
    await database[USERS].create_index("email", unique=True)


async def connect_to_mongo():
    global client, db

    if not config.MONGO_URI:
        raise ValueError("MONGO_URI environment variable is not set! Check your .env file.")

    client = AsyncIOMotorClient(config.MONGO_URI)
    db = client[config.DATABASE_NAME]
    await client.admin.command("ping")
    await ensure_indexes(db)

    if "mongodb+srv" in config.MONGO_URI:
        LOG.info("Connected to MongoDB Atlas (database=%s)", config.DATABASE_NAME)
    else:
        LOG.warning("Connected to LOCAL MongoDB (database=%s)", config.DATABASE_NAME)


async def close_mongo_connection():
    if client:
        client.close()


def get_db():
    return db
