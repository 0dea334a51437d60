import os

# In a real deployment, override every secret below through the environment.
DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite://./marketplace.sqlite3")

ACCESS_TOKEN_SECRET: str = os.getenv("ACCESS_TOKEN_SECRET", "access-secret-!ChangeMe!")
REFRESH_TOKEN_SECRET: str = os.getenv("REFRESH_TOKEN_SECRET", "refresh-secret-!ChangeMe!")
ALGORITHM: str = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "15"))
REFRESH_TOKEN_EXPIRE_DAYS: int = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "7"))

# Shared salt mixed into every per-email OTP secret.
OTP_SALT: str = os.getenv("OTP_SALT", "marketplace-otp-salt")
OTP_INTERVAL_SECONDS: int = int(os.getenv("OTP_INTERVAL_SECONDS", "30"))
OTP_VALID_WINDOW: int = int(os.getenv("OTP_VALID_WINDOW", "1"))
OTP_DIGITS: int = int(os.getenv("OTP_DIGITS", "6"))

# Empty key means codes are written to the log instead of being emailed.
RESEND_API_KEY: str = os.getenv("RESEND_API_KEY", "").strip()
OTP_SENDER_EMAIL: str = os.getenv("OTP_SENDER_EMAIL", "no-reply@marketplace.local")

UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", "uploads")
MAX_UPLOAD_BYTES: int = int(os.getenv("MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))
PUBLIC_BASE_URL: str = os.getenv("PUBLIC_BASE_URL", "http://localhost:8000").rstrip("/")

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
# Comma separated, e.g. "marketplace.features.auth,marketplace.main"
LOG_NAMESPACES: list[str] = [
    ns.strip() for ns in os.getenv("LOG_NAMESPACES", "").split(",") if ns.strip()
]

DEFAULT_PAGE_SIZE: int = 10
MAX_PAGE_SIZE: int = 100
# Highest accepted page number; keeps (offset - 1) * limit inside SQLite INTEGER.
MAX_PAGE_NUMBER: int = 1_000_000

MODEL_MODULES: list[str] = [
    "marketplace.features.regions.models",
    "marketplace.features.auth.models",
    "marketplace.features.catalog.models",
    "marketplace.features.comments.models",
    "marketplace.features.orders.models",
]

TORTOISE_ORM_CONFIG = {
    "connections": {"default": DATABASE_URL},
    "apps": {
        "models": {  # This is an app label, FK strings use "models.<Model>"
            "models": [*MODEL_MODULES, "aerich.models"],
            "default_connection": "default",
        }
    },
}
