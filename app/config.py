import os

from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./directory.db").strip()

CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173").split(",")
    if o.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()

DIRECTORY_PAGE_SIZE = int(os.getenv("DIRECTORY_PAGE_SIZE", "9"))
MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", "50"))

ADMIN_TOKEN_HEADER = os.getenv("ADMIN_TOKEN_HEADER", "X-Admin-Token").strip()
