# studio_api/config.py

import os

from dotenv import load_dotenv

load_dotenv()

# Database (SQLite file by default)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./studios.db")
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes")

# JWT
SECRET_KEY = os.getenv("SECRET_KEY", "change-me-later")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24))

# Scraping workflow (n8n webhook)
N8N_WEBHOOK_URL = os.getenv("N8N_WEBHOOK_URL", "")
SCRAPING_TIMEOUT_SECONDS = float(os.getenv("SCRAPING_TIMEOUT_SECONDS", 30))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
