import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# API keys accepted by the Desert Solutions routes (comma separated)
DESERT_SOLUTIONS_API_KEYS = [
    key.strip() for key in os.getenv("DESERT_SOLUTIONS_API_KEYS", "").split(",") if key.strip()
]

# Database proxy Configuration
DATABASE_PROXY_URL = os.getenv("DATABASE_PROXY_URL", "http://localhost:4000").rstrip("/")
DATABASE_PROXY_API_KEY = os.getenv("DATABASE_PROXY_API_KEY")
# Quotation writes go through the proxy and can be slow, keep a generous timeout
DATABASE_PROXY_TIMEOUT = float(os.getenv("DATABASE_PROXY_TIMEOUT", "120"))

# Mercury (payment provider) Configuration
MERCURY_API_URL = os.getenv("MERCURY_API_URL", "https://api.mercury.com/api/v1").rstrip("/")
MERCURY_API_KEY = os.getenv("MERCURY_API_KEY")
MERCURY_ACCOUNT_ID = os.getenv("MERCURY_ACCOUNT_ID")
MERCURY_WEBHOOK_SECRET = os.getenv("MERCURY_WEBHOOK_SECRET")
# 0 disables the replay window check
MERCURY_WEBHOOK_MAX_AGE_SECONDS = int(os.getenv("MERCURY_WEBHOOK_MAX_AGE_SECONDS", "0"))

# Resend Email Configuration
RESEND_API_KEY = os.getenv("RESEND_API_KEY")

# DigitalOcean Spaces Configuration
DO_SPACES_KEY = os.getenv("DO_SPACES_KEY")
DO_SPACES_SECRET = os.getenv("DO_SPACES_SECRET")
DO_SPACES_REGION = os.getenv("DO_SPACES_REGION", "nyc3")
DO_SPACES_ENDPOINT = os.getenv(
    "DO_SPACES_ENDPOINT", f"https://{DO_SPACES_REGION}.digitaloceanspaces.com"
)
DO_SPACES_BUCKET = os.getenv("DO_SPACES_BUCKET", "desert-solutions")

# Quotation / branding
QUOTATION_COMPANY_NAME = os.getenv("QUOTATION_COMPANY_NAME", "Desert Solutions")
QUOTATION_COMPANY_EMAIL = os.getenv("QUOTATION_COMPANY_EMAIL", "sales@desertsolutions.com")
QUOTATION_COMPANY_WEBSITE = os.getenv("QUOTATION_COMPANY_WEBSITE", "https://desertsolutions.com")
QUOTATION_COMPANY_PHONE = os.getenv("QUOTATION_COMPANY_PHONE", "")
QUOTATION_SALES_CONTACT = os.getenv("QUOTATION_SALES_CONTACT", "José Angel Torres")
QUOTATION_DEFAULT_VALIDITY_DAYS = int(os.getenv("QUOTATION_DEFAULT_VALIDITY_DAYS", "30"))
# Fraction, e.g. 0.0825 for 8.25%
QUOTATION_DEFAULT_TAX_RATE = float(os.getenv("QUOTATION_DEFAULT_TAX_RATE", "0"))

# CORS
ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS",
    "http://localhost:3000,http://localhost:5173",
).split(",")

SECURITY_HEADERS_ENABLED = os.getenv("SECURITY_HEADERS_ENABLED", "true").lower() == "true"
IS_PRODUCTION = os.getenv("ENVIRONMENT", "development").lower() == "production"
