# barbershop/config.py

import os

PROJECT_NAME = os.getenv("PROJECT_NAME", "Barbershop Booking API")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# SQLite database (file-based) unless overridden
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./barbershop.db")

# Access tokens issued by the identity provider
SECRET_KEY = os.getenv("SECRET_KEY", "change-me-later")
ALGORITHM = os.getenv("ALGORITHM", "HS256")
AUTH_AUDIENCE = os.getenv("AUTH_AUDIENCE")  # skip audience check when unset
AUTH_EMAIL_CLAIM = os.getenv("AUTH_EMAIL_CLAIM", "email")

# Identity provider management API, used to sync barber profiles
IDP_DOMAIN = os.getenv("IDP_DOMAIN")
IDP_MANAGEMENT_TOKEN = os.getenv("IDP_MANAGEMENT_TOKEN")
IDP_MANAGEMENT_TOKEN_TYPE = os.getenv("IDP_MANAGEMENT_TOKEN_TYPE", "Bearer")
