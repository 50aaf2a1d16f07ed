import os
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv
import dj_database_url
from corsheaders.defaults import default_headers

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")

# ---- Core ----
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "django-insecure-yatrasutra-dev-only-change-me")
DEBUG = os.getenv("DJANGO_DEBUG", "1") == "1"

DATABASE_URL = os.getenv("DATABASE_URL", "").strip()

ALLOWED_HOSTS = [
    "localhost",
    "127.0.0.1",
    "testserver",
    ".vercel.app",
    "yatrasutra.com",
    ".yatrasutra.com",
]

# --- behind proxy / https ---
SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
USE_X_FORWARDED_HOST = True

# ---- Cookies (stateless API; keep secure for previews) ----
SESSION_COOKIE_SAMESITE = "None" if not DEBUG else "Lax"
CSRF_COOKIE_SAMESITE   = "None" if not DEBUG else "Lax"
SESSION_COOKIE_SECURE   = not DEBUG
CSRF_COOKIE_SECURE      = not DEBUG

# ---- Apps ----
INSTALLED_APPS = [
    "jazzmin",
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "corsheaders",
    "yatra",
]

# ---- Middleware (CORS first) ----
MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "config.wsgi.application"

# ---- DB ----
if DATABASE_URL:
    DATABASES = {
        "default": dj_database_url.parse(
            DATABASE_URL,
            conn_max_age=600,
            ssl_require=os.getenv("DATABASE_SSL", "1") == "1",
        )
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
        }
    }

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

AUTH_PASSWORD_VALIDATORS = []

# ---- I18N/Timezone ----
LANGUAGE_CODE = "en-us"
TIME_ZONE = "Asia/Kolkata"
USE_I18N = True
USE_TZ = True

# ---- Static ----
STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"
STATICFILES_DIRS = [p for p in [BASE_DIR / "static"] if p.exists()]
STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage"},
}

# ---- CORS ----
CORS_ALLOWED_ORIGINS = [
    o.strip() for o in os.getenv(
        "CORS_ALLOWED_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173,https://yatrasutra.com",
    ).split(",") if o.strip()
]
CORS_ALLOWED_ORIGIN_REGEXES = [
    r"^https://.*\.vercel\.app$",
    r"^https://.*\.yatrasutra\.com$",
]
CORS_ALLOW_CREDENTIALS = True
CORS_ALLOW_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
CORS_ALLOW_HEADERS = list(default_headers) + [
    "Authorization",
    "X-CSRFToken",
]

# ---- CSRF ----
CSRF_TRUSTED_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "https://*.vercel.app",
    "https://yatrasutra.com",
    "https://*.yatrasutra.com",
]

# ---- DRF ----
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "yatra.auth_jwt.BearerJWTAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
}

SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(hours=24),
    "REFRESH_TOKEN_LIFETIME": timedelta(days=7),
    "ROTATE_REFRESH_TOKENS": False,
    "BLACKLIST_AFTER_ROTATION": False,
    "AUTH_HEADER_TYPES": ("Bearer",),
    "SIGNING_KEY": os.getenv("JWT_SECRET", SECRET_KEY),
}

# ---- Company shown on receipts ----
COMPANY = {
    "LEGAL_NAME": "Yatrasutra Holidays Pvt. Ltd.",
    "DISPLAY_NAME": "YATRASUTRA HOLIDAYS PVT. LTD.",
    "FOOTER_NAME": "YATRASUTRA HOLIDAYS PVT LTD",
    "PHONES": ["+91 97468 16609", "+91 97468 26609"],
    "EMAILS": ["info@yatrasutra.com", "bookings@yatrasutra.com"],
    "WEBSITE": "yatrasutra.com",
    "UPI_ID": os.getenv("COMPANY_UPI_ID", "yatrasutra@upi"),
}

# ---- Receipt PDF (asset names are static-file paths) ----
BOOKING_PDF = {
    "LAYOUT": os.getenv("BOOKING_PDF_LAYOUT", "standard"),
    "INVOICE_PREFIX": "YS/INV",
    "LOGO": "yatra/logo.png",
    "SEAL": "yatra/seal.png",
    "DISPLAY_FONT": "yatra/AmericanCaptain.otf",
}

# ---- Object store ----
OBJECT_STORE = {
    "BUCKET": os.getenv("RECEIPTS_BUCKET", "receipts"),
}

# ---- Jazzmin ----
JAZZMIN_SETTINGS = {
    "site_title": "Yatrasutra Admin",
    "site_header": "Yatrasutra",
    "site_brand": "Yatrasutra",
    "welcome_sign": "Booking receipts",
    "search_model": ["yatra.Submission"],
    "icons": {
        "yatra.Submission": "fas fa-file-invoice",
        "yatra.StoredFile": "fas fa-box-archive",
    },
}

# ---- Dev logging ----
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {"console": {"class": "logging.StreamHandler"}},
    "loggers": {
        "yatra": {"handlers": ["console"], "level": "DEBUG"},
        "yatra.auth": {"handlers": ["console"], "level": "WARNING", "propagate": False},
        "django.request": {"handlers": ["console"], "level": "WARNING"},
    },
}
