from decouple import AutoConfig, Csv
from pathlib import Path

config = AutoConfig()


class Config:
    def __init__(self):
        # Environment
        self.ENV = config("ENV", default="development")
        self.TESTING = config("TESTING", default=False, cast=bool)

        # Database
        self.DB_HOST = config("DB_HOST", default="localhost")
        self.DB_PORT = config("DB_PORT", default=5432, cast=int)
        self.DB_USER = config("DB_USER", default="mebeles")
        self.DB_PASSWORD = config("DB_PASSWORD", default="mebeles123")
        self.DB_NAME = config("DB_NAME", default="mebeles_db")
        self.DATABASE_URL = config("DATABASE_URL", default="")
        self.SQLALCHEMY_TRACK_MODIFICATIONS = False

        # Redis
        self.REDIS_HOST = config("REDIS_HOST", default="localhost")
        self.REDIS_PORT = config("REDIS_PORT", default=6379, cast=int)

        # Rate limiting (requests per window, per client key)
        self.RATE_LIMIT_BACKEND = config("RATE_LIMIT_BACKEND", default="memory")
        self.RATE_LIMIT_WINDOW_SECONDS = config(
            "RATE_LIMIT_WINDOW_SECONDS", default=60, cast=int
        )
        self.RATE_LIMIT_READ = config("RATE_LIMIT_READ", default=200, cast=int)
        self.RATE_LIMIT_WRITE = config("RATE_LIMIT_WRITE", default=30, cast=int)
        self.RATE_LIMIT_AUTH = config("RATE_LIMIT_AUTH", default=10, cast=int)

        # Auth
        self.SECRET_KEY = config("SECRET_KEY", default="dev-secret-key")
        self.SESSION_COOKIE_NAME = "mebeles_session"

        # Object storage
        self.S3_REGION = config("S3_REGION", default="eu-north-1")
        self.S3_BUCKET_NAME = config("S3_BUCKET_NAME", default="")
        self.S3_ACCESS_KEY = config("S3_ACCESS_KEY", default=None)
        self.S3_SECRET_KEY = config("S3_SECRET_KEY", default=None)
        self.CDN_DOMAIN = config("CDN_DOMAIN", default=None)
        self.UPLOAD_MAX_BYTES = config(
            "UPLOAD_MAX_BYTES", default=10 * 1024 * 1024, cast=int
        )

        # i18n
        self.MESSAGES_DIR = Path(config("MESSAGES_DIR", default="messages"))
        self.SUPPORTED_LOCALES = config(
            "SUPPORTED_LOCALES", default="lv,en,ru", cast=Csv()
        )

        # API docs (flask-smorest)
        self.API_TITLE = "Mebeles Storefront API"
        self.API_VERSION = "v1"
        self.OPENAPI_VERSION = "3.0.3"

        # App
        self.BIND = config("BIND", default="127.0.0.1:8000")
        self.DEBUG = config("DEBUG", default=True, cast=bool)
        self.CORS_ORIGINS = config("CORS_ORIGINS", default="*", cast=Csv())

        # Logging
        self.LOG_DIR = Path(config("LOG_DIR", default="logs"))
        self.LOG_LEVEL = config("LOG_LEVEL", default="INFO")

    @property
    def SQLALCHEMY_DATABASE_URI(self):
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"


settings = Config()
