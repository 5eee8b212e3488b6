import os


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # Az egyetlen érvényes belépési adat
    AUTH_USERNAME = os.environ.get("AUTH_USERNAME", "tester")
    AUTH_PASSWORD = os.environ.get("AUTH_PASSWORD", "Squ!r3")

    HOST = os.environ.get("HOST", "0.0.0.0")
    PORT = int(os.environ.get("PORT", "1042"))

    SESSION_COOKIE_SECURE = _env_bool("SESSION_COOKIE_SECURE", "true")
    SESSION_COOKIE_HTTPONLY = True

    # Időzítések
    SESSION_IDLE_MINUTES = int(os.environ.get("SESSION_IDLE_MINUTES", "20"))
    SESSION_SWEEP_SECONDS = int(os.environ.get("SESSION_SWEEP_SECONDS", "60"))

    LOG_PATH = os.environ.get("LOG_PATH", "logs/app.log")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
