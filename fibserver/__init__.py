import os
import logging
from typing import Any, Dict, Optional
from flask import Flask, request
from .config import Config
from .auth import SimpleBackend, auth_bp
from .api import api_bp
from .views import views_bp
from .maintenance import start_maintenance_thread
from .store import AppState

# Logging beállítása
def _setup_logging(log_path: str, level: str):
    logger = logging.getLogger("app")
    logger.setLevel(level)
    path = os.path.abspath(log_path)
    # több create_app hívásnál se duplikálódjon a handler
    if not any(getattr(h, "baseFilename", None) == path for h in logger.handlers):
        fh = logging.FileHandler(path, encoding="utf-8")
        fmt = logging.Formatter("%(asctime)s %(levelname)s %(message)s")
        fh.setFormatter(fmt)
        logger.addHandler(fh)
    return logger

# Flask app létrehozása
def create_app(overrides: Optional[Dict[str, Any]] = None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    # Secret key beállítása
    app.secret_key = app.config["SECRET_KEY"]

    # Logging
    os.makedirs(os.path.dirname(app.config["LOG_PATH"]) or ".", exist_ok=True)
    logger = _setup_logging(app.config["LOG_PATH"], app.config["LOG_LEVEL"])

    # Megosztott állapot (számláló, userek, sessionök)
    backend = SimpleBackend(app.config["AUTH_USERNAME"], app.config["AUTH_PASSWORD"])
    app.extensions["fibserver"] = AppState(backend)

    # Blueprintek (saját fájlokban definiáltak)
    app.register_blueprint(auth_bp)
    app.register_blueprint(views_bp)
    app.register_blueprint(api_bp)

    @app.after_request
    def _log_request(response):
        logger.info(f"request method={request.method} path={request.path} status={response.status_code}")
        return response

    # Karbantartó thread (maintenance.py)
    if app.config["SESSION_SWEEP_SECONDS"] > 0:
        start_maintenance_thread(app)

    return app
