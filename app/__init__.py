from flask import Flask, request
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_marshmallow import Marshmallow
from werkzeug.exceptions import HTTPException
import os

# Inicializar extensiones
db = SQLAlchemy()
migrate = Migrate()
ma = Marshmallow()


def create_app(config_name=None):
    if config_name is None:
        config_name = os.environ.get("FLASK_CONFIG", "default")

    app = Flask(__name__)

    # Importar configuración
    from config import config

    app.config.from_object(config[config_name])
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Mantener "success" como primera clave del envelope
    app.json.sort_keys = False

    # Inicializar extensiones con la app
    db.init_app(app)
    migrate.init_app(app, db)
    ma.init_app(app)

    # Importar modelos para que Flask-Migrate los detecte
    from app.models import Student  # noqa: F401

    # Registrar blueprints
    from app.api.students_bp import students_bp

    app.register_blueprint(students_bp)

    from app.utils.responses import apply_cors_headers, error_response

    # Cabeceras CORS permisivas en todas las respuestas, incluidos errores
    @app.after_request
    def _add_cors_headers(response):
        return apply_cors_headers(response)

    # Rutas inexistentes, métodos no soportados, etc.: mismo envelope JSON
    @app.errorhandler(HTTPException)
    def _handle_http_exception(error):
        if error.code == 405:
            return error_response("Method not allowed", 405)
        return error_response(error.description or error.name, error.code or 500)

    @app.errorhandler(Exception)
    def _handle_unexpected_error(error):
        db.session.rollback()
        app.logger.exception(
            "Unhandled error on %s %s", request.method, request.path)
        return error_response(f"Server error: {error}", 500)

    return app
