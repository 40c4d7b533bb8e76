"""
Pokemon Tracker - game progress tracker with save file import
Application Factory e Inicialização
"""
import warnings
import os
import sys
import logging

# Suppress Flask-Limiter in-memory storage warning
warnings.filterwarnings("ignore", category=UserWarning, module="flask_limiter")

import flask.cli
flask.cli.show_server_banner = lambda *args: None

# Core Flask imports
from flask import Flask, Blueprint
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Local imports
from constants import ALEMBIC_DIR, BUILD_VERSION, TRACKER_DB
from settings import load_settings, reload_conf
from db import db, migrate, init_db, log_activity
from rest_api import init_rest_api
import structlog
from metrics import init_metrics
from exceptions import register_exception_handlers
from utils import ColoredFormatter, FilterRemoveDateFromWerkzeugLogs, get_or_create_secret_key

# Routes
from routes.games import games_bp
from routes.pokemon import pokemon_bp
from routes.progress import progress_bp
from routes.savefile import savefile_bp
from routes.system import system_bp

limiter = Limiter(key_func=get_remote_address)

# Logging configuration
formatter = ColoredFormatter(
    '[%(asctime)s.%(msecs)03d] %(levelname)s (%(module)s) %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
handler = logging.StreamHandler(sys.stdout)
handler.setFormatter(formatter)

logging.basicConfig(
    level=logging.INFO,
    handlers=[handler]
)

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer() if os.environ.get('LOG_FORMAT') == 'json' else structlog.dev.ConsoleRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger('main')

# Apply filter to hide date from http access logs
logging.getLogger('werkzeug').addFilter(FilterRemoveDateFromWerkzeugLogs())
logging.getLogger('alembic.runtime.migration').setLevel(logging.WARNING)


def create_app(config=None):
    """Application factory"""
    settings = load_settings()
    savefile_settings = settings["savefile"]
    server_settings = settings["server"]

    app = Flask(__name__)
    app.config["SQLALCHEMY_DATABASE_URI"] = TRACKER_DB
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['MAX_CONTENT_LENGTH'] = int(savefile_settings["max_upload_mb"] * 1024 * 1024)
    app.config['RATELIMIT_DEFAULT'] = "; ".join(server_settings["rate_limits"])
    if config:
        app.config.update(config)
    if not app.config.get('SECRET_KEY'):
        app.config['SECRET_KEY'] = get_or_create_secret_key()

    # Initialize components
    db.init_app(app)
    migrate.init_app(app, db, directory=ALEMBIC_DIR)
    limiter.init_app(app)
    CORS(app, resources={r"/api/*": {"origins": server_settings["cors_origins"]}})

    # Register exception handlers
    register_exception_handlers(app)

    # Register blueprints
    app.register_blueprint(system_bp)
    app.register_blueprint(games_bp)
    app.register_blueprint(progress_bp)
    app.register_blueprint(pokemon_bp)
    app.register_blueprint(savefile_bp)

    # Initialize REST API
    api_bp = Blueprint('api', __name__, url_prefix='/api')
    init_rest_api(api_bp)
    app.register_blueprint(api_bp)

    # Initialize metrics
    init_metrics(app)

    # Global initialization
    with app.app_context():
        init_db(app)
        log_activity('system_startup', version=BUILD_VERSION)

    return app


if __name__ == '__main__':
    reload_conf()
    app = create_app()
    logger.info(f'Build Version: {BUILD_VERSION}')
    port = int(os.environ.get('PORT', 5000))
    logger.info(f'Starting server on port {port}...')
    app.run(debug=False, use_reloader=False, host="0.0.0.0", port=port)
    logger.info('Shutting down server...')
