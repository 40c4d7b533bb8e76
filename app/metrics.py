from prometheus_client import Counter, Histogram, Gauge, generate_latest, CONTENT_TYPE_LATEST
from flask import Response, request
import time

# Database Metrics
db_games_total = Gauge("tracker_games_total", "Total number of games in the catalog")
db_progress_total = Gauge("tracker_progress_records_total", "Total number of user progress records")
db_pokemon_total = Gauge("tracker_user_pokemon_total", "Total number of caught pokemon records")

# API Metrics
api_request_duration_seconds = Histogram(
    "tracker_api_request_duration_seconds", "API request duration", ["endpoint", "method"]
)

api_requests_total = Counter("tracker_api_requests_total", "Total API requests", ["endpoint", "method", "status_code"])

# Save file Metrics
savefile_uploads_total = Counter(
    "tracker_savefile_uploads_total", "Save files processed", ["format", "status"]
)

savefile_degraded_total = Counter(
    "tracker_savefile_degraded_total", "Extractions that fell back to default values", ["format"]
)

autopopulate_writes_total = Counter(
    "tracker_autopopulate_writes_total", "Auto-population upserts", ["kind", "status"]
)

bulk_import_files_total = Counter("tracker_bulk_import_files_total", "Files handled by bulk import", ["status"])


def init_metrics(app):
    @app.route("/api/metrics")
    def metrics():
        update_db_metrics()
        return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)

    @app.before_request
    def before_request():
        request.start_time = time.time()

    @app.after_request
    def after_request(response):
        duration = time.time() - getattr(request, "start_time", time.time())
        api_request_duration_seconds.labels(endpoint=request.endpoint or "unknown", method=request.method).observe(
            duration
        )
        api_requests_total.labels(
            endpoint=request.endpoint or "unknown", method=request.method, status_code=response.status_code
        ).inc()
        return response

    app.logger.info("Prometheus metrics initialized at /api/metrics")


def update_db_metrics():
    """Refresh table count gauges"""
    from sqlalchemy.exc import SQLAlchemyError
    from db import Game, UserProgress, UserPokemon

    try:
        db_games_total.set(Game.query.count())
        db_progress_total.set(UserProgress.query.count())
        db_pokemon_total.set(UserPokemon.query.count())
    except SQLAlchemyError:
        pass
