import azure.functions as func

from movie_explorer_discovery_service.blueprints import (
    discovery_bp,
    favorites_bp,
    history_bp,
    users_bp,
    watchlist_bp,
)

app = func.FunctionApp()

app.register_blueprint(discovery_bp.bp)
app.register_blueprint(history_bp.bp)
app.register_blueprint(favorites_bp.bp)
app.register_blueprint(watchlist_bp.bp)
app.register_blueprint(users_bp.bp)
