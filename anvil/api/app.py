"""Flask API application."""

import logging
from pathlib import Path
from typing import Optional

from flask import Flask, Response, jsonify, request
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from anvil.api.engine_config import EngineConfigManager
from anvil.config import DEFAULT_BUILD_DIR, DEFAULT_DATA_DIR, DEFAULT_LOG_LEVEL
from anvil.engine.resolver import FighterResolver
from anvil.errors import CatalogLoadError
from anvil.models.catalog import ReferenceCatalog
from anvil.models.result import ResolutionResult
from anvil.models.selection import BuildSelection
from anvil.persistence.build_store import BuildStore, format_build_record
from anvil.persistence.catalog_loader import CatalogLoader
from anvil.security.name_sanitizer import NameSanitizer

logging.basicConfig(level=DEFAULT_LOG_LEVEL, format='[%(name)-19s - %(levelname)5s] %(message)s')

app = Flask("flask.anvil")
app.config.setdefault("ANVIL_DATA_DIR", DEFAULT_DATA_DIR)
app.config.setdefault("ANVIL_BUILD_DIR", DEFAULT_BUILD_DIR)


@app.before_request
def log_request_info():
    app.logger.info('Access to: %s from %s (%s)',
        request.url,
        request.headers.get('X-Forwarded-For', request.remote_addr),
        request.headers.get('User-Agent'))


# Error handlers for API routes
@app.errorhandler(HTTPException)
def handle_http_exception(e: HTTPException):
    """Return JSON instead of HTML for HTTP errors in API routes."""
    if request.path.startswith("/api/"):
        response = e.get_response()
        response.data = jsonify(
            {
                "error": e.name,
                "code": e.code,
                "description": e.description,
            }
        ).data
        response.content_type = "application/json"
        return response
    return e


@app.errorhandler(CatalogLoadError)
def handle_catalog_load_error(e: CatalogLoadError):
    """Reference data could not be loaded; nothing can be resolved."""
    app.logger.error(f"Reference data unavailable: {e}")
    return jsonify({"error": "Reference data unavailable", "message": str(e)}), 503


_engine_config_manager = EngineConfigManager()
_resolver: Optional[FighterResolver] = None
_build_store: Optional[BuildStore] = None


def _get_resolver() -> FighterResolver:
    """Get or create the resolver, loading the catalog on first use."""
    global _resolver
    if _resolver is None or _resolver.config is not _engine_config_manager.config:
        catalog = _resolver.catalog if _resolver else CatalogLoader(app.config["ANVIL_DATA_DIR"]).load()
        _resolver = FighterResolver(catalog, _engine_config_manager.config)
    return _resolver


def _get_build_store() -> BuildStore:
    """Get or create the build store for the configured directory."""
    global _build_store
    directory = Path(app.config["ANVIL_BUILD_DIR"])
    if _build_store is None or _build_store.directory != directory:
        _build_store = BuildStore(directory)
    return _build_store


def set_catalog(catalog: ReferenceCatalog) -> None:
    """Replace the reference catalog used by the API."""
    global _resolver
    _resolver = FighterResolver(catalog, _engine_config_manager.config)


def _read_selection() -> tuple[Optional[BuildSelection], Optional[tuple[Response, int]]]:
    """Parse the request body into a selection, or build a 400 response."""
    if not request.is_json:
        return None, (jsonify({"error": "Content-Type must be application/json"}), 400)
    try:
        return BuildSelection.model_validate(request.get_json() or {}), None
    except ValidationError as e:
        return None, (jsonify({"error": "Invalid selection", "message": str(e)}), 400)


def _serialize_result(result: ResolutionResult) -> dict:
    """Serialize a resolution result for the API."""
    return result.model_dump(mode="json", by_alias=True)


@app.route("/api/catalog", methods=["GET"])
def get_catalog():
    """Option names for every selector."""
    return jsonify(_get_resolver().catalog.option_names())


@app.route("/api/resolve", methods=["POST"])
def resolve():
    """Resolve a selection."""
    selection, error = _read_selection()
    if error:
        return error
    result = _get_resolver().resolve(selection)
    return jsonify(_serialize_result(result))


@app.route("/api/export", methods=["POST"])
def export_profile():
    """Plain-text fighter card for a selection."""
    selection, error = _read_selection()
    if error:
        return error
    result = _get_resolver().resolve(selection)
    return Response("\n".join(result.profile_card()) + "\n", mimetype="text/plain")


@app.route("/api/builds", methods=["GET"])
def list_builds():
    """List saved builds."""
    return jsonify({"builds": _get_build_store().list_builds()})


@app.route("/api/builds/<name>", methods=["PUT"])
def save_build(name: str):
    """Save the reconciled version of a selection."""
    is_safe, reason = NameSanitizer().is_safe(name)
    if not is_safe:
        return jsonify({"error": "Invalid build name", "message": reason}), 400
    selection, error = _read_selection()
    if error:
        return error
    result = _get_resolver().resolve(selection)
    try:
        _get_build_store().save_build(name, result.selection)
    except ValueError as e:
        return jsonify({"error": "Invalid build name", "message": str(e)}), 400
    return jsonify({"success": True, "name": name, "record": format_build_record(result.selection)})


@app.route("/api/builds/<name>", methods=["GET"])
def get_build(name: str):
    """Get a saved build."""
    selection = _load_build_or_none(name)
    if selection is None:
        return jsonify({"error": "Build not found"}), 404
    return jsonify(selection.model_dump(by_alias=True))


@app.route("/api/builds/<name>/resolve", methods=["GET"])
def resolve_saved_build(name: str):
    """Resolve a saved build."""
    selection = _load_build_or_none(name)
    if selection is None:
        return jsonify({"error": "Build not found"}), 404
    return jsonify(_serialize_result(_get_resolver().resolve(selection)))


@app.route("/api/builds/<name>", methods=["DELETE"])
def delete_build(name: str):
    """Delete a saved build."""
    try:
        deleted = _get_build_store().delete_build(name)
    except ValueError:
        deleted = False
    if not deleted:
        return jsonify({"error": "Build not found"}), 404
    return jsonify({"success": True})


def _load_build_or_none(name: str) -> Optional[BuildSelection]:
    try:
        return _get_build_store().load_build(name)
    except ValueError:
        return None


if __name__ == "__main__":
    app.run(debug=True, port=5000)
