"""
Spellcheck Flask Routes
=======================
HTTP endpoints over one shared SpellcheckEngine.

Every engine call runs under a single lock; the engine has no locking
of its own.
"""

import threading
import time
from functools import wraps
from typing import Any, Dict, Optional

from flask import Blueprint, Flask, current_app, g, jsonify, request

from config_logging import (
    get_config, get_logger, StructuredLogger,
    SpellcheckError, ValidationError, ProcessingError,
)
from .config import SUGGESTION_CAP
from .engine import SpellcheckEngine

logger = get_logger('spellcheck.routes')

spell_blueprint = Blueprint('spellcheck', __name__, url_prefix='/api/spell')

EXTENSION_KEY = 'spellcheck'


class EngineHandle:
    """A SpellcheckEngine guarded by one lock."""

    def __init__(self, engine: SpellcheckEngine, user_dictionary: Optional[str] = None):
        self.engine = engine
        self.user_dictionary = user_dictionary
        self.lock = threading.Lock()


def _handle() -> EngineHandle:
    handle = current_app.extensions.get(EXTENSION_KEY)
    if handle is None:
        raise ProcessingError("Spellcheck engine not configured", stage='setup')
    return handle


# =============================================================================
# STANDARDIZED ERROR HANDLING DECORATOR
# =============================================================================

def _error_response(code: str, message: str, status: int, details: Optional[Dict] = None):
    body = {
        'success': False,
        'error': {
            'code': code,
            'message': message,
            'correlation_id': getattr(g, 'correlation_id', 'unknown'),
        }
    }
    if details:
        body['error']['details'] = details
    return jsonify(body), status


def handle_spell_errors(f):
    """
    Decorator for standardized API error handling in spellcheck routes.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        g.correlation_id = StructuredLogger.new_correlation_id()
        start_time = time.time()
        try:
            result = f(*args, **kwargs)

            elapsed = time.time() - start_time
            if elapsed > 2.0:
                logger.warning(f"Slow spellcheck call: {f.__name__} took {elapsed:.1f}s")

            return result

        except ValidationError as e:
            logger.warning(f"Validation error in {f.__name__}: {e}")
            return _error_response(e.code, e.message, e.status_code, e.details)
        except SpellcheckError as e:
            logger.error(f"{e.code} in {f.__name__}: {e}")
            return _error_response(e.code, e.message, e.status_code, e.details)
        except Exception as e:
            logger.exception(f"Unexpected error in {f.__name__}: {e}")
            return _error_response('INTERNAL_ERROR', 'An unexpected error occurred', 500)

    return decorated


def _json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _require_str(data: Dict[str, Any], key: str, allow_empty: bool = False) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ValidationError(f"'{key}' must be a string", field=key)
    if not allow_empty and not value:
        raise ValidationError(f"'{key}' must not be empty", field=key)
    return value


# =============================================================================
# ENDPOINTS
# =============================================================================

@spell_blueprint.route('/status', methods=['GET'])
@handle_spell_errors
def status():
    handle = _handle()
    with handle.lock:
        data = handle.engine.get_status()
    return jsonify({'success': True, 'status': data})


@spell_blueprint.route('/check', methods=['POST'])
@handle_spell_errors
def check():
    """Check text; replaces the stored misspelled list."""
    text = _require_str(_json_body(), 'text', allow_empty=True)
    handle = _handle()
    with handle.lock:
        misspelled = handle.engine.check(text)
    return jsonify({
        'success': True,
        'count': len(misspelled),
        'misspelled': [m.to_dict() for m in misspelled],
    })


@spell_blueprint.route('/misspelled', methods=['GET'])
@handle_spell_errors
def misspelled():
    """Misspellings from the last check, or the one at ?offset=N."""
    offset = request.args.get('offset')
    handle = _handle()

    if offset is None:
        with handle.lock:
            entries = handle.engine.misspelled
        return jsonify({
            'success': True,
            'count': len(entries),
            'misspelled': [m.to_dict() for m in entries],
        })

    try:
        pos = int(offset)
    except ValueError:
        raise ValidationError("'offset' must be an integer", field='offset')

    with handle.lock:
        entry = handle.engine.misspelled_at(pos)
    return jsonify({
        'success': True,
        'offset': pos,
        'misspelled': entry.to_dict() if entry else None,
    })


@spell_blueprint.route('/suggest', methods=['POST'])
@handle_spell_errors
def suggest():
    data = _json_body()
    word = _require_str(data, 'word')
    limit = data.get('limit', SUGGESTION_CAP)
    if not isinstance(limit, int) or isinstance(limit, bool):
        raise ValidationError("'limit' must be an integer", field='limit')

    handle = _handle()
    with handle.lock:
        if handle.engine.suggestions_enabled:
            suggestions = handle.engine.suggestions(word, limit)
        else:
            suggestions = []
    return jsonify({'success': True, 'word': word, 'suggestions': suggestions})


@spell_blueprint.route('/learn', methods=['POST'])
@handle_spell_errors
def learn():
    """Add a word to the user dictionary; saves it when a path is configured."""
    word = _require_str(_json_body(), 'word')
    handle = _handle()
    with handle.lock:
        added = handle.engine.learn(word)
        if added and handle.user_dictionary:
            handle.engine.save_user_dictionary(handle.user_dictionary)
    return jsonify({'success': True, 'word': word, 'added': added})


@spell_blueprint.route('/ignore', methods=['POST'])
@handle_spell_errors
def ignore():
    word = _require_str(_json_body(), 'word')
    handle = _handle()
    with handle.lock:
        added = handle.engine.ignore(word)
    return jsonify({'success': True, 'word': word, 'added': added})


@spell_blueprint.route('/ignore', methods=['DELETE'])
@handle_spell_errors
def reset_ignore():
    handle = _handle()
    with handle.lock:
        handle.engine.reset_ignore_list()
    return jsonify({'success': True})


@spell_blueprint.route('/save', methods=['POST'])
@handle_spell_errors
def save():
    """Write the user dictionary to the path the app was created with."""
    handle = _handle()
    path = handle.user_dictionary
    if not path:
        raise ValidationError("No user dictionary path configured", field='path')
    with handle.lock:
        handle.engine.save_user_dictionary(path)
    return jsonify({'success': True, 'path': path})


@spell_blueprint.route('/enabled', methods=['POST'])
@handle_spell_errors
def set_enabled():
    data = _json_body()
    updates = {}
    for key in ('enabled', 'suggestions_enabled'):
        if key in data:
            if not isinstance(data[key], bool):
                raise ValidationError(f"'{key}' must be a boolean", field=key)
            updates[key] = data[key]

    handle = _handle()
    with handle.lock:
        for key, value in updates.items():
            setattr(handle.engine, key, value)
        flags = {
            'enabled': handle.engine.enabled,
            'suggestions_enabled': handle.engine.suggestions_enabled,
        }
    return jsonify({'success': True, **flags})


# =============================================================================
# APPLICATION FACTORY
# =============================================================================

def create_app(engine: SpellcheckEngine, user_dictionary: Optional[str] = None) -> Flask:
    """Build a Flask app serving ``engine``."""
    app = Flask(__name__)
    app.config['MAX_CONTENT_LENGTH'] = get_config().max_content_length
    app.extensions[EXTENSION_KEY] = EngineHandle(engine, user_dictionary)
    app.register_blueprint(spell_blueprint)

    @app.after_request
    def add_security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        return response

    return app
