"""
app.py
------
Flask entry point for the Kerala farming assistant backend.

Routes
------
POST /api/chat                          → Keyword assistant reply
GET  /api/weather                       → Current weather   (?lat=&lon=)
GET  /api/weather/forecast              → 5-day forecast    (?lat=&lon=)
GET  /api/market                        → All crop prices
GET  /api/market/<crop>                 → One crop's price
GET  /api/market/<crop>/history         → Daily price history (?days=30)
GET  /api/subsidies                     → Schemes (?category=, ?q=)
GET  /api/subsidies/categories          → Scheme categories
GET  /api/settings/language             → Selected language
PUT  /api/settings/language             → Change language
GET  /health                            → Simple health-check endpoint
"""

import os
import logging

from flask import Flask, request, jsonify

import settings_store
import subsidy_service
from chat_engine     import FARMING_KNOWLEDGE, InvalidInput, ResponseMatcher, load_knowledge
from chat_service    import ChatService, EmptyMessage, DEFAULT_MIN_DELAY, DEFAULT_MAX_DELAY
from market_service  import MarketService
from weather_service import WeatherService, DEFAULT_LAT, DEFAULT_LON

# Longest accepted chat message
_MAX_MESSAGE_CHARS = 2000
_MAX_HISTORY_DAYS  = 365

# --------------------------------------------------------------------------- #
#  App configuration                                                           #
# --------------------------------------------------------------------------- #

logging.basicConfig(
    level  = logging.INFO,
    format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = os.environ.get("FLASK_SECRET", "dev-secret-change-in-prod")
app.json.ensure_ascii = False

# Optional knowledge table override (JSON)
_KNOWLEDGE_FILE = os.environ.get("CHAT_KNOWLEDGE_FILE")
KNOWLEDGE = load_knowledge(_KNOWLEDGE_FILE) if _KNOWLEDGE_FILE else FARMING_KNOWLEDGE

# One matcher per process; it is stateless so sharing is safe
matcher = ResponseMatcher(KNOWLEDGE)
chat_service = ChatService(
    matcher,
    min_delay = float(os.environ.get("CHAT_MIN_DELAY", DEFAULT_MIN_DELAY)),
    max_delay = float(os.environ.get("CHAT_MAX_DELAY", DEFAULT_MAX_DELAY)),
)
weather_service = WeatherService(api_key=os.environ.get("OPENWEATHER_API_KEY"))
market_service  = MarketService()


# --------------------------------------------------------------------------- #
#  Helpers                                                                     #
# --------------------------------------------------------------------------- #

def _coords() -> tuple:
    """Read ?lat=&lon= with Kochi defaults. Raises ValueError on bad numbers."""
    lat = float(request.args.get("lat", DEFAULT_LAT))
    lon = float(request.args.get("lon", DEFAULT_LON))
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
        raise ValueError(f"Coordinates out of range: lat={lat} lon={lon}")
    return lat, lon


def _bad_request(msg: str):
    return jsonify({"error": msg}), 400


# --------------------------------------------------------------------------- #
#  Routes – Chat                                                               #
# --------------------------------------------------------------------------- #

@app.route("/api/chat", methods=["POST"])
def api_chat():
    """
    JSON body:
        message – string (required, non-blank)
    """
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        return _bad_request("Request body must be a JSON object.")
    message = payload.get("message")

    if message is None:
        return _bad_request("Field 'message' is required.")
    if isinstance(message, str) and len(message) > _MAX_MESSAGE_CHARS:
        return _bad_request(f"Message exceeds {_MAX_MESSAGE_CHARS} characters.")

    try:
        reply = chat_service.send_message(message)
    except (EmptyMessage, InvalidInput) as exc:
        return _bad_request(str(exc))
    except Exception as exc:
        logger.exception("api_chat: unexpected error: %s", exc)
        return jsonify({"error": "Sorry, I could not answer right now. Please try again."}), 500

    return jsonify({"reply": reply})


# --------------------------------------------------------------------------- #
#  Routes – Weather                                                            #
# --------------------------------------------------------------------------- #

@app.route("/api/weather", methods=["GET"])
def api_weather():
    try:
        lat, lon = _coords()
    except ValueError as exc:
        return _bad_request(str(exc))
    return jsonify(weather_service.get_current_weather(lat, lon))


@app.route("/api/weather/forecast", methods=["GET"])
def api_forecast():
    try:
        lat, lon = _coords()
    except ValueError as exc:
        return _bad_request(str(exc))
    return jsonify({"forecast": weather_service.get_forecast(lat, lon)})


# --------------------------------------------------------------------------- #
#  Routes – Market                                                             #
# --------------------------------------------------------------------------- #

@app.route("/api/market", methods=["GET"])
def api_market():
    return jsonify({"prices": market_service.get_market_prices()})


@app.route("/api/market/<crop>", methods=["GET"])
def api_crop_price(crop: str):
    item = market_service.get_crop_price(crop)
    if item is None:
        return jsonify({"error": f"No price found for '{crop}'."}), 404
    return jsonify(item)


@app.route("/api/market/<crop>/history", methods=["GET"])
def api_price_history(crop: str):
    raw = request.args.get("days", "30").strip()
    try:
        days = int(raw)
    except ValueError:
        return _bad_request(f"days '{raw}' is not a valid integer.")
    if not 0 <= days <= _MAX_HISTORY_DAYS:
        return _bad_request(f"days must be between 0 and {_MAX_HISTORY_DAYS}.")
    return jsonify({"crop": crop, "history": market_service.get_price_history(crop, days)})


# --------------------------------------------------------------------------- #
#  Routes – Subsidies                                                          #
# --------------------------------------------------------------------------- #

@app.route("/api/subsidies", methods=["GET"])
def api_subsidies():
    category = request.args.get("category", "").strip()
    query    = request.args.get("q", "").strip()

    schemes = (
        subsidy_service.get_subsidies_by_category(category) if category
        else subsidy_service.get_subsidies()
    )
    if query:
        hits    = {s["scheme"] for s in subsidy_service.search_subsidies(query)}
        schemes = [s for s in schemes if s["scheme"] in hits]
    return jsonify({"subsidies": schemes})


@app.route("/api/subsidies/categories", methods=["GET"])
def api_subsidy_categories():
    return jsonify({"categories": subsidy_service.get_categories()})


# --------------------------------------------------------------------------- #
#  Routes – Settings                                                           #
# --------------------------------------------------------------------------- #

def _language_payload(code: str) -> dict:
    english, native = settings_store.SUPPORTED_LANGUAGES[code]
    return {"language": code, "name": english, "native_name": native}


@app.route("/api/settings/language", methods=["GET", "PUT"])
def api_language():
    if request.method == "GET":
        return jsonify(_language_payload(settings_store.get_language()))

    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        return _bad_request("Request body must be a JSON object.")
    try:
        code = settings_store.set_language(payload.get("language"))
    except ValueError as exc:
        return _bad_request(str(exc))
    except OSError as exc:
        logger.exception("api_language: could not save settings: %s", exc)
        return jsonify({"error": "Failed to change language."}), 500
    return jsonify(_language_payload(code))


@app.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok", "service": "farming-assistant-backend"})


# --------------------------------------------------------------------------- #
#  Error handlers                                                              #
# --------------------------------------------------------------------------- #

@app.errorhandler(404)
def not_found(e):
    return jsonify({"error": "Endpoint not found."}), 404


@app.errorhandler(405)
def method_not_allowed(e):
    return jsonify({"error": "Method not allowed."}), 405


@app.errorhandler(500)
def server_error(e):
    return jsonify({"error": "Internal server error."}), 500


# --------------------------------------------------------------------------- #
#  Entry point                                                                 #
# --------------------------------------------------------------------------- #

if __name__ == "__main__":
    port  = int(os.environ.get("PORT", 5000))
    debug = os.environ.get("FLASK_DEBUG", "false").lower() == "true"
    app.run(host="0.0.0.0", port=port, debug=debug)
