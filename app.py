from flask import Flask, request, jsonify
from flask_cors import CORS
from pydantic import ValidationError
from luxury_shopper.agent import (
    initialize_agent,
    process_message
)
from luxury_shopper.constants import WELCOME_MESSAGE
from luxury_shopper.errors import SessionNotFoundError
from luxury_shopper.models import ChatRequest
from luxury_shopper.session_store import new_session_id
from luxury_shopper.utils.logger import get_logger

app = Flask(__name__)

# Initialize CORS, allowing all origins for now.
# For production, specify origins: CORS(app, origins=["http://localhost:3000"])
CORS(app)

logger = get_logger("luxury_shopper.app")

# Session store and engine are shared by every request
session_store, engine = initialize_agent()

ROUTES = {
    "GET /welcome": "Start a conversation and receive its session id",
    "POST /chat": "Send a message for the session named in the Authorization header",
    "GET /": "List available routes",
}

@app.route('/', methods=['GET'])
def home():
    return jsonify({"message": "Luxury Shopper API is running", "routes": ROUTES})

@app.route('/welcome', methods=['GET'])
def welcome():
    session_id = new_session_id()
    session_store.create(session_id)
    return jsonify({"message": WELCOME_MESSAGE, "uuid": session_id})

@app.route('/chat', methods=['POST'])
def chat():
    session_id = request.headers.get('Authorization', '').strip()
    if not session_id:
        return jsonify({"error": "Missing or empty Authorization header."}), 401

    if session_id not in session_store:
        return jsonify({"error": str(SessionNotFoundError(session_id))}), 401

    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Invalid JSON payload"}), 400

    if 'message' not in data:
        return jsonify({"error": "Missing message key in body."}), 400

    try:
        chat_request = ChatRequest.model_validate(data)
    except ValidationError:
        return jsonify({"error": "message must be a string"}), 400

    try:
        result = process_message(session_store, engine, session_id, chat_request.message)
    except SessionNotFoundError as e:
        # Expired between the lookup above and the turn
        return jsonify({"error": str(e)}), 401

    return jsonify(result.to_response()), result.status_code

if __name__ == "__main__":
    # Note: For development, Flask's built-in server is fine.
    # For production, use a proper WSGI server like Gunicorn or uWSGI.
    app.run(debug=True, host='0.0.0.0', port=8080)
