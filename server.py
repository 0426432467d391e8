"""
Catalog Chat — API Backend
Runs on port 5009 with /chat endpoint.

Usage:
    python server.py

Endpoints:
    POST   http://localhost:5009/chat
    GET    http://localhost:5009/session/<session_id>
    DELETE http://localhost:5009/session/<session_id>
    GET    http://localhost:5009/health
"""

from datetime import datetime, timezone

from dotenv import load_dotenv

load_dotenv()

from flask import Flask, jsonify
from flask_cors import CORS

from config.settings import PORT, DEBUG, CATALOG_PAGE_SIZE
from chat_logger import get_logger
from core import sessions
from routes.chat import chat_bp

logger = get_logger("catalog_chat")

# ═══════════════════════════════════════════
# FLASK APP
# ═══════════════════════════════════════════

app = Flask(__name__)
CORS(app)
app.register_blueprint(chat_bp)


@app.route("/health", methods=["GET"])
def health():
    """Health check endpoint."""
    return jsonify({
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "active_sessions": len(sessions),
        "page_size": CATALOG_PAGE_SIZE,
    })


if __name__ == "__main__":
    logger.info("=" * 60)
    logger.info("  Catalog Chat — API Server")
    logger.info("=" * 60)
    logger.info(f"Starting server on http://localhost:{PORT}")
    logger.info(f"   POST http://localhost:{PORT}/chat")
    logger.info(f"   GET  http://localhost:{PORT}/health")

    app.run(
        host="0.0.0.0",
        port=PORT,
        debug=DEBUG,
    )
