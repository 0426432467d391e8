"""
Chat endpoint as a Flask Blueprint.

    POST /chat
    {
        "session_id": "session_xxx",
        "event": "message",             # or filter_selected / login_completed / basket_completed
        "message": "{\"ActionType\":\"NextPage\"}",
        "attachments": [{"content_url": "...", "content_type": "image/png"}],
        "channel_id": "webchat",
        "filter": {"brand": "...", "type": "...", "tags": null},   # filter_selected
        "auth": {"user_id": "...", "access_token": "..."},         # login_completed
        "success": true                                            # basket_completed
    }

The response carries the replies to post and, when the flow hands control to a
sub-conversation, ``delegate`` names it. The channel runs that sub-flow and
posts its result back as the matching event.
"""

import time

from flask import Blueprint, request, jsonify

from catalog_flow import CatalogFlow, CatalogServices
from chat_logger import get_logger, sanitize_log_string, mask_token
from core import (
    InvalidRequest,
    discard_session,
    event_from_request,
    get_session,
    save_session,
    state_to_dict,
)
from models import ConversationState, EventKind
from services import (
    AttachmentClient,
    BasketClient,
    CatalogAIClient,
    CatalogClient,
    IdentityService,
    ImageClassifierClient,
)

logger = get_logger("catalog_chat")

chat_bp = Blueprint("chat", __name__)

identity_service = IdentityService()

flow = CatalogFlow(CatalogServices(
    catalog=CatalogClient(),
    catalog_ai=CatalogAIClient(),
    identity=identity_service,
    basket=BasketClient(),
    classifier=ImageClassifierClient(),
    attachments=AttachmentClient(),
))


def _error_response(message: str, session_id: str = "", status: int = 400):
    return jsonify({
        "success": False,
        "session_id": session_id,
        "replies": [],
        "delegate": None,
        "flow_state": None,
        "done": False,
        "metadata": {"error": message},
    }), status


def _store_auth(session_id: str, auth) -> None:
    """Keep the credentials the login sub-flow handed back."""
    if not isinstance(auth, dict):
        return
    user_id = auth.get("user_id")
    access_token = auth.get("access_token")
    if not user_id or not access_token:
        logger.warning(f"POST /chat | session={session_id} | login result without credentials")
        return
    expires_at = auth.get("expires_at")
    if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
        expires_at = None
    identity_service.set_session_auth_data(
        session_id,
        user_id,
        access_token,
        expires_at=float(expires_at) if expires_at is not None else None,
    )
    logger.info(f"POST /chat | session={session_id} | signed in user={user_id} token={mask_token(access_token)}")


@chat_bp.route("/chat", methods=["POST"])
def chat():
    start_time = time.time()

    # ─── Parse request ───
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        logger.warning("POST /chat | Invalid JSON body")
        return _error_response("Invalid JSON body")

    try:
        event = event_from_request(body)
    except InvalidRequest as e:
        logger.warning(f"POST /chat | {e}")
        return _error_response(str(e), str(body.get("session_id") or ""))

    logger.info(
        f'POST /chat | session={event.session_id} | event={event.kind.value} | '
        f'message="{sanitize_log_string(event.text)}" | attachments={len(event.attachments)}'
    )

    if event.kind == EventKind.LOGIN_COMPLETED:
        _store_auth(event.session_id, body.get("auth"))

    # ─── Dispatch to the flow ───
    state = get_session(event.session_id)
    if state is None and event.kind == EventKind.MESSAGE:
        result = flow.start(ConversationState(), event)
    else:
        result = flow.handle(state or ConversationState(), event)

    save_session(event.session_id, result.state)
    if result.state.is_done:
        identity_service.clear_session_auth_data(event.session_id)

    elapsed_ms = round((time.time() - start_time) * 1000)
    logger.info(
        f"POST /chat | session={event.session_id} | flow_state={result.state.continuation.value} | "
        f"replies={len(result.replies)} | response_time_ms={elapsed_ms}"
    )

    return jsonify({
        "success": True,
        "session_id": event.session_id,
        "replies": result.replies,
        "delegate": result.delegate.value if result.delegate else None,
        "flow_state": result.state.continuation.value,
        "done": result.state.is_done,
        "metadata": {
            "current_page": result.state.current_page,
            "response_time_ms": elapsed_ms,
        },
    }), 200


@chat_bp.route("/session/<session_id>", methods=["GET"])
def get_session_state(session_id):
    state = get_session(session_id)
    if state is None:
        return jsonify({"error": "Session not found"}), 404
    return jsonify({"session_id": session_id, "session": state_to_dict(state)})


@chat_bp.route("/session/<session_id>", methods=["DELETE"])
def delete_session(session_id):
    """Abandon a session; nothing else needs cleaning up."""
    if not discard_session(session_id):
        return jsonify({"error": "Session not found"}), 404
    identity_service.clear_session_auth_data(session_id)
    return jsonify({"session_id": session_id, "deleted": True})
