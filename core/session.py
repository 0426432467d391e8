"""
Session Management

In-memory store of conversation state, one entry per chat session.
"""

from typing import Dict, Optional

from models import ConversationState

# In-memory session store
sessions: Dict[str, ConversationState] = {}


def get_session(session_id: str) -> Optional[ConversationState]:
    """Get session state by ID. Returns None if not found."""
    return sessions.get(session_id)


def save_session(session_id: str, state: ConversationState) -> None:
    """Store the session's new state; finished conversations are dropped."""
    if state.is_done:
        sessions.pop(session_id, None)
    else:
        sessions[session_id] = state


def discard_session(session_id: str) -> bool:
    """Forget a session. Returns True if it existed."""
    return sessions.pop(session_id, None) is not None


def session_exists(session_id: str) -> bool:
    return session_id in sessions
