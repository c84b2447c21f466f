"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Dict, Optional


def get_user_identity(request_obj) -> Dict[str, Optional[str]]:
    """Extract player identity information from a request or socket request."""
    user_ip = getattr(request_obj, 'remote_addr', None) or 'unknown'

    return {
        'user_ip': user_ip,
        'session_id': getattr(request_obj, 'sid', None)  # Socket.IO connection id
    }


def extract_key(data) -> Optional[str]:
    """
    Pulls the pressed key out of a request payload.

    Accepts ``{"key": "A"}`` as well as the event form
    ``{"type": "letter", "value": "A"}`` / ``{"type": "ENTER"}``.
    A letter event carries exactly one character, so a value such as
    ``"ENTER"`` there is not a key.
    """
    if not isinstance(data, dict):
        return None

    if 'key' in data:
        return data['key']

    event_type = data.get('type')
    if event_type == 'letter':
        value = data.get('value')
        if not isinstance(value, str) or len(value) != 1:
            return None
        return value
    return event_type
