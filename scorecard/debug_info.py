# scorecard/debug_info.py
"""
Read-only session introspection for the debug page.

Collects the current user snapshot, whether a credential is persisted
(never the token itself) and the users the API lets this user evaluate.
"""

import logging
from datetime import datetime
from typing import Any, Dict

import pandas as pd

from .exceptions import ScorecardError

logger = logging.getLogger(__name__)


def collect_debug_info(session) -> Dict[str, Any]:
    user = session.current_user
    info: Dict[str, Any] = {
        'timestamp': datetime.now().isoformat(timespec='seconds'),
        'current_user': user.to_dict() if user else None,
        'credential_persisted': session.credential_store.has_credential(),
        'token_attached': session.api.has_token,
    }

    try:
        users = session.api.fetch_evaluatable_users()
    except ScorecardError as e:
        logger.warning(f"Debug info: could not load evaluatable users: {e}")
        info['evaluatable_users_error'] = e.message
        return info

    info['evaluatable_users'] = pd.DataFrame(
        [{'id': u.id, 'name': u.display_name, 'role': u.role} for u in users],
        columns=['id', 'name', 'role']
    )
    return info
