"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Dict, Optional


def get_user_identity(request_obj) -> Dict[str, Optional[str]]:
    """Extract user identity information from request."""
    user_ip = getattr(request_obj, 'remote_addr', None) or 'unknown'

    return {
        'user_ip': user_ip,
        'session_id': None
    }


def format_duration(start_time: float, end_time: float) -> str:
    """Format an elapsed time in seconds as '1m 5s' or '42s'."""
    elapsed = max(0, int(end_time - start_time))
    minutes, seconds = divmod(elapsed, 60)
    if minutes > 0:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"
