from functools import wraps
from flask import abort, current_app
from tulipa.utils.session import SessionState, resolve_session


def session_required(f):
    """
    Gate a view on the operator session.
    The session is resolved first; nothing protected is rendered while the
    state is still UNKNOWN.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        state = resolve_session()
        if state is SessionState.AUTHENTICATED:
            return f(*args, **kwargs)
        if state is SessionState.UNAUTHENTICATED:
            return current_app.login_manager.unauthorized()
        # No request context or the loader never ran
        abort(503)
    return decorated_function
