"""
Session state

Flask-Login resolves the signed-in user lazily, on first access to
`current_user`. Until then the state of the request is UNKNOWN, and gated
views must resolve it before deciding anything.
"""
from enum import Enum
from blinker import ANY, Namespace
from flask import g, has_request_context
from flask_login import current_user, user_logged_in, user_logged_out


class SessionState(str, Enum):
    UNKNOWN = 'unknown'
    AUTHENTICATED = 'authenticated'
    UNAUTHENTICATED = 'unauthenticated'


_signals = Namespace()
session_changed = _signals.signal('session-changed')


def session_state():
    """State of the current request without forcing the user to load"""
    if not has_request_context() or '_login_user' not in g:
        return SessionState.UNKNOWN
    user = g._login_user
    if user is not None and user.is_authenticated:
        return SessionState.AUTHENTICATED
    return SessionState.UNAUTHENTICATED


def resolve_session():
    """Load the user for this request (session cookie / remember cookie) and report the state"""
    if has_request_context():
        current_user._get_current_object()
    return session_state()


def current_session():
    """The signed-in user, or None"""
    if resolve_session() is SessionState.AUTHENTICATED:
        return current_user._get_current_object()
    return None


def on_session_change(callback, sender=None):
    """
    Call `callback(state, user)` whenever someone signs in or out.
    :return: a callable that removes the subscription
    """
    def receiver(_sender, **extra):
        callback(extra['state'], extra.get('user'))

    session_changed.connect(receiver, sender=ANY if sender is None else sender, weak=False)

    def unsubscribe():
        session_changed.disconnect(receiver)
    return unsubscribe


@user_logged_in.connect
def _signed_in(sender, user=None, **extra):
    session_changed.send(sender, state=SessionState.AUTHENTICATED, user=user)


@user_logged_out.connect
def _signed_out(sender, user=None, **extra):
    session_changed.send(sender, state=SessionState.UNAUTHENTICATED, user=user)
