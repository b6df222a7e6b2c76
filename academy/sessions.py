"""
Server-side sessions

The cookie carries nothing but a signed, random session id; the payload
(including the Flask-Login user id) lives in the storage backend's session
store and expires there after ``PERMANENT_SESSION_LIFETIME``.
"""

import logging
import secrets

from flask.sessions import SessionInterface, SessionMixin
from itsdangerous import BadSignature, Signer
from werkzeug.datastructures import CallbackDict

from academy.models.base import utcnow
from academy.storage import get_storage

logger = logging.getLogger(__name__)


def _new_sid():
    return secrets.token_urlsafe(32)


class ServerSideSession(CallbackDict, SessionMixin):

    def __init__(self, initial=None, sid=None, new=False):
        def on_update(self):
            self.modified = True

        super().__init__(initial, on_update)
        self.sid = sid or _new_sid()
        self.new = new
        self.modified = False
        self.previous_sid = None

    def regenerate(self):
        """Switch to a fresh id, e.g. after login, so a pre-login id is useless."""
        if not self.new and self.previous_sid is None:
            self.previous_sid = self.sid
        self.sid = _new_sid()
        self.modified = True


class StorageSessionInterface(SessionInterface):
    salt = 'academy-session'

    def _signer(self, app):
        if not app.secret_key:
            return None
        return Signer(app.secret_key, salt=self.salt)

    def open_session(self, app, request):
        signer = self._signer(app)
        if signer is None:
            return None

        cookie = request.cookies.get(self.get_cookie_name(app))
        if cookie:
            try:
                sid = signer.unsign(cookie).decode('utf-8')
            except BadSignature:
                logger.debug('Rejected session cookie with a bad signature')
                sid = None
            if sid:
                data = get_storage().sessions.load(sid)
                if data is not None:
                    return ServerSideSession(data, sid=sid)
        return ServerSideSession(new=True)

    def save_session(self, app, session, response):
        name = self.get_cookie_name(app)
        domain = self.get_cookie_domain(app)
        path = self.get_cookie_path(app)
        store = get_storage().sessions

        if session.previous_sid:
            store.delete(session.previous_sid)

        if not session:
            if session.modified and not session.new:
                store.delete(session.sid)
                response.delete_cookie(name, domain=domain, path=path)
            return

        if not session.modified:
            return

        expires = utcnow() + app.permanent_session_lifetime
        store.save(session.sid, dict(session), expires)
        cookie = self._signer(app).sign(session.sid.encode('utf-8')).decode('utf-8')
        response.set_cookie(
            name,
            cookie,
            expires=expires,
            httponly=self.get_cookie_httponly(app),
            domain=domain,
            path=path,
            secure=self.get_cookie_secure(app),
            samesite=self.get_cookie_samesite(app),
        )
