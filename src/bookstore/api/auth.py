"""Session-backed authentication for the HTTP layer.

The signed session cookie holds only the member id and display name. Each
request turns it into an ``AuthContext`` that is handed to the operations.
"""

from fastapi import Request

from bookstore.members.authentication import AuthContext

SESSION_MEMBER_KEY = "member_id"
SESSION_NAME_KEY = "name"


def current_auth(request: Request) -> AuthContext:
    member_id = request.session.get(SESSION_MEMBER_KEY)
    if member_id is None:
        return AuthContext.anonymous()
    return AuthContext.for_member(member_id, name=request.session.get(SESSION_NAME_KEY))


def start_session(request: Request, member) -> None:
    request.session[SESSION_MEMBER_KEY] = str(member.id)
    request.session[SESSION_NAME_KEY] = member.first_name


def end_session(request: Request) -> None:
    request.session.clear()
