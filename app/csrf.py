# Form posts must echo the session token; JSON requests skip the check
import secrets

from fastapi import Request

from .logger import get_logger

logger = get_logger(__name__)

SAFE_METHODS = {"GET", "HEAD", "OPTIONS"}
SESSION_KEY = "_csrf_token"
HEADER_NAME = "X-CSRF-Token"
FORM_FIELD = "authenticity_token"
INVALID_TOKEN = "Can't verify CSRF token authenticity."


class CSRFError(Exception):
    def __init__(self, message: str = INVALID_TOKEN):
        self.message = message
        super().__init__(message)


def is_json_request(request: Request) -> bool:
    media_type = request.headers.get("content-type", "").split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


def csrf_token(request: Request) -> str:
    """Return the session's token, issuing one on first use."""
    token = request.session.get(SESSION_KEY)
    if not token:
        token = secrets.token_urlsafe(32)
        request.session[SESSION_KEY] = token
    return token


async def verify_authenticity(request: Request):
    if request.method in SAFE_METHODS or is_json_request(request):
        return

    expected = request.session.get(SESSION_KEY)
    supplied = request.headers.get(HEADER_NAME)
    if not supplied:
        form = await request.form()
        supplied = form.get(FORM_FIELD)

    if (
        not expected
        or not isinstance(supplied, str)
        or not secrets.compare_digest(expected, supplied)
    ):
        logger.warning("csrf_rejected", path=request.url.path, method=request.method)
        raise CSRFError()
