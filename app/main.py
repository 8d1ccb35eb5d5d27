from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.concurrency import run_in_threadpool
from starlette.middleware.sessions import SessionMiddleware

from . import fortunes
from .config import APP_DIR, LOG_JSON, LOG_LEVEL, SECRET_KEY
from .csrf import CSRFError, csrf_token, is_json_request, verify_authenticity
from .db import init_db
from .fortunes import NotFoundError, ValidationError
from .logger import configure_logging, get_logger
from .models import ErrorOut, FortuneOut

MALFORMED_JSON = "Malformed JSON body"

configure_logging(LOG_LEVEL, json_logs=LOG_JSON)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("fortunes_ready", count=fortunes.count())
    yield


app = FastAPI(title="Fortunes", version="1.0.0", lifespan=lifespan)

templates = Jinja2Templates(directory=str(APP_DIR / "templates"))
app.mount("/static", StaticFiles(directory=str(APP_DIR / "static")), name="static")

# Session cookie only carries the CSRF token for form posts
# NOTE: Set https_only=True when running behind HTTPS in production.
app.add_middleware(
    SessionMiddleware,
    secret_key=SECRET_KEY,
    session_cookie="fortunes_sess",
    https_only=False,
    same_site="lax"
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse({"error": exc.messages}, status_code=422)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse({"error": [exc.message]}, status_code=404)


@app.exception_handler(CSRFError)
async def csrf_error_handler(request: Request, exc: CSRFError):
    return JSONResponse({"error": [exc.message]}, status_code=422)


@app.get("/", response_class=HTMLResponse)
def index(request: Request):
    # The page talks to /api/fortune with same-origin JSON fetches
    return templates.TemplateResponse(
        request,
        "index.html",
        {"csrf_token": csrf_token(request), "fortune_text": "", "draft_text": ""},
    )


@app.get("/health")
def health():
    return {"status": "ok", "count": fortunes.count()}


@app.get("/api/fortune", response_model=FortuneOut, responses={404: {"model": ErrorOut}})
def show_fortune():
    fortune = fortunes.random_fortune()
    logger.debug("fortune_served", fortune_id=fortune.id)
    return {"fortune": fortune}


@app.post(
    "/api/fortune",
    response_model=FortuneOut,
    responses={400: {"model": ErrorOut}, 422: {"model": ErrorOut}},
    dependencies=[Depends(verify_authenticity)],
)
async def create_fortune(request: Request):
    """Accepts ``{"fortune": "..."}`` as JSON, or a form post with a CSRF token."""
    if is_json_request(request):
        try:
            body = await request.json()
        except ValueError:
            return JSONResponse({"error": [MALFORMED_JSON]}, status_code=400)
        text = body.get("fortune") if isinstance(body, dict) else None
    else:
        form = await request.form()
        text = form.get("fortune")

    fortune = await run_in_threadpool(fortunes.create, text)
    return {"fortune": fortune}
