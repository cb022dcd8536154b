"""
FastAPI application - Main entry point

Serves the license storefront page and the form actions behind it. All
storefront state lives server-side, one StorefrontState per browser session.
"""

from dotenv import load_dotenv

load_dotenv()

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, Form, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from storefront.controller import StorefrontController
from storefront.integrations.clients.mocks.local_license_api import MockLicenseApiClient
from storefront.integrations.clients.real_http.license_api import LicenseApiClient
from storefront.integrations.contracts.interfaces import LicenseCatalogClient
from storefront.state import SessionStore, StorefrontState
from storefront.utils.config_loader import StorefrontConfig, load_storefront_config
from storefront.validation import FormValidationError, build_contact_details
from storefront.view import build_view

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"

config = load_storefront_config(load_env_file=False)

# Initialize FastAPI app
app = FastAPI(
    title="License Storefront",
    description="Browse the license catalogue, build a cart and place purchase orders",
    version="1.0.0",
)

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

# ============================================================================
# DEPENDENCY INJECTION
# ============================================================================


def _select_license_client(cfg: StorefrontConfig) -> LicenseCatalogClient:
    if cfg.use_mock_backend:
        logger.info("Using in-memory mock license backend")
        return MockLicenseApiClient(vendor=cfg.vendor)
    return LicenseApiClient(base_url=cfg.backend_url, timeout_seconds=cfg.timeout_seconds)


license_client = _select_license_client(config)
session_store = SessionStore(ttl=config.session_ttl_seconds, max_sessions=config.max_sessions)


def get_license_client() -> LicenseCatalogClient:
    return license_client


def get_session_store() -> SessionStore:
    return session_store


def get_config() -> StorefrontConfig:
    return config


class StorefrontSession:
    """The caller's session state with a controller bound to it."""

    def __init__(
        self,
        session_id: Optional[str],
        state: StorefrontState,
        created: bool,
        client: LicenseCatalogClient,
        cfg: StorefrontConfig,
    ):
        self.cfg = cfg
        self.session_id = session_id
        self.state = state
        self.created = created
        self.controller = StorefrontController(state, client, vendor=cfg.vendor)

    def attach_cookie(self, response: Response) -> Response:
        if self.created:
            response.set_cookie(
                self.cfg.session_cookie,
                self.session_id,
                httponly=True,
                samesite="lax",
                max_age=self.cfg.session_ttl_seconds,
            )
        return response

    def redirect_home(self) -> Response:
        return self.attach_cookie(RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER))


def open_session(
    request: Request,
    store: SessionStore = Depends(get_session_store),
    client: LicenseCatalogClient = Depends(get_license_client),
    cfg: StorefrontConfig = Depends(get_config),
) -> StorefrontSession:
    """Resolve the cookie session, starting a new one when it is missing or expired."""
    session_id, state, created = store.get_or_create(request.cookies.get(cfg.session_cookie))
    return StorefrontSession(session_id, state, created, client, cfg)


def peek_session(
    request: Request,
    store: SessionStore = Depends(get_session_store),
    client: LicenseCatalogClient = Depends(get_license_client),
    cfg: StorefrontConfig = Depends(get_config),
) -> StorefrontSession:
    """Resolve the cookie session without storing a new one."""
    session_id = request.cookies.get(cfg.session_cookie)
    return StorefrontSession(session_id, store.peek(session_id), False, client, cfg)


def _render(
    request: Request,
    session: StorefrontSession,
    ctx: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
) -> Response:
    base = {
        "brand_name": session.cfg.brand_name,
        "vendor": session.cfg.vendor,
        "year": datetime.now().year,
        "form": {},
        "field_errors": {},
        "view": build_view(session.state),
    }
    base.update(ctx or {})
    response = templates.TemplateResponse(request, "index.html", base, status_code=status_code)
    return session.attach_cookie(response)


# ============================================================================
# ENDPOINTS
# ============================================================================


@app.get("/health", tags=["Health"])
async def health_check(store: SessionStore = Depends(get_session_store)):
    return {
        "status": "healthy",
        "backend": config.backend_url,
        "mode": config.integrations_mode,
        "sessions": len(store),
        "timestamp": datetime.now().isoformat(),
    }


@app.get("/", response_class=HTMLResponse, tags=["Storefront"])
async def index(request: Request, session: StorefrontSession = Depends(open_session)):
    await session.controller.ensure_loaded()
    return _render(request, session)


@app.get("/state", tags=["Storefront"])
async def storefront_state(session: StorefrontSession = Depends(peek_session)):
    return session.attach_cookie(JSONResponse(build_view(session.state)))


# ---------------- catalog ----------------

@app.post("/search", tags=["Catalog"])
async def search(q: str = Form(""), session: StorefrontSession = Depends(open_session)):
    await session.controller.search(q)
    return session.redirect_home()


@app.post("/seed", tags=["Catalog"])
async def seed(session: StorefrontSession = Depends(open_session)):
    await session.controller.seed()
    return session.redirect_home()


# ---------------- cart ----------------

@app.post("/cart/add", tags=["Cart"])
async def cart_add(sku: str = Form(...), session: StorefrontSession = Depends(open_session)):
    session.controller.add_to_cart(sku)
    return session.redirect_home()


@app.post("/cart/update", tags=["Cart"])
async def cart_update(
    sku: str = Form(...),
    quantity: str = Form("1"),
    session: StorefrontSession = Depends(open_session),
):
    session.controller.update_quantity(sku, quantity)
    return session.redirect_home()


@app.post("/cart/remove", tags=["Cart"])
async def cart_remove(sku: str = Form(...), session: StorefrontSession = Depends(open_session)):
    session.controller.remove_from_cart(sku)
    return session.redirect_home()


# ---------------- orders ----------------

@app.post("/order", tags=["Orders"])
async def place_order(
    request: Request,
    company: str = Form(""),
    name: str = Form(""),
    email: str = Form(""),
    phone: str = Form(""),
    notes: str = Form(""),
    session: StorefrontSession = Depends(open_session),
):
    form = {"company": company, "name": name, "email": email, "phone": phone, "notes": notes}
    try:
        contact = build_contact_details(form)
    except FormValidationError as e:
        return _render(
            request,
            session,
            {"form": form, "field_errors": e.field_errors, "form_error": e.message},
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    result = await session.controller.place_order(contact)
    if result is None:
        # Keep what the user typed so a failed order can be resubmitted.
        return _render(request, session, {"form": form})
    return session.redirect_home()
