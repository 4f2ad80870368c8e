"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1 import router as v1_router
from app.core.config import Settings, get_settings
from app.core.database import build_engine, build_session_factory
from app.core.errors import register_exception_handlers
from app.core.logging_config import configure_logging, log_requests
from app.core.security import PasswordHasher, TokenService
from app.core.security_headers import add_security_headers
from app.schemas.health import MessageResponse


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application. Signing secret, hashing cost and the store are fixed here
    and read-only afterwards. Raises ConfigurationError when JWT_SECRET is missing.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    token_service = TokenService.from_settings(settings)
    engine = build_engine(settings)

    app = FastAPI(
        title="Accounts API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.token_service = token_service
    app.state.password_hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(add_security_headers)
    app.middleware("http")(log_requests)
    register_exception_handlers(app)

    app.include_router(v1_router, prefix=settings.API_V1_PREFIX)

    @app.get("/", response_model=MessageResponse)
    def root() -> MessageResponse:
        """Root route; minimal payload for discovery."""
        return MessageResponse(message="API is running...")

    return app


app = create_app()
