"""FastAPI application factory."""

from datetime import timedelta
from typing import Any, Iterator, Optional

from fastapi import Depends, FastAPI, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from cashcount.config import Settings
from cashcount.database.base import Database
from cashcount.database.factories import create_database
from cashcount.domain.denomination import DenominationService
from cashcount.domain.errors import (
    AuthenticationError,
    DomainError,
    ForbiddenError,
    NotFoundError,
    StorageError,
)
from cashcount.domain.statement import StatementService
from cashcount.domain.user import UserService
from cashcount.logging_config import configure_logging, get_logger
from cashcount.web.schemas import (
    CredentialsRequest,
    DenominationOut,
    ErrorResponse,
    LoginResponse,
    MessageResponse,
    ProfileResponse,
    RegisterResponse,
    StatementCreateRequest,
    StatementCreatedResponse,
    StatementDeletedResponse,
    StatementHeaderOut,
    StatementOut,
    StatementUpdateRequest,
    UserOut,
)

logger = get_logger("web")


def _map_error_to_http(err: DomainError) -> tuple[int, ErrorResponse]:
    body = ErrorResponse(type=type(err).__name__, message=str(err))

    if isinstance(err, AuthenticationError):
        return 401, body

    if isinstance(err, ForbiddenError):
        return 403, body

    if isinstance(err, NotFoundError):
        return 404, body

    if isinstance(err, StorageError):
        return 500, body

    # ValidationError, ConflictError and any other domain rejection
    return 400, body


def _parse_bearer(authorization: Optional[str]) -> Optional[str]:
    if authorization is None:
        return None
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise AuthenticationError("Invalid token")
    return parts[1]


def create_app(db: Database, settings: Settings) -> FastAPI:
    """Build the HTTP application around a database handle.

    Every request works on its own clone of ``db``, closed when the request ends.

    Raises:
        ValueError: If no token secret is configured
    """
    if not settings.jwt_secret:
        raise ValueError("CASHCOUNT_JWT_SECRET must be set to serve HTTP requests")

    app = FastAPI(title="cashcount")
    app.state.settings = settings

    # --- dependencies --------------------------------------------------------

    def get_db() -> Iterator[Database]:
        handle = db.clone()
        try:
            yield handle
        finally:
            handle.disconnect()

    def get_user_service(handle: Database = Depends(get_db)) -> UserService:
        return UserService(
            handle,
            secret=settings.jwt_secret,
            token_ttl=timedelta(minutes=settings.token_ttl_minutes),
            bcrypt_rounds=settings.bcrypt_rounds,
        )

    def get_statement_service(handle: Database = Depends(get_db)) -> StatementService:
        return StatementService(handle)

    def get_denomination_service(handle: Database = Depends(get_db)) -> DenominationService:
        return DenominationService(handle)

    def current_user_id(
        authorization: Optional[str] = Header(None),
        users: UserService = Depends(get_user_service),
    ) -> int:
        return users.authenticate(_parse_bearer(authorization))

    def scoped_user_id(
        authorization: Optional[str] = Header(None),
        users: UserService = Depends(get_user_service),
    ) -> Optional[int]:
        # Only checked when ownership is enforced on list/delete
        if not settings.enforce_ownership:
            return None
        return users.authenticate(_parse_bearer(authorization))

    # --- exception handlers --------------------------------------------------

    @app.exception_handler(DomainError)
    async def handle_domain_error(_: Request, exc: DomainError) -> JSONResponse:
        status, body = _map_error_to_http(exc)
        if status == 500:
            logger.error("Storage failure: %s", exc)
        return JSONResponse(status_code=status, content=body.model_dump(exclude_none=True))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(_: Request, exc: RequestValidationError) -> JSONResponse:
        body = ErrorResponse(
            type="RequestValidationError",
            message="invalid request",
            details=[
                {"loc": list(e.get("loc", ())), "msg": e.get("msg", ""), "type": e.get("type", "")}
                for e in exc.errors()
            ],
        )
        return JSONResponse(status_code=400, content=body.model_dump())

    @app.exception_handler(Exception)
    async def handle_unexpected(_: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error")
        body = ErrorResponse(type=type(exc).__name__, message="internal server error")
        return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))

    # --- routes --------------------------------------------------------------

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post(
        "/register",
        response_model=RegisterResponse,
        status_code=201,
        responses={400: {"model": ErrorResponse}},
    )
    def register(req: CredentialsRequest, users: UserService = Depends(get_user_service)) -> Any:
        profile = users.register(req.email, req.password)
        return RegisterResponse(
            message="User registered", user=UserOut(id=profile.id, email=profile.email)
        )

    @app.post(
        "/login",
        response_model=LoginResponse,
        responses={401: {"model": ErrorResponse}},
    )
    def login(req: CredentialsRequest, users: UserService = Depends(get_user_service)) -> Any:
        token = users.login(req.email, req.password)
        return LoginResponse(message="Login successful", token=token)

    @app.get(
        "/profile",
        response_model=ProfileResponse,
        responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    )
    def profile(
        user_id: int = Depends(current_user_id),
        users: UserService = Depends(get_user_service),
    ) -> Any:
        found = users.get_profile(user_id)
        return ProfileResponse(profile=UserOut(id=found.id, email=found.email))

    @app.get("/denominations", response_model=list[DenominationOut])
    def list_denominations(
        denominations: DenominationService = Depends(get_denomination_service),
    ) -> Any:
        return [DenominationOut.from_domain(d) for d in denominations.list_all()]

    @app.post(
        "/statements",
        response_model=StatementCreatedResponse,
        status_code=201,
        responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
    )
    def create_statement(
        req: StatementCreateRequest,
        user_id: int = Depends(current_user_id),
        statements: StatementService = Depends(get_statement_service),
    ) -> Any:
        statement_id = statements.create_statement(
            owner_id=user_id,
            store_name=req.store_name,
            date=req.date,
            total_amount=req.total_amount,
            denomination_details=[d.to_domain() for d in req.denomination_details],
            notes=req.notes,
        )
        return StatementCreatedResponse(
            message="Statement created successfully", statement_id=statement_id
        )

    @app.get("/statements", response_model=list[StatementOut])
    def list_statements(
        user_id: Optional[int] = Depends(scoped_user_id),
        statements: StatementService = Depends(get_statement_service),
    ) -> Any:
        return [StatementOut.from_view(v) for v in statements.list_statements(owner_id=user_id)]

    @app.put(
        "/statements/{statement_id}",
        response_model=MessageResponse,
        responses={
            400: {"model": ErrorResponse},
            401: {"model": ErrorResponse},
            403: {"model": ErrorResponse},
        },
    )
    def update_statement(
        statement_id: int,
        req: StatementUpdateRequest,
        user_id: int = Depends(current_user_id),
        statements: StatementService = Depends(get_statement_service),
    ) -> Any:
        statements.update_statement(
            owner_id=user_id,
            statement_id=statement_id,
            store_name=req.store_name,
            date=req.date,
            total_amount=req.total_amount,
            denominations=[d.to_domain() for d in req.denominations],
            notes=req.notes,
        )
        return MessageResponse(message="Statement updated successfully")

    @app.delete(
        "/statements/{statement_id}",
        response_model=StatementDeletedResponse,
        responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    )
    def delete_statement(
        statement_id: int,
        user_id: Optional[int] = Depends(scoped_user_id),
        statements: StatementService = Depends(get_statement_service),
    ) -> Any:
        deleted = statements.delete_statement(statement_id, owner_id=user_id)
        return StatementDeletedResponse(
            message="Statement deleted successfully",
            statement=StatementHeaderOut.from_domain(deleted),
        )

    return app


def create_asgi_app() -> FastAPI:
    """Build the app from environment settings (for ``uvicorn --factory``)."""
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    db = create_database(settings.database_url)
    db.initialize_schema()
    return create_app(db, settings)
