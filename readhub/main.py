import logging
from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from readhub import __version__
from readhub.config import settings
from readhub.database import engine, Base, SessionLocal
from readhub.exceptions import ReadHubError, AuthenticationError
from readhub.routes import auth, users, books, transactions
from readhub.services.auth import ensure_admin, verify_token

logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log incoming requests."""
    async def dispatch(self, request: Request, call_next):
        auth_header = request.headers.get("Authorization")
        client_ip = request.client.host if request.client else "unknown"
        logger.info(f"{request.method} {request.url.path} - IP: {client_ip} - Auth: {'Present' if auth_header else 'Missing'}")
        
        response = await call_next(request)
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and the bootstrap administrator on startup."""
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    
    if settings.admin_email and settings.admin_password:
        db = SessionLocal()
        try:
            ensure_admin(
                db,
                email=settings.admin_email,
                password=settings.admin_password,
                first_name=settings.admin_first_name,
                last_name=settings.admin_last_name,
            )
        finally:
            db.close()
    
    yield
    
    logger.info("Shutting down ReadHub API...")


app = FastAPI(
    title="ReadHub Book Management API",
    description="Backend API for the ReadHub library: accounts, catalog and borrow transactions",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    # Token verification runs once for every request
    dependencies=[Depends(verify_token)],
)

app.add_middleware(LoggingMiddleware)


@app.exception_handler(ReadHubError)
async def readhub_error_handler(request: Request, exc: ReadHubError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


# Include routers
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(books.router)
app.include_router(transactions.router)

@app.get("/")
async def root():
    return {"message": "ReadHub Book Management API", "version": __version__}

@app.get("/api/health")
async def health_check():
    return {"status": "healthy"}

if __name__ == "__main__":
    import uvicorn
    ssl_kwargs = {}
    if settings.ssl_enabled:
        ssl_kwargs = {"ssl_certfile": settings.ssl_certfile, "ssl_keyfile": settings.ssl_keyfile}
    uvicorn.run(
        "readhub.main:app",
        host=settings.host,
        port=settings.port,
        **ssl_kwargs
    )
