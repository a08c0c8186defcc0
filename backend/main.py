# backend/main.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from dotenv import load_dotenv
import logging

load_dotenv()

from config import settings
from database import init_db

# Routers
from routes.orders import router as orders_router
from routes.upload import router as upload_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create tables for a fresh database
init_db()

app = FastAPI(title="Orders CRM API", version="1.0.0")

# Static and upload directories must exist before StaticFiles is mounted
settings.PUBLIC_DIR.mkdir(parents=True, exist_ok=True)
settings.upload_dir.mkdir(parents=True, exist_ok=True)


# Every error leaves the API as {"error": message}
@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    first = exc.errors()[0] if exc.errors() else {}
    where = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = f"{where}: {first.get('msg')}" if where else str(first.get("msg", "Invalid request"))
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": str(exc) or exc.__class__.__name__})


# Register routers
app.include_router(orders_router)
app.include_router(upload_router)


@app.get("/", include_in_schema=False)
def index():
    return FileResponse(settings.PUBLIC_DIR / "index.html")


# Static files last so the API routes above win
app.mount(settings.UPLOAD_URL_PREFIX, StaticFiles(directory=settings.upload_dir), name="uploads")
app.mount("/", StaticFiles(directory=settings.PUBLIC_DIR), name="public")


if __name__ == "__main__":
    import uvicorn

    logger.info("Orders CRM running on http://localhost:%s", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
