# apps/api/app/main.py
import os
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.core.config import settings
from app.core.errors import AppError
from app.core.logging import configure_logging, get_logger

# ROUTERLAR
from app.api.routes_auth import router as auth_router
from app.api.routes_users import router as users_router
from app.api.routes_dashboard import router as dashboard_router
from app.api.routes_employees import router as employees_router
from app.api.routes_catalog import router as catalog_router
from app.api.routes_projects import router as projects_router

configure_logging()
logger = get_logger("app")

app = FastAPI(title=settings.APP_NAME)

# ---------------- CORS ----------------
# ENV ile override edilebilir: CORS_ALLOW_ORIGINS="https://foo.com,https://bar.com"
_env_origins = settings.CORS_ALLOW_ORIGINS.strip()
if _env_origins:
    FRONT_ORIGINS = [o.strip() for o in _env_origins.split(",") if o.strip()]
else:
    FRONT_ORIGINS = [
        "http://localhost:5173",                                    # local vite
        "http://127.0.0.1:5173",
        "http://localhost:3000",
    ]

app.add_middleware(
    CORSMiddleware,
    allow_origins=FRONT_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["*"],
    max_age=86400,
)
print(f"[cors] allow_origins={FRONT_ORIGINS}")

# ---- Hata gövdesi: {"status": <etiket>, "error": <mesaj>} ----
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())

@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("request.unhandled path=%s", request.url.path)
    return JSONResponse(status_code=500, content={"status": "internal_error", "error": str(exc)})

# Yerel avatar depolama: MEDIA_DIR -> MEDIA_URL
if settings.IMAGE_STORAGE == "local":
    os.makedirs(settings.MEDIA_DIR, exist_ok=True)
    app.mount(settings.MEDIA_URL, StaticFiles(directory=settings.MEDIA_DIR, check_dir=False), name="media")

@app.on_event("startup")
def log_startup():
    print(f"[store] backend={settings.DB_BACKEND} path={settings.DB_PATH if settings.DB_BACKEND == 'json' else '-'}")
    print(f"[avatar] storage={settings.IMAGE_STORAGE}")

@app.get("/healthz")
def healthz():
    return {"ok": True}

# Router kayıtları
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(dashboard_router)
app.include_router(employees_router)
app.include_router(catalog_router)
app.include_router(projects_router)
