from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from dotenv import load_dotenv
import os
from datetime import datetime
from loguru import logger

# ==================== IMPORTS ====================
from models import Base
from db import engine
import schemas
import poll
import analytics
import admin

# Carregar variáveis de ambiente
load_dotenv()

LOG_FILE = os.getenv("LOG_FILE", "logs/info.log")
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

logger.add(LOG_FILE, rotation="1 week", retention="4 weeks", level="INFO")

# Criar aplicação FastAPI
app = FastAPI(
    title="Community Poll API",
    description="Questionário da comunidade com painel de analytics",
    version="1.0.0"
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(poll.router)
app.include_router(analytics.router)
app.include_router(admin.router)

# ==================== ROTAS BÁSICAS ====================

@app.get("/", tags=["Health Check"])
async def root():
    return {
        "message": "✅ Community Poll API está rodando!",
        "status": "online",
        "timestamp": datetime.now().isoformat()
    }

@app.get("/health", tags=["Health Check"])
async def health_check():
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "version": "1.0.0"
    }

# ==================== STARTUP/SHUTDOWN ====================

@app.on_event("startup")
async def startup_event():
    logger.info("🚀 API iniciando...")
    Base.metadata.create_all(bind=engine)
    logger.info("✅ API pronta para receber requisições!")

@app.on_event("shutdown")
async def shutdown_event():
    logger.info("🛑 API encerrando...")

# ==================== TRATAMENTO DE ERROS ====================

def error_response(status_code: int, error, headers=None) -> JSONResponse:
    body = schemas.ErrorResponse(error=error, status_code=status_code)
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body),
        headers=headers,
    )

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc):
    logger.error(f"HTTP Error: {exc.status_code} - {exc.detail}")
    return error_response(exc.status_code, exc.detail, getattr(exc, "headers", None))

@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    logger.error(f"Erro não tratado: {str(exc)}")
    return error_response(500, "Erro interno do servidor")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="127.0.0.1", port=8000, reload=True, log_level="info")
