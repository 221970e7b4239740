from fastapi import FastAPI
from scholarguard.logger import logger
from scholarguard.config import CORS_ORIGINS
from scholarguard.routers.analysis import router as analysis_router
from scholarguard.routers.documents import router as documents_router

from fastapi.middleware.cors import CORSMiddleware

app = FastAPI(title="ScholarGuard API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(analysis_router)
app.include_router(documents_router)


@app.get("/health")
async def health():
    return {"status": "ok"}


logger.info("ScholarGuard API ready")
