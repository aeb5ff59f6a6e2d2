import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import ALLOWED_ORIGINS, PORT
from .exceptions import UploadTooLarge
from .routes.cases import router as cases_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("multipart").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Case submission service starting up...")
    yield
    logger.info("Case submission service shutting down...")


app = FastAPI(title="Case Submission API", version="1.0.0", lifespan=lifespan)


@app.exception_handler(UploadTooLarge)
async def upload_too_large_handler(request: Request, exc: UploadTooLarge):
    logger.warning(f"Upload rejected for {request.url.path}: {exc}")
    return JSONResponse(status_code=413, content={"error": "Upload too large"})


logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# Routes
app.include_router(cases_router)


@app.get("/health")
def health():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=PORT)
