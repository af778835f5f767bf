from fastapi import FastAPI
from fastapi import Request
from fastapi.middleware.cors import CORSMiddleware
import os # for .env files
from dotenv import load_dotenv #for .env files
import logging
import uvicorn
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles

from api import applications, jobs, metrics, profiles # importing routers
from api.profiles import UPLOAD_FOLDER
from errors import JobBoardError

load_dotenv()

logger = logging.getLogger("uvicorn.error")


app = FastAPI(title="Job Board API")


frontend_url = os.getenv('FRONTEND_URL', "http://localhost:4200")
logging.basicConfig(level=logging.INFO)
logging.info(f"Allowed frontend URL: {frontend_url}")
origins = [frontend_url]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],  # ALlow all HTTP methods (GET, POST, etc..)
    allow_headers=["*"],
)
os.makedirs(UPLOAD_FOLDER, exist_ok=True)
app.mount('/uploads', StaticFiles(directory=UPLOAD_FOLDER), name='uploads')


def _with_cors(response: JSONResponse) -> JSONResponse:
    #Manually add CORS headers, error responses skip the middleware
    response.headers["Access-Control-Allow-Origin"] = frontend_url
    return response


@app.exception_handler(JobBoardError)
async def job_board_error_handler(request: Request, exc: JobBoardError):
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {type(exc).__name__}: {exc.message}")
    return _with_cors(JSONResponse(status_code=exc.status_code, content={"detail": exc.message}))


@app.exception_handler(Exception)
async def global_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error: {exc}")
    return _with_cors(JSONResponse(
        status_code=500,
        content={"detail": "An unexpected error occured"}
    ))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f'Validation Error: {exc}')
    return _with_cors(JSONResponse(status_code=422, content={"detail": jsonable_encoder(exc.errors())}))


#Include routers from separate modules.
app.include_router(applications.router)
app.include_router(metrics.router)
app.include_router(jobs.router)
app.include_router(profiles.router, tags=["Profiles"])


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8000))
    host = os.environ.get("HOST", "localhost")
    uvicorn.run("main:app", host=host, port=port, reload=True)
