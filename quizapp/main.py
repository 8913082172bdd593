from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from quizapp.config import settings
from quizapp.exceptions import NotFoundError, QuizAppException
from quizapp.log import get_logger
from quizapp.router import quizzes_router, results_router

log = get_logger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.API_VERSION
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        settings.FRONTEND_URL,
        "http://localhost:3000",  # For local development
        "http://localhost:5173",  # For Vite development
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(quizzes_router, prefix="/api/quiz", tags=["Quiz"])
app.include_router(results_router, prefix="/api/results", tags=["Results"])


##########################
### Exception handlers ###
##########################
@app.exception_handler(QuizAppException)
async def quizapp_exception_handler(request: Request, exc: QuizAppException):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    log.debug("Invalid payload for %s %s: %s", request.method, request.url.path, exc.errors())
    if any(tuple(err.get("loc", ()))[:1] == ("path",) for err in exc.errors()):
        # the only path parameter is a quiz id, so a malformed one names no quiz
        not_found = NotFoundError("Quiz not found")
        return JSONResponse(status_code=not_found.status_code, content=not_found.to_dict())
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Invalid request payload", "error": str(exc)},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Server Error", "error": str(exc)},
    )


#####################
### Root Endpoint ###
#####################
@app.get("/")
def read_root():
    return {"success": True, "name": settings.PROJECT_NAME, "environment": settings.ENV, "version": settings.API_VERSION}
