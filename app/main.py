import logging
from contextlib import asynccontextmanager
from functools import lru_cache

from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.config import load_settings_or_exit
from app.adapters.base import BaseModelAdapter, ProviderError
from app.adapters.openrouter import OpenRouterAdapter
from app.models.api import GenerateRequest, GenerateResponse, ErrorResponse
from app.services.generation import GenerationService, EmptyCompletionError

# Setup Logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("prompt_relay")

settings = load_settings_or_exit()
logging.getLogger().setLevel(settings.LOG_LEVEL.upper())

PROMPT_REQUIRED = "Prompt is required in the request body."
UNEXPECTED_ERROR = "An unexpected error occurred."


@lru_cache
def get_adapter() -> BaseModelAdapter:
    return OpenRouterAdapter(settings)

def get_generation_service(adapter: BaseModelAdapter = Depends(get_adapter)) -> GenerationService:
    return GenerationService(adapter)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse.from_message(message).model_dump(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Server listening on port {settings.PORT}")
    logger.info(f"Serving static files from: {settings.STATIC_DIR}")
    logger.info(f"Access the app at http://localhost:{settings.PORT} (or your VPS IP)")
    yield

app = FastAPI(
    title="Prompt Relay",
    description="Relays browser prompts to OpenRouter and returns the reasoning and content.",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # The only body field is the prompt, so any body validation failure means it is missing
    logger.warning(f"Rejected request to {request.url.path}: {exc.errors()}")
    return error_response(400, PROMPT_REQUIRED)


@app.post(
    "/generate",
    response_model=GenerateResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate_endpoint(
    request: GenerateRequest,
    service: GenerationService = Depends(get_generation_service),
):
    if not request.prompt:
        logger.warning("Rejected request without a prompt")
        return error_response(400, PROMPT_REQUIRED)

    logger.info(f'Received prompt: "{request.prompt}"')

    try:
        text = await service.generate(request.prompt)
    except EmptyCompletionError as e:
        logger.error(f"OpenRouter response did not contain content or reasoning: {e.result}")
        return error_response(500, str(e))
    except ProviderError as e:
        logger.error(f"Error calling OpenRouter API: {e.message} (status={e.status_code})")
        return error_response(e.status_code or 500, f"API Error: {e.message or UNEXPECTED_ERROR}")
    except Exception as e:
        logger.error(f"Error calling OpenRouter API: {e!r}")
        return error_response(500, f"API Error: {str(e) or UNEXPECTED_ERROR}")

    logger.info("Generated response successfully.")
    return GenerateResponse(response=text)

@app.get("/health")
async def health_check():
    return {"status": "ok"}

# Mounted last so the API routes above take precedence
app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")
