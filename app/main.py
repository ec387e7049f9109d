import logging
import time
from functools import lru_cache

from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError
from starlette.status import HTTP_422_UNPROCESSABLE_ENTITY, HTTP_500_INTERNAL_SERVER_ERROR

from fastapi import FastAPI, Request, Depends
from fastapi.responses import JSONResponse

from app.config.Database import get_supabase_client
from app.config.Settings import get_settings
from app.models.Request import ProductSearchRequest
from app.models.Response import ErrorResponse, ProductSearchResponse
from app.repositories.CatalogRepository import CatalogRepository, CatalogRepositoryError
from app.repositories.InMemoryCatalogRepository import InMemoryCatalogRepository
from app.repositories.SupabaseCatalogRepository import SupabaseCatalogRepository
from app.routine.ProductSelector import ProductSelector

settings = get_settings()

app = FastAPI(title="Skincare Product Search")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


def _validation_error_response(request: Request, errors) -> JSONResponse:
    error_details = [
        {
            "field": ".".join(str(loc_part) for loc_part in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in errors
    ]

    return JSONResponse(
        status_code=HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": error_details,
            "error": "Validation Error",
            "path": request.url.path,
        }
    )


@app.exception_handler(ValidationError)
async def pydantic_validation_exception_handler(request: Request, exc: ValidationError):
    return _validation_error_response(request, exc.errors())


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    return _validation_error_response(request, exc.errors())


logger = logging.getLogger('uvicorn')
logging.getLogger('app').setLevel(settings.log_level.upper())


@app.exception_handler(CatalogRepositoryError)
async def catalog_exception_handler(request: Request, exc: CatalogRepositoryError):
    logger.error(f"[API] Catálogo indisponível: {exc}")
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error=str(exc), search_latency=0).model_dump(by_alias=True),
    )


@lru_cache(maxsize=1)
def get_catalog_repository() -> CatalogRepository:
    if settings.catalog_backend == "supabase":
        logger.info(f"[API] Catálogo Supabase: tabela {settings.products_table}")
        return SupabaseCatalogRepository(get_supabase_client(), table=settings.products_table)

    logger.info(f"[API] Catálogo em memória: {settings.catalog_path}")
    return InMemoryCatalogRepository.from_json_file(settings.catalog_path)


def get_product_selector(repository: CatalogRepository = Depends(get_catalog_repository)) -> ProductSelector:
    return ProductSelector(repository)


@app.get('/health', summary='Health check')
def health():
    return {"status": "ok"}


@app.post('/tools/product-search', summary='Selects products for a skincare routine', response_model=ProductSearchResponse)
def product_search(
        search_request: ProductSearchRequest,
        selector: ProductSelector = Depends(get_product_selector),
):
    start_time = time.perf_counter()
    profile = search_request.to_profile()
    logger.info(f"[API] Perfil recebido: {profile.model_dump(exclude_none=True)}")

    try:
        result = selector.select_routine(profile)
    except Exception as e:
        search_latency = int((time.perf_counter() - start_time) * 1000)
        logger.error(f"[API] Erro na busca de produtos: {e}", exc_info=True)
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error=str(e), search_latency=search_latency).model_dump(by_alias=True),
        )

    search_latency = int((time.perf_counter() - start_time) * 1000)
    logger.info(f"[API] Busca concluída em {search_latency}ms com {result.count} produtos")

    return ProductSearchResponse.from_result(result, search_latency)


if __name__ == '__main__':
    import uvicorn

    uvicorn.run("app.main:app", host=settings.host, port=settings.port)
