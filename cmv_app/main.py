from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from cmv_app.config import settings
from cmv_app.exceptions import (
    CmvError,
    InvalidQuantity,
    InsufficientPeriodData,
    UnknownIngredientReference,
    EntityNotFound,
    AuditStateError
)
from cmv_app.schemas import ErrorResponse
from cmv_app.api.v1 import (
    ingredients,
    suppliers,
    recipes,
    inventory,
    cmv,
    waste,
    shopping,
    dashboard
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    InvalidQuantity: status.HTTP_400_BAD_REQUEST,
    InsufficientPeriodData: status.HTTP_422_UNPROCESSABLE_ENTITY,
    UnknownIngredientReference: status.HTTP_404_NOT_FOUND,
    EntityNotFound: status.HTTP_404_NOT_FOUND,
    AuditStateError: status.HTTP_409_CONFLICT,
}

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Restaurant recipe costing, inventory audit and CMV reporting",
    version="1.0.0",
    debug=settings.DEBUG
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_credentials=True,
    allow_headers=["*"],
    allow_origins=settings.allowed_origins_list,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
)


@app.exception_handler(CmvError)
async def handle_domain_error(request: Request, exc: CmvError):
    status_code = next(
        (code for error_type, code in ERROR_STATUS.items() if isinstance(exc, error_type)),
        status.HTTP_400_BAD_REQUEST
    )
    logger.warning("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    body = ErrorResponse(message=type(exc).__name__, detail=exc.message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


# Health check
@app.get("/")
def read_root():
    return {
        "app": settings.APP_NAME,
        "version": "1.0.0",
        "status": "running"
    }


@app.get("/health")
def health_check():
    return {"status": "healthy"}


# Include routers
app.include_router(ingredients.router, prefix=f"{settings.API_V1_PREFIX}/ingredients", tags=["Ingredients"])
app.include_router(suppliers.router, prefix=f"{settings.API_V1_PREFIX}/suppliers", tags=["Suppliers"])
app.include_router(recipes.router, prefix=f"{settings.API_V1_PREFIX}/recipes", tags=["Recipes"])
app.include_router(inventory.router, prefix=f"{settings.API_V1_PREFIX}/inventory", tags=["Inventory"])
app.include_router(cmv.router, prefix=f"{settings.API_V1_PREFIX}/cmv", tags=["CMV"])
app.include_router(waste.router, prefix=f"{settings.API_V1_PREFIX}/waste", tags=["Waste"])
app.include_router(shopping.router, prefix=f"{settings.API_V1_PREFIX}/shopping", tags=["Shopping List"])
app.include_router(dashboard.router, prefix=f"{settings.API_V1_PREFIX}/dashboard", tags=["Dashboard"])

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("cmv_app.main:app", host="0.0.0.0", port=8000, reload=True)
