"""FastAPI application wiring the catalog proxy."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import Depends, FastAPI, Query
from fastapi.responses import FileResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles

from .catalog_client import CatalogClient, close_catalog_client, get_catalog_client
from .config import settings
from .filters import ProductQuery, filter_products
from .models import ErrorResponse, HealthResponse, Product

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVEL = logging.getLevelName(settings.log_level.upper())

# uvicorn installs its own handlers; ``force=True`` replaces them so fetch
# retries show up in the same format as everything else.
logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, force=True)
for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "httpx"):
    logging.getLogger(name).setLevel(LOG_LEVEL)

logger = logging.getLogger(__name__)
logger.info("Logging configured at %s", settings.log_level.upper())

STATIC_DIR = Path(settings.static_dir)
NOT_FOUND_MESSAGE = "Product not found"

app = FastAPI(title="Product Catalog Proxy")
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")


@app.on_event("shutdown")
async def shutdown_event() -> None:
    await close_catalog_client()


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok", upstream=settings.catalog_api_url)


@app.get("/", include_in_schema=False)
async def root() -> RedirectResponse:
    return RedirectResponse("/product", status_code=302)


@app.get("/product", include_in_schema=False)
async def product_page() -> FileResponse:
    return FileResponse(STATIC_DIR / "product.html")


@app.get("/dashboard", include_in_schema=False)
async def dashboard_page() -> FileResponse:
    return FileResponse(STATIC_DIR / "dashboard.html")


@app.get("/api/products")
async def list_products(
    title: Optional[str] = Query(None, description="Case-insensitive substring of the title"),
    slug: Optional[str] = Query(None, description="Exact slug"),
    min_price: Optional[str] = Query(None, alias="minPrice", description="Inclusive lower price bound"),
    max_price: Optional[str] = Query(None, alias="maxPrice", description="Inclusive upper price bound"),
    client: CatalogClient = Depends(get_catalog_client),
) -> List[Dict[str, Any]]:
    products = await client.fetch_all()
    query = ProductQuery(title=title, slug=slug, min_price=min_price, max_price=max_price)
    filtered = filter_products(products, query)
    logger.info("list_products query=%s upstream=%s returned=%s", query, len(products), len(filtered))
    return filtered


@app.get(
    "/api/products/{product_id}",
    responses={200: {"model": Product}, 404: {"model": ErrorResponse}},
)
async def get_product(product_id: str, client: CatalogClient = Depends(get_catalog_client)) -> Any:
    product = await client.fetch_by_id(product_id)
    if product is None:
        return JSONResponse(status_code=404, content={"error": NOT_FOUND_MESSAGE})
    return product


def main() -> None:
    logger.info("Server running at http://localhost:%s/product", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
