# storefront/main.py
import logging

from fastapi import FastAPI

from .catalog.router import router as catalog_router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Storefront catalogue",
    description=(
        "Catalogue API for the ethnic wear storefront: search, facet "
        "filters, sorting and pagination over the static collection and "
        "the products added by administrators."
    ),
    version="1.0.0",
)

app.include_router(catalog_router)


@app.get("/")
def health_check():
    return {"status": "ok", "message": "Storefront catalogue live"}
