# nutriplan/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from nutriplan.config import settings
from nutriplan.routers import catalog, profiles

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(message)s",
)
log = logging.getLogger("nutriplan")


def create_app() -> FastAPI:
    app = FastAPI(title="NutriPlan API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", summary="Root")
    def root():
        return {"message": "NutriPlan API is running"}

    @app.get("/health", tags=["health"], summary="Health")
    def health():
        return {"status": "ok"}

    # API routers
    app.include_router(catalog.router, prefix="/v1/catalog", tags=["catalog"])
    app.include_router(profiles.router, prefix="/v1", tags=["profiles"])

    log.info("NutriPlan API ready (%d routes)", len(app.routes))
    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    log.info("Starting NutriPlan API on http://%s:%s", settings.API_HOST, settings.API_PORT)
    uvicorn.run("nutriplan.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=True)
