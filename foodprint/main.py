import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from foodprint.api.v1.emission_endpoints import router as emission_router
from foodprint.core.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title=settings.app_name,
    description="API for estimating the greenhouse-gas footprint of food-delivery orders",
    version="1.0.0"
)

# --- CORS: allow the frontend to call this API ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],          # tighten in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(emission_router, prefix="/api/v1")

@app.get("/")
def read_root():
    return {"message": "Welcome to the Foodprint API!"}
