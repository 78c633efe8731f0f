"""
Crop Advisor API.
FastAPI application serving yield prediction, fertilizer planning and field health.
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cropadvisor.config import CORS_ORIGINS, LOG_LEVEL
from cropadvisor.routers import prediction

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app = FastAPI(title="Crop Advisor API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials="*" not in CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(prediction.router)
app.include_router(prediction.health_router)


@app.get("/")
def root():
    """Health check endpoint"""
    return {"status": "healthy", "message": "Crop Advisor API is running"}


@app.get("/health")
def health():
    return {
        "status": "healthy",
        "endpoints": {
            "predict": "/api/prediction/predict",
            "crops": "/api/prediction/crops",
            "fertilizers": "/api/prediction/fertilizers",
            "locations": "/api/prediction/locations",
            "export_excel": "/api/prediction/export/excel",
            "export_pdf": "/api/prediction/export/pdf",
            "field_health": "/api/field-health",
        },
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
