"""
FastAPI Route Definitions for the Health Analyzer API.

This module defines the HTTP endpoints:
- POST /analyze-food: Nutrition lookup through USDA FoodData Central
- POST /analyze-prescription: OCR + medicine extraction for a prescription image

Separation of Concerns:
- This file: API layer (HTTP request/response handling)
- app/main.py: Service layer (OCR + extraction)
- app/extraction/: Prescription text heuristics
"""
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from pydantic import BaseModel, ConfigDict, Field
from starlette.concurrency import run_in_threadpool

from app import config
from app.main import EmptyOcrTextError, process_prescription_image
from app.nutrition.usda_client import (
    FoodNotFoundError,
    FoodNutrition,
    NutritionConfigError,
    NutritionLookupError,
    UsdaClient,
)
from app.ocr.image_preprocessor import ImageDecodeError
from app.ocr.paddle_engine import PrescriptionOcrEngine, get_ocr_engine

logger = logging.getLogger(__name__)

# ============================================================================
# Router Configuration
# ============================================================================
router = APIRouter(
    tags=["Health Analyzer"],
    responses={
        500: {"description": "Internal server error"},
        400: {"description": "Bad request"}
    }
)

# ============================================================================
# Request/Response Models
# ============================================================================
class FoodRequest(BaseModel):
    """Request body for /analyze-food."""
    foodName: Optional[str] = Field(None, description="Food to look up, e.g. 'banana'")


class MedicineItem(BaseModel):
    """One extracted medicine. Only ``name`` is set on the placeholder entry."""
    name: str
    dosage: Optional[str] = None
    timing: Optional[str] = None
    duration: Optional[str] = None


class PrescriptionResponse(BaseModel):
    """Response model for /analyze-prescription."""
    rawText: str = Field(..., description="OCR text, unmodified")
    medicines: List[MedicineItem]
    doctor: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "rawText": "Dr. Ayesha Khan, MBBS\nParacetamol 500mg bd 5 days",
                "medicines": [
                    {
                        "name": "Paracetamol",
                        "dosage": "500mg",
                        "timing": "Twice Daily",
                        "duration": "5 days"
                    }
                ],
                "doctor": "Dr. Ayesha Khan, MBBS"
            }
        }
    )


def get_usda_client() -> UsdaClient:
    """FastAPI dependency building a USDA client from current config."""
    return UsdaClient()


# ============================================================================
# POST /analyze-food - Nutrition Lookup
# ============================================================================
@router.post("/analyze-food", response_model=FoodNutrition, status_code=200)
async def analyze_food(
    request: Optional[FoodRequest] = None,
    client: UsdaClient = Depends(get_usda_client),
):
    """
    Look up nutrition facts for a food name.

    Returns calories, protein, carbs, fats and fiber of the first USDA match.

    Raises:
        HTTPException: 400 without a food name, 404 if nothing matches,
            500 if the API key is missing or the lookup fails
    """
    food_name = ((request.foodName if request else None) or "").strip()
    if not food_name:
        raise HTTPException(status_code=400, detail="Food name required")

    try:
        return await run_in_threadpool(client.search_food, food_name)

    except NutritionConfigError:
        logger.error("USDA_API_KEY is not configured")
        raise HTTPException(status_code=500, detail="USDA API key missing")

    except FoodNotFoundError:
        logger.info(f"No USDA match for: {food_name}")
        raise HTTPException(status_code=404, detail="Food not found")

    except NutritionLookupError as e:
        logger.error(f"Food analysis failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Food analysis failed")


# ============================================================================
# POST /analyze-prescription - OCR + Medicine Extraction
# ============================================================================
@router.post(
    "/analyze-prescription",
    response_model=PrescriptionResponse,
    response_model_exclude_none=True,
    status_code=200
)
async def analyze_prescription(
    file: Optional[UploadFile] = File(None, description="Prescription image"),
    engine: PrescriptionOcrEngine = Depends(get_ocr_engine),
):
    """
    Read a prescription image and extract medicines.

    This endpoint:
    1. Receives an image (multipart field ``file``)
    2. Runs OCR (PaddleOCR)
    3. Extracts medicine name, dosage, timing and duration per line
    4. Locates the prescribing doctor

    Raises:
        HTTPException: 400 for a missing/unreadable image or blank OCR text,
            413 for oversized uploads, 500 if OCR or extraction fails
    """
    if file is None:
        raise HTTPException(status_code=400, detail="Prescription image required")

    logger.info(f"File received: {file.filename}")

    contents = await file.read(config.MAX_UPLOAD_BYTES + 1)
    if len(contents) > config.MAX_UPLOAD_BYTES:
        logger.warning(f"Rejected upload over {config.MAX_UPLOAD_BYTES} bytes: {file.filename}")
        raise HTTPException(status_code=413, detail="Prescription image too large")

    try:
        return await run_in_threadpool(process_prescription_image, contents, engine)

    except ImageDecodeError as e:
        logger.warning(f"Invalid image upload {file.filename}: {e}")
        raise HTTPException(status_code=400, detail="Invalid prescription image")

    except EmptyOcrTextError:
        logger.warning(f"OCR returned no text for {file.filename}")
        raise HTTPException(status_code=400, detail="Could not read prescription text")

    except Exception as e:
        logger.error(f"Prescription analysis failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Prescription analysis failed")
