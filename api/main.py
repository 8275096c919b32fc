#!/usr/bin/env python3
"""
FastAPI Web Service for Drawing Analysis

This module provides REST API endpoints for analyzing children's drawings and
retrieving stored analysis reports.
"""

import sys
import logging
from typing import List, Dict, Optional, Any
from pathlib import Path

import uvicorn
from fastapi import FastAPI, File, Form, UploadFile, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from analysis.drawing_service import DrawingAnalysisService, create_analysis_service
from preprocessing import ImageLoadError
from utils.validation_api import validate_image_format, validate_file_size, sanitize_filename

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# API Configuration
API_VERSION = "1.0.0"
API_TITLE = "Drawing Analysis API"
API_DESCRIPTION = """
Analysis of children's drawings into structured psychological-signal reports.

## Report contents

1. **Colors**: exclusive color buckets, dominant color, intensity, interpretations
2. **Shapes**: classified contours grouped by type with dominant position
3. **Symbols**: human figures, faces, houses, trees and emotional patterns
4. **Composition**: balance, space usage and stroke pressure
5. **Emotions**: 8-dimension score vector and emotional state
6. **Risk**: level, risk factors and recommendations
"""

# Pydantic Models
class AnalysisResponse(BaseModel):
    """Response model for a drawing analysis"""
    analysis_id: str = Field(..., description="Unique analysis identifier")
    child_id: Optional[str] = Field(default=None, description="Child the drawing belongs to")
    risk_level: str = Field(..., description="Risk level: low, medium, high or unknown")
    summary: str = Field(..., description="Natural-language summary")
    report: Dict[str, Any] = Field(..., description="Complete analysis report")

class ColorAnalysisResponse(BaseModel):
    """Response model for color-only analysis"""
    distribution: Dict[str, float] = Field(..., description="Percentage of pixels per color")
    dominant_color: str = Field(..., description="Color with the largest share")
    intensity: float = Field(..., description="Mean saturation/value intensity (0-1)")
    interpretations: List[str] = Field(..., description="Color interpretations")

class HealthResponse(BaseModel):
    """Health check response"""
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="API version")
    stored_analyses: Optional[int] = Field(default=None, description="Number of stored analyses")


def _to_response(report) -> AnalysisResponse:
    return AnalysisResponse(
        analysis_id=report.analysis_id,
        child_id=report.subject_id,
        risk_level=report.risk.level,
        summary=report.summary,
        report=report.to_dict()
    )


def create_app(service: Optional[DrawingAnalysisService] = None) -> FastAPI:
    """
    Build the FastAPI application around an analysis service.

    Args:
        service: Analysis service; a default in-memory service when omitted

    Returns:
        Configured FastAPI application
    """

    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.analysis_service = service or create_analysis_service()

    def read_upload(file: UploadFile) -> bytes:
        """Validate an uploaded drawing and return its bytes"""
        if not validate_image_format(file.filename):
            raise HTTPException(status_code=400, detail="Unsupported image format")

        image_data = file.file.read()

        if not validate_file_size(len(image_data)):
            raise HTTPException(status_code=400, detail="Empty or too large file (max 10MB)")

        return image_data

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """Service health check endpoint"""
        repository = app.state.analysis_service.repository
        return HealthResponse(
            status="healthy",
            version=API_VERSION,
            stored_analyses=len(repository) if hasattr(repository, '__len__') else None
        )

    @app.post("/analyze", response_model=AnalysisResponse)
    def analyze_drawing(
        file: UploadFile = File(..., description="Drawing to analyze"),
        child_id: str = Form(..., description="Child the drawing belongs to")
    ):
        """
        Analyze a child's drawing

        Upload a drawing and receive the complete analysis report, which is
        also stored for later retrieval.
        """
        service = app.state.analysis_service
        image_data = read_upload(file)
        file_name = sanitize_filename(file.filename)

        try:
            image = service.preprocessor.decode_image(image_data, source=file_name)
            report = service.analyze_image(image, child_id, file_name=file_name)

        except ImageLoadError as e:
            logger.error(f"Unreadable drawing {file_name}: {str(e)}")
            raise HTTPException(status_code=400, detail=f"Failed to load image: {str(e)}")

        logger.info(f"Drawing analysis {report.analysis_id} completed for child {child_id}")
        return _to_response(report)

    @app.post("/analyze/colors", response_model=ColorAnalysisResponse)
    def analyze_colors(file: UploadFile = File(..., description="Drawing to analyze")):
        """Run the color stage only, on the raw upload, without storing anything"""
        service = app.state.analysis_service
        image_data = read_upload(file)

        try:
            image = service.preprocessor.decode_image(image_data, source=file.filename)
        except ImageLoadError as e:
            raise HTTPException(status_code=400, detail=f"Failed to load image: {str(e)}")

        colors = service.analyzer.color_analyzer.analyze(image)
        return ColorAnalysisResponse(**colors.to_dict())

    @app.get("/analyses/{analysis_id}", response_model=AnalysisResponse)
    def get_analysis(analysis_id: str):
        """Get a stored analysis by id"""
        report = app.state.analysis_service.get_analysis(analysis_id)
        if report is None:
            raise HTTPException(status_code=404, detail="Analysis not found")

        return _to_response(report)

    @app.get("/children/{child_id}/analyses", response_model=List[AnalysisResponse])
    def get_child_analyses(child_id: str):
        """Get every analysis of a child, newest first"""
        reports = app.state.analysis_service.get_analyses_for_subject(child_id)
        return [_to_response(report) for report in reports]

    return app


app = create_app()

if __name__ == "__main__":
    # Run with uvicorn for development
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
