"""
FastAPI endpoints for the experiment store.

This module provides the create, list and read-by-identifier operations over
the experiments table. Records are never updated or deleted.
"""

import logging
from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, HTTPException, Depends, Request
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from database import Experiment, get_db
from api.validation import validate_create_payload, parse_experiment_id

logger = logging.getLogger(__name__)

LIST_LIMIT = 20

# Largest value a SQLite INTEGER column can hold
MAX_EXPERIMENT_ID = 2**63 - 1

# Create router
router = APIRouter(prefix="/api/experiments", tags=["experiments"])


# Response Models
class ExperimentCreatedResponse(BaseModel):
    """Response model for a newly created experiment."""
    id: int = Field(..., description="Identifier assigned by the store")


class ExperimentSummary(BaseModel):
    """List projection of an experiment; narrative fields are omitted."""
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Unique experiment identifier")
    title: str = Field(..., description="Experiment title")
    summary: str = Field(..., description="One-line summary")
    tags: Optional[str] = Field(None, description="Comma-separated tags")
    author_name: Optional[str] = Field(None, description="Author name or handle")
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")


class ExperimentDetail(ExperimentSummary):
    """Full experiment record."""
    what_tried: str = Field(..., description="What was tried")
    what_went_wrong: str = Field(..., description="What went wrong")
    what_learned: str = Field(..., description="What was learned")


class ExperimentListResponse(BaseModel):
    """Response model for listing experiments."""
    experiments: List[ExperimentSummary] = Field(..., description="Most recent experiments, newest first")


class ExperimentDetailResponse(BaseModel):
    """Response model for a single experiment."""
    experiment: ExperimentDetail


# API Endpoints
@router.post("", status_code=201, response_model=ExperimentCreatedResponse)
async def create_experiment(
    request: Request,
    db: Session = Depends(get_db)
):
    """
    Create a new experiment record.

    The body is decoded by hand so that malformed JSON and missing fields
    are reported as distinct 400 responses.
    """
    try:
        payload = await request.json()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid JSON")

    data = validate_create_payload(payload)

    try:
        experiment = Experiment(**data.model_dump())
        db.add(experiment)
        db.commit()
        db.refresh(experiment)
    except SQLAlchemyError as e:
        logger.error(f"Database error creating experiment: {str(e)}")
        db.rollback()
        raise HTTPException(status_code=500, detail="Database error")

    logger.info(f"Created new experiment: {experiment.id}")

    return ExperimentCreatedResponse(id=experiment.id)


@router.get("", response_model=ExperimentListResponse)
async def list_experiments(db: Session = Depends(get_db)):
    """
    List the most recent experiments.

    Returns at most LIST_LIMIT records, newest first, without narrative fields.
    """
    try:
        rows = (
            db.query(
                Experiment.id,
                Experiment.title,
                Experiment.summary,
                Experiment.tags,
                Experiment.author_name,
                Experiment.created_at,
            )
            .order_by(Experiment.created_at.desc(), Experiment.id.desc())
            .limit(LIST_LIMIT)
            .all()
        )
    except SQLAlchemyError as e:
        logger.error(f"Database error listing experiments: {str(e)}")
        raise HTTPException(status_code=500, detail="Database error")

    logger.info(f"Retrieved {len(rows)} experiments")

    return ExperimentListResponse(
        experiments=[ExperimentSummary.model_validate(row) for row in rows]
    )


@router.get("/{experiment_id}", response_model=ExperimentDetailResponse)
async def get_experiment(
    experiment_id: str,
    db: Session = Depends(get_db)
):
    """
    Get a specific experiment by ID.

    Retrieves the complete record including all narrative fields.
    """
    numeric_id = parse_experiment_id(experiment_id)
    if numeric_id > MAX_EXPERIMENT_ID:
        raise HTTPException(status_code=404, detail="Experiment not found")

    try:
        experiment = db.query(Experiment).filter(Experiment.id == numeric_id).first()
    except SQLAlchemyError as e:
        logger.error(f"Database error retrieving experiment {numeric_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Database error")

    if experiment is None:
        raise HTTPException(status_code=404, detail="Experiment not found")

    logger.info(f"Retrieved experiment: {numeric_id}")

    return ExperimentDetailResponse(experiment=ExperimentDetail.model_validate(experiment))
