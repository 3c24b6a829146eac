"""
Server-rendered pages for browsing and submitting experiments.

Each page awaits one call to the experiments API through
``ExperimentApiClient`` and renders the resulting state with Jinja2.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from api.validation import REQUIRED_FIELDS, OPTIONAL_FIELDS
from client import (
    ExperimentApiClient,
    Idle,
    Loaded,
    LoadFailed,
    LoadState,
    NotFound,
    SubmitFailed,
    Submitted,
    SubmitState,
    display_author,
    format_date,
    parse_tags,
)

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
FORM_FIELDS = REQUIRED_FIELDS + OPTIONAL_FIELDS

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["tags"] = parse_tags
templates.env.filters["author"] = display_author

# Create router
router = APIRouter(tags=["pages"], default_response_class=HTMLResponse)


def get_api_client(request: Request) -> ExperimentApiClient:
    """Dependency returning the client the pages use to reach the API."""
    return request.app.state.api_client


def _date_filters(request: Request) -> Dict[str, Any]:
    tz = ZoneInfo(request.app.state.settings.display_timezone)
    return {
        "format_date": lambda value: format_date(value, tz),
        "format_datetime": lambda value: format_date(value, tz, include_time=True),
    }


def _submit_context(state: SubmitState, form: Dict[str, str]) -> Dict[str, Any]:
    """Map a submit state to template variables."""
    if isinstance(state, Idle):
        return {"form": form, "message": None, "new_id": None}
    if isinstance(state, Submitted):
        return {
            "form": _empty_form(),
            "message": "Thanks! Your failed experiment has been recorded.",
            "new_id": state.experiment_id,
        }
    if isinstance(state, SubmitFailed):
        return {"form": form, "message": f"Something went wrong: {state.message}", "new_id": None}
    raise TypeError(f"Unhandled submit state: {state!r}")


def _load_context(state: LoadState) -> Dict[str, Any]:
    """Map a load state to template variables and an HTTP status."""
    if isinstance(state, Loaded):
        return {"value": state.value, "error": None, "status_code": 200}
    if isinstance(state, NotFound):
        return {"value": None, "error": state.message, "status_code": 404}
    if isinstance(state, LoadFailed):
        return {"value": None, "error": state.message, "status_code": 502}
    raise TypeError(f"Unhandled load state: {state!r}")


def _render(request: Request, name: str, context: Dict[str, Any], status_code: int = 200):
    context = {**context, **_date_filters(request)}
    return templates.TemplateResponse(request, name, context, status_code=status_code)


@router.get("/")
async def home_page(request: Request):
    """Landing page."""
    return _render(request, "home.html", {})


@router.get("/experiments")
async def experiments_page(
    request: Request,
    client: ExperimentApiClient = Depends(get_api_client)
):
    """List of the most recent experiments."""
    state = await client.list_experiments()
    context = _load_context(state)
    return _render(
        request,
        "experiments.html",
        {"experiments": context["value"] or [], "error": context["error"]},
        context["status_code"],
    )


@router.get("/experiments/new")
async def new_experiment_page(request: Request):
    """Empty submission form."""
    return _render(request, "new_experiment.html", _submit_context(Idle(), _empty_form()))


@router.post("/experiments/new")
async def submit_experiment(
    request: Request,
    client: ExperimentApiClient = Depends(get_api_client)
):
    """
    Submit the form to the experiments API.

    Every field is trimmed before sending; the API does not trim.
    """
    form_data = await request.form()
    form = {name: _trimmed(form_data.get(name)) for name in FORM_FIELDS}

    state = await client.create_experiment(form)
    if isinstance(state, Submitted):
        logger.info(f"Experiment submitted from form: {state.experiment_id}")

    return _render(request, "new_experiment.html", _submit_context(state, form))


@router.get("/experiments/{experiment_id}")
async def experiment_detail_page(
    experiment_id: str,
    request: Request,
    client: ExperimentApiClient = Depends(get_api_client)
):
    """Full write-up of one experiment."""
    state = await client.get_experiment(experiment_id)
    context = _load_context(state)
    return _render(
        request,
        "experiment_detail.html",
        {"experiment": context["value"], "error": context["error"]},
        context["status_code"],
    )


def _empty_form() -> Dict[str, str]:
    return {name: "" for name in FORM_FIELDS}


def _trimmed(value: Optional[Any]) -> str:
    return value.strip() if isinstance(value, str) else ""
