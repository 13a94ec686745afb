"""
UI Routes - the ad maker, life decisions and valentine pages.
Pages are thin: they render catalogues and drive /api/studio from the browser.
"""
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from admaker.catalog import BRANDS, CHARACTERS, DECISIONS, STORYBOARD_PLACEHOLDERS, VALENTINE_SCENES

# Setup paths
BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"

router = APIRouter(tags=["UI"])
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def admaker_page(request: Request):
    """Brand / character / slogan / storyboard tabs and the generate button."""
    return templates.TemplateResponse(request, "index.html", {
        "brands": BRANDS,
        "characters": CHARACTERS,
        "placeholders": STORYBOARD_PLACEHOLDERS,
    })


@router.get("/decisions", response_class=HTMLResponse, include_in_schema=False)
async def decisions_page(request: Request):
    return templates.TemplateResponse(request, "decisions.html", {
        "decisions": DECISIONS,
    })


@router.get("/valentine", response_class=HTMLResponse, include_in_schema=False)
async def valentine_page(request: Request):
    return templates.TemplateResponse(request, "valentine.html", {
        "scenes": VALENTINE_SCENES,
    })
