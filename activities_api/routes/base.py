from fastapi import APIRouter
from fastapi.responses import RedirectResponse

from .. import __version__

router = APIRouter()


@router.get("/", include_in_schema=False)
def root():
    return RedirectResponse(url="/api/activities")


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/version")
def version():
    return {"app": "activities-api", "version": __version__}
