from fastapi import APIRouter
from ortools import __version__ as ortools_version

router = APIRouter(prefix="/health", tags=["Health Check"])


@router.get("/check", summary="Health Check")
def healthcheck():
    return {"status": "ok", "solver": "cp-sat", "ortools": ortools_version}
