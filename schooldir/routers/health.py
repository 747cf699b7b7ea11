from fastapi import APIRouter, Request

from schooldir.database import ping

router = APIRouter(tags=["Health"])


@router.get("/api")
def api_root():
    return {"status": "ok"}


@router.get("/health")
def health(request: Request):
    db_ok = ping(request.app.state.engine)
    return {"status": "ok", "database": "ok" if db_ok else "unavailable"}
