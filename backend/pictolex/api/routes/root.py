from fastapi import APIRouter, Request

router = APIRouter()


def keyword_index_status(request: Request) -> str:
    if not request.app.state.settings.keyword_index_enabled:
        return "disabled"
    index = getattr(request.app.state, "keyword_index", None)
    if index is None:
        return "degraded"
    if index.is_ready():
        return "ok"
    if getattr(index, "loading", False):
        return "loading"
    return "degraded"


@router.get("/")
def api_root() -> dict[str, str]:
    return {"status": "ok", "message": "pictolex backend"}


@router.get("/health")
def health(request: Request) -> dict[str, object]:
    index_status = keyword_index_status(request)
    engine_ready = getattr(request.app.state, "engine", None) is not None
    status = "ok" if engine_ready and index_status == "ok" else "degraded"
    payload: dict[str, object] = {
        "status": status,
        "service": "backend",
        "components": {
            "engine": "ok" if engine_ready else "degraded",
            "keyword_index": index_status,
        },
    }

    index = getattr(request.app.state, "keyword_index", None)
    index_error = getattr(index, "error", None)
    if index_error:
        payload["keyword_index_error"] = str(index_error)

    return payload
