from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from quickjot.api.notes import router as notes_router
from quickjot.config import Settings, configure_logging
from quickjot.storage.notes_store import NotesStore


async def _bad_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    # missing or mistyped fields are a plain 400 for this API
    fields = sorted({".".join(str(p) for p in err.get("loc", ())[1:]) or "body" for err in exc.errors()})
    return JSONResponse(
        status_code=400,
        content={"detail": f"Missing or invalid fields: {', '.join(fields)}."},
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(title="QuickJot Notes API")
    app.state.notes_store = NotesStore(settings.data_dir)

    app.add_exception_handler(RequestValidationError, _bad_request)
    app.include_router(notes_router)

    @app.get("/health")
    def health():
        return {"ok": True}

    return app

