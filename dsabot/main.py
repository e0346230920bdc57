from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse

from dsabot.config import settings
from dsabot.utils.logging import configure_logging
from dsabot.utils.security import verify_api_key
from dsabot.routers.commands import router as commands_router
from dsabot.routers.ask import router as ask_router
from dsabot.routers.run import router as run_router
from dsabot.routers.interview import router as interview_router
from dsabot.utils.audit import auditor
from dsabot.services.interview_store import interview_store
from dsabot.services.llm_service import llm_service


configure_logging(settings.log_level)
auditor.configure(settings.analytics_path)
app = FastAPI(title="DSA Interview Bot Backend", version="0.1.0")

# CORS
app.add_middleware(
	CORSMiddleware,
	allow_origins=settings.cors_allow_origins,
	# Wildcard origins require credentials to be False per CORS spec
	allow_credentials=False if settings.cors_allow_origins == ["*"] else True,
	allow_methods=["*"],
	allow_headers=["*"],
	max_age=3600,
)


@app.get("/health")
async def health() -> JSONResponse:
	return JSONResponse({
		"status": "ok",
		"version": app.version,
		"llm": {"provider": settings.llm_provider, "model": llm_service.model_name, "enabled": llm_service.enabled},
		"active_interviews": interview_store.active_count(),
		"audit": auditor.enabled,
	})


# Routers
_auth = [Depends(verify_api_key)]
app.include_router(commands_router, prefix="/api", tags=["commands"], dependencies=_auth)
app.include_router(ask_router, prefix="/api", tags=["ask"], dependencies=_auth)
app.include_router(run_router, prefix="/api", tags=["run"], dependencies=_auth)
app.include_router(interview_router, prefix="/api", tags=["interview"], dependencies=_auth)
