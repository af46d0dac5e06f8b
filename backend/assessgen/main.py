import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .db import create_db_engine, create_session_factory, init_db
from .gemini_client import GeminiClient
from .routers import assessments
from .settings import Settings, settings as default_settings
from .store import AssessmentStore

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
	settings = settings or default_settings
	logging.basicConfig(
		level=getattr(logging, settings.log_level.upper(), logging.INFO),
		format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
	)

	@asynccontextmanager
	async def lifespan(app: FastAPI):
		engine = create_db_engine(settings.database_url)
		init_db(engine)
		app.state.store = AssessmentStore(create_session_factory(engine))
		try:
			app.state.generator = GeminiClient(settings=settings)
		except ValueError as e:
			# Generation requests fail with a clear error until a key is configured
			logger.warning("Generation disabled: %s", e)
			app.state.generator = None
		logger.info("Assessment store and generator initialized")
		yield
		if app.state.generator is not None:
			await app.state.generator.aclose()
		engine.dispose()

	app = FastAPI(title="Assessment Generator API", lifespan=lifespan)
	app.state.settings = settings
	app.include_router(assessments.router)

	@app.get("/info")
	def root():
		return {"status": "ok", "gemini_configured": bool(settings.gemini_api_key)}

	return app


app = create_app()
