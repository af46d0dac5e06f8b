from __future__ import annotations
import logging
import traceback
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..errors import AssessmentError, GenerationFailed
from ..pipeline import TextGenerator, generate_assessment, submit_answers
from ..schemas import AssessmentRequest, SubmitAnswersRequest
from ..scoring import grade, score
from ..settings import Settings, settings as default_settings
from ..store import AssessmentStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["assessments"])


def get_settings(request: Request) -> Settings:
	return getattr(request.app.state, "settings", default_settings)


def get_store(request: Request) -> AssessmentStore:
	return request.app.state.store


def get_generator(request: Request) -> Optional[TextGenerator]:
	return getattr(request.app.state, "generator", None)


def _error_response(summary: str, exc: Exception, settings: Settings) -> JSONResponse:
	status = exc.status_code if isinstance(exc, AssessmentError) else 500
	body = {"error": summary, "details": str(exc) or "An unknown error occurred"}
	if not settings.is_production:
		body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
	return JSONResponse(status_code=status, content=body)


@router.post("/generate-assessment")
async def create_assessment(
	req: AssessmentRequest,
	generator: Optional[TextGenerator] = Depends(get_generator),
	store: AssessmentStore = Depends(get_store),
	settings: Settings = Depends(get_settings),
):
	logger.info("Received request: %s", req.model_dump(by_alias=True))
	try:
		if generator is None:
			raise GenerationFailed("GEMINI_API_KEY is not configured")
		result = await generate_assessment(req, generator, store, settings)
		return {"assessment": [q.model_dump(by_alias=True) for q in result.questions], "id": result.id}
	except Exception as e:
		logger.exception("Error generating assessment")
		return _error_response("Failed to generate assessment", e, settings)


@router.put("/generate-assessment")
async def update_answers(
	req: SubmitAnswersRequest,
	store: AssessmentStore = Depends(get_store),
	settings: Settings = Depends(get_settings),
):
	try:
		data = submit_answers(req.id, req.answers, store, req.learning_outcomes)
		return {"success": True, "data": data}
	except Exception as e:
		logger.exception("Error updating answers")
		return _error_response("Failed to update answers", e, settings)


@router.get("/assessments/{record_id}")
async def get_assessment(
	record_id: str,
	store: AssessmentStore = Depends(get_store),
	settings: Settings = Depends(get_settings),
):
	try:
		record = store.get(record_id)
	except Exception as e:
		logger.exception("Error loading assessment %s", record_id)
		return _error_response("Failed to load assessment", e, settings)
	if record["answers"] is not None:
		record["results"] = grade(record["assessment_type"], record["questions"], record["answers"])
		record["score"] = score(record["assessment_type"], record["questions"], record["answers"])
	record["total"] = len(record["questions"])
	return record
