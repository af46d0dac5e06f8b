import pytest

from conftest import FakeGenerator

from assessgen.errors import (
    AnswersAlreadySubmitted,
    InvalidAssessmentType,
    MalformedPayload,
    NoStructuredPayload,
    PersistenceUpdateFailed,
    PersistenceWriteFailed,
    RecordNotFound,
    UnexpectedShape,
)
from assessgen.pipeline import generate_assessment, submit_answers
from assessgen.schemas import AssessmentType, MCQQuestion


@pytest.mark.asyncio
async def test_generate_persists_and_returns_questions(make_request, generator, store, settings):
    result = await generate_assessment(make_request(), generator, store, settings)

    assert result.assessment_type == AssessmentType.MCQ
    assert [q.correct_answer for q in result.questions] == [1, 2]
    record = store.get(result.id)
    assert record["questions"][0] == {"question": "What is 2 + 2?", "options": ["3", "4", "5", "6"], "correctAnswer": 1}
    assert record["learning_outcomes"] == ["Add whole numbers", "Multiply single digits"]
    assert record["class_level"] == "Class 8"
    assert record["answers"] is None


@pytest.mark.asyncio
async def test_generation_knobs_passed(make_request, generator, store, settings):
    await generate_assessment(make_request(), generator, store, settings)

    (call,) = generator.calls
    assert call["temperature"] == 0.7
    assert call["max_output_tokens"] == 2000
    assert "1. Add whole numbers" in call["prompt"]


@pytest.mark.asyncio
async def test_short_assessment_accepted(make_request, generator, store, settings):
    # Three requested, two returned: persisted as a two-question assessment
    result = await generate_assessment(make_request(questionCount=3), generator, store, settings)

    assert len(result.questions) == 2
    assert len(store.get(result.id)["questions"]) == 2


@pytest.mark.asyncio
async def test_invalid_type_makes_no_generation_call(make_request, generator, store, settings):
    with pytest.raises(InvalidAssessmentType):
        await generate_assessment(make_request(assessmentType="essay"), generator, store, settings)
    assert generator.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "text,error",
    [
        ("Sorry, I cannot help with that.", NoStructuredPayload),
        ("[{'question': 'single quotes'}]", MalformedPayload),
        ('[{"question": "Q", "correctAnswer": true}]', UnexpectedShape),
    ],
)
async def test_bad_generator_output_raises(make_request, store, settings, text, error):
    with pytest.raises(error):
        await generate_assessment(make_request(), FakeGenerator(text), store, settings)


@pytest.mark.asyncio
async def test_write_failure_keeps_questions_in_memory(make_request, generator, broken_store, settings):
    with pytest.raises(PersistenceWriteFailed) as exc:
        await generate_assessment(make_request(), generator, broken_store, settings)

    assert "Failed to save assessment" in str(exc.value)
    assert len(exc.value.questions) == 2
    assert isinstance(exc.value.questions[0], MCQQuestion)


@pytest.mark.asyncio
async def test_submit_scores_and_aligns_answers(make_request, generator, store, settings):
    result = await generate_assessment(make_request(), generator, store, settings)

    data = submit_answers(result.id, [1], store)

    assert data["answers"] == [1, None]
    assert data["score"] == 1
    assert data["total"] == 2
    assert data["learning_outcomes"] == ["Add whole numbers", "Multiply single digits"]


@pytest.mark.asyncio
async def test_submit_overwrites_learning_outcomes_when_given(make_request, generator, store, settings):
    result = await generate_assessment(make_request(), generator, store, settings)

    data = submit_answers(result.id, [1, 2], store, learning_outcomes=["Revised outcome"])

    assert data["score"] == 2
    assert store.get(result.id)["learning_outcomes"] == ["Revised outcome"]


@pytest.mark.asyncio
async def test_answers_attached_only_once(make_request, generator, store, settings):
    result = await generate_assessment(make_request(), generator, store, settings)
    submit_answers(result.id, [1, 2], store)

    with pytest.raises(AnswersAlreadySubmitted):
        submit_answers(result.id, [0, 0], store)
    assert store.get(result.id)["answers"] == [1, 2]


def test_submit_unknown_record(store):
    with pytest.raises(RecordNotFound):
        submit_answers("missing", [1], store)


def test_update_failure_surfaces_store_error(broken_store):
    with pytest.raises(PersistenceUpdateFailed) as exc:
        broken_store.update_answers("abc", [1])
    assert "assessments" in str(exc.value)
