# This file defines course question and answer endpoints under the versioned API path.
# It exists so students and instructors can discuss course material.
# A question's answered flag follows its answers and is never set by clients.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from src.api.api_config import ApiConfig
from src.api.dependencies import (
    ListParams,
    get_answer_service,
    get_config,
    get_list_params,
    get_question_service,
)
from src.api.response_envelope import list_response, object_response
from src.api.schemas.common import MessageResponse
from src.api.schemas.engagement_schemas import (
    AnswerCreate,
    AnswerListResponse,
    AnswerResponse,
    AnswerUpdate,
    QuestionAnswersResponse,
    QuestionCreate,
    QuestionListResponse,
    QuestionResponse,
    QuestionUpdate,
)
from src.api.services.qa_service import (
    ANSWER_DEFINITION,
    QUESTION_DEFINITION,
    AnswerService,
    QuestionService,
)
from src.api.validation import parse_body_ids, parse_optional_uuid, parse_uuid

questions_router = APIRouter(prefix="/course-questions", tags=["questions"])
answers_router = APIRouter(prefix="/course-answers", tags=["questions"])
QuestionServiceDep = Annotated[QuestionService, Depends(get_question_service)]
AnswerServiceDep = Annotated[AnswerService, Depends(get_answer_service)]
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
ListParamsDep = Annotated[ListParams, Depends(get_list_params)]


@questions_router.get("", response_model=QuestionListResponse)
def list_questions(
    request: Request,
    service: QuestionServiceDep,
    config: ConfigDep,
    params: ListParamsDep,
    course_id: str | None = Query(default=None),
    user_id: str | None = Query(default=None),
    is_answered: bool | None = Query(default=None),
) -> dict[str, object]:
    course = parse_optional_uuid(course_id, label="course")
    user = parse_optional_uuid(user_id, label="user")
    list_query = params.resolve(QUESTION_DEFINITION, config)
    result = service.list_questions(
        list_query=list_query, course_id=course, user_id=user, is_answered=is_answered
    )
    return list_response(request=request, config=config, result=result, list_query=list_query)


@questions_router.get("/{question_id}", response_model=QuestionResponse)
def get_question(
    question_id: str, request: Request, service: QuestionServiceDep, config: ConfigDep
) -> dict[str, object]:
    question = service.get(parse_uuid(question_id, label="question"))
    return object_response(request=request, config=config, data=question)


@questions_router.get("/{question_id}/answers", response_model=QuestionAnswersResponse)
def list_question_answers(
    question_id: str, request: Request, service: QuestionServiceDep, config: ConfigDep
) -> dict[str, object]:
    answers = service.list_answers(parse_uuid(question_id, label="question"))
    return object_response(request=request, config=config, data=answers)


@questions_router.post("", response_model=QuestionResponse, status_code=201)
def create_question(
    body: QuestionCreate, request: Request, service: QuestionServiceDep, config: ConfigDep
) -> dict[str, object]:
    payload = parse_body_ids(
        body.model_dump(), course_id="course", lecture_id="lecture", user_id="user"
    )
    question = service.create_question(payload)
    return object_response(
        request=request, config=config, data=question, message="Question created successfully"
    )


@questions_router.put("/{question_id}", response_model=QuestionResponse)
def update_question(
    question_id: str,
    body: QuestionUpdate,
    request: Request,
    service: QuestionServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    record_id = parse_uuid(question_id, label="question")
    question = service.update_question(record_id, body.model_dump(exclude_unset=True))
    return object_response(
        request=request, config=config, data=question, message="Question updated successfully"
    )


@questions_router.delete("/{question_id}", response_model=MessageResponse)
def delete_question(
    question_id: str, request: Request, service: QuestionServiceDep, config: ConfigDep
) -> dict[str, object]:
    service.delete_question(parse_uuid(question_id, label="question"))
    return object_response(request=request, config=config, data=None, message="Question deleted successfully")


@answers_router.get("", response_model=AnswerListResponse)
def list_answers(
    request: Request,
    service: AnswerServiceDep,
    config: ConfigDep,
    params: ListParamsDep,
    question_id: str | None = Query(default=None),
    user_id: str | None = Query(default=None),
    is_instructor_answer: bool | None = Query(default=None),
) -> dict[str, object]:
    question = parse_optional_uuid(question_id, label="question")
    user = parse_optional_uuid(user_id, label="user")
    list_query = params.resolve(ANSWER_DEFINITION, config)
    result = service.list_answers(
        list_query=list_query,
        question_id=question,
        user_id=user,
        is_instructor_answer=is_instructor_answer,
    )
    return list_response(request=request, config=config, result=result, list_query=list_query)


@answers_router.get("/{answer_id}", response_model=AnswerResponse)
def get_answer(answer_id: str, request: Request, service: AnswerServiceDep, config: ConfigDep) -> dict[str, object]:
    answer = service.get(parse_uuid(answer_id, label="answer"))
    return object_response(request=request, config=config, data=answer)


@answers_router.post("", response_model=AnswerResponse, status_code=201)
def create_answer(
    body: AnswerCreate, request: Request, service: AnswerServiceDep, config: ConfigDep
) -> dict[str, object]:
    payload = parse_body_ids(body.model_dump(), question_id="question", user_id="user")
    result = service.create_answer(payload)
    return object_response(
        request=request,
        config=config,
        data=result["data"],
        message="Answer created successfully",
        warnings=result["warnings"],
    )


@answers_router.put("/{answer_id}", response_model=AnswerResponse)
def update_answer(
    answer_id: str, body: AnswerUpdate, request: Request, service: AnswerServiceDep, config: ConfigDep
) -> dict[str, object]:
    record_id = parse_uuid(answer_id, label="answer")
    answer = service.update_answer(record_id, body.model_dump(exclude_unset=True))
    return object_response(request=request, config=config, data=answer, message="Answer updated successfully")


@answers_router.delete("/{answer_id}", response_model=MessageResponse)
def delete_answer(answer_id: str, request: Request, service: AnswerServiceDep, config: ConfigDep) -> dict[str, object]:
    result = service.delete_answer(parse_uuid(answer_id, label="answer"))
    return object_response(
        request=request,
        config=config,
        data=None,
        message="Answer deleted successfully",
        warnings=result["warnings"],
    )
