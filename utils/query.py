from typing import Callable, TypeVar

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

QueryModel = TypeVar("QueryModel", bound=BaseModel)


def parse_query(model: type[QueryModel]) -> Callable[[Request], QueryModel]:
    """
    쿼리스트링 전체를 pydantic 모델로 검증하는 의존성 생성.

    - camelCase 키(alias) 그대로 검증
    - 모델에 없는 파라미터는 extra='forbid' 로 거부 (400)

    Example:
        query: JobSearchQuery = Depends(parse_query(JobSearchQuery))
    """
    def dependency(request: Request) -> QueryModel:
        try:
            return model.model_validate(dict(request.query_params))
        except ValidationError as e:
            raise RequestValidationError(e.errors(include_url=False, include_context=False)) from e

    return dependency
