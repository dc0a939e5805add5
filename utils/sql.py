from typing import Any, Iterable, Mapping

from utils.errors import BadRequestError


def sql_for_partial_update(
    data_to_update: Mapping[str, Any],
    js_to_sql: Mapping[str, str]
) -> tuple[str, list]:
    """
    부분 수정용 UPDATE SET 절 생성.

    Args:
        data_to_update: 수정할 필드와 값 {"firstName": "Aliya", "age": 32}
        js_to_sql: 필드 -> DB 컬럼 매핑 {"firstName": "first_name"}
            매핑에 없는 필드는 필드명을 그대로 컬럼명으로 사용

    Returns:
        (set_cols, values) 튜플
        - set_cols: '"first_name"=$1, "age"=$2'
        - values: ["Aliya", 32]

    호출하는 쪽에서 WHERE 절 값을 values 뒤에 붙이고 ${len(values) + 1} 로 참조한다.

    Example:
        >>> sql_for_partial_update({"firstName": "Aliya", "age": 32}, {"firstName": "first_name"})
        ('"first_name"=$1, "age"=$2', ['Aliya', 32])
    """
    keys = list(data_to_update)
    if not keys:
        raise BadRequestError("No data")

    cols = [
        f'"{js_to_sql.get(field_name, field_name)}"=${idx}'
        for idx, field_name in enumerate(keys, start=1)
    ]
    values = [data_to_update[field_name] for field_name in keys]

    return ", ".join(cols), values


def sql_for_filters(conditions: Iterable[tuple[str, Any]]) -> tuple[str, list]:
    """
    목록 조회용 WHERE 절 생성.

    conditions 는 (조건식, 값) 쌍. 조건식의 {} 자리에 $N placeholder 가 들어가고
    {} 가 없는 조건식은 값을 바인딩하지 않는다.

    Example:
        >>> sql_for_filters([("title ILIKE {}", "%dev%"), ("equity > 0", None)])
        ('WHERE title ILIKE $1 AND equity > 0', ['%dev%'])
    """
    clauses = []
    values = []

    for template, value in conditions:
        if "{}" in template:
            values.append(value)
            clauses.append(template.format(f"${len(values)}"))
        else:
            clauses.append(template)

    if not clauses:
        return "", []
    return "WHERE " + " AND ".join(clauses), values
