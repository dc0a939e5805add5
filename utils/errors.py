from fastapi import HTTPException, status


class BadRequestError(HTTPException):
    def __init__(self, detail="Bad Request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class UnauthorizedError(HTTPException):
    def __init__(self, detail="Unauthorized"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail="Not Found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ConflictError(HTTPException):
    def __init__(self, detail="Conflict"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)
