"""
Ошибки доменного уровня DocCollab.

Сервисы поднимают эти исключения, HTTP слой переводит их в ответы
через обработчик в app.main.
"""


class DocCollabError(Exception):
    """Базовая ошибка сервиса"""
    status_code = 500
    code = "error"

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message or self.__class__.__doc__


class ValidationError(DocCollabError):
    """Missing or empty required field"""
    status_code = 422
    code = "validation_error"


class NotFoundError(DocCollabError):
    """Resource not found"""
    status_code = 404
    code = "not_found"


class UnauthorizedError(DocCollabError):
    """Caller identity is not resolved"""
    status_code = 401
    code = "unauthorized"


class ForbiddenError(DocCollabError):
    """Caller is not allowed to perform this operation"""
    status_code = 403
    code = "forbidden"


class InvalidStateError(DocCollabError):
    """Document has no current version"""
    status_code = 409
    code = "invalid_state"


class AlreadyResolvedError(DocCollabError):
    """Suggestion is already resolved"""
    status_code = 409
    code = "already_resolved"


class ConflictError(DocCollabError):
    """Document changed since the suggestion was created"""
    status_code = 409
    code = "conflict"
