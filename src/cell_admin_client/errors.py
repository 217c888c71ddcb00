class CellAdminHTTPError(RuntimeError):
    def __init__(self, status_code: int, path: str, payload: dict | None):
        self.status_code = status_code
        self.path = path
        self.payload = payload or {}
        msg = _format_error(self.payload) or f"HTTP {status_code} on {path}"
        super().__init__(msg)


class AuthenticationError(CellAdminHTTPError):
    """Login, token refresh or password verification was rejected."""


class PermissionDeniedError(PermissionError):
    def __init__(self, role: str, action: str):
        self.role = role
        self.action = action
        super().__init__(f"Role {role} is not allowed to {action}")


class PeriodSelectionError(ValueError):
    """A period filter selection cannot be turned into a date range."""


def _format_error(payload: dict) -> str:
    # Spring Boot error bodies: {status, error, message, path, errors: [{field, defaultMessage}]}
    status = payload.get("status") or payload.get("error") or ""
    errors = payload.get("errors") or payload.get("fieldErrors") or []
    if errors:
        parts = [
            f"{e.get('field') or e.get('objectName') or '?'}: "
            f"{e.get('defaultMessage') or e.get('message') or '?'}"
            for e in errors
            if isinstance(e, dict)
        ]
        if parts:
            return f"{status}: {'; '.join(parts)}" if status else "; ".join(parts)
    message = payload.get("message") or payload.get("detail")
    if message:
        return f"{status}: {message}" if status else str(message)
    return str(status)
