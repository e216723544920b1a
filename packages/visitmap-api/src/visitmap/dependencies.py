"""FastAPI dependency injection functions."""

from fastapi import Request

from visitmap.services.visit_log import VisitLog


def get_visit_log(request: Request) -> VisitLog:
    """Return the visit log owned by the running application.

    The log is constructed once in ``create_app`` and lives on ``app.state``.
    """
    return request.app.state.visit_log
