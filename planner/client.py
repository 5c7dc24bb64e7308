# PURPOSE: Python client for the planner API (the task repository seen from
# a consumer). Reads degrade to an empty list; writes raise TaskOperationError.

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from .analytics import ALL, build_analytics, build_dashboard, distinct_categories, filter_tasks
from .config import settings
from .models import (
    AnalyticsReport,
    DashboardReport,
    Task,
    TaskCreate,
    TaskUpdate,
    UserPublic,
)
from .session import UserSession

logger = logging.getLogger(__name__)


class PlannerClientError(Exception):
    """Base error for the planner client."""


class NotAuthenticatedError(PlannerClientError):
    pass


class AuthenticationError(PlannerClientError):
    pass


class TaskOperationError(PlannerClientError):
    """A create/update/delete call failed; local state was not changed."""

    def __init__(self, operation: str, detail: str = "") -> None:
        self.operation = operation
        self.detail = detail
        super().__init__(f"{operation} failed" + (f": {detail}" if detail else ""))


class PlannerClient:
    """Talks to /api/v1 on behalf of the user held in `session`.

    Pass `http` to reuse an existing httpx.Client (its base_url must point at
    the API root); otherwise one is created from `base_url` and owned here.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        http: Optional[httpx.Client] = None,
        session: Optional[UserSession] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self._owns_http = http is None
        self._http = http or httpx.Client(
            base_url=base_url or settings.API_BASE_URL,
            timeout=timeout or settings.CLIENT_TIMEOUT_SECONDS,
        )
        self.session = session or UserSession()

    # --- lifecycle ---

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "PlannerClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # --- helpers ---

    def _auth_headers(self) -> Dict[str, str]:
        if not self.session.is_authenticated:
            raise NotAuthenticatedError("sign in first")
        return {"Authorization": f"Bearer {self.session.token}"}

    @staticmethod
    def _detail(exc: httpx.HTTPError) -> str:
        if isinstance(exc, httpx.HTTPStatusError):
            return f"HTTP {exc.response.status_code}"
        return exc.__class__.__name__

    # --- auth ---

    def register(self, email: str, password: str) -> UserPublic:
        try:
            r = self._http.post("/auth/register", json={"email": email, "password": password})
            r.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("register failed email=%s error=%s", email, self._detail(exc))
            raise AuthenticationError("registration failed") from exc
        return UserPublic.model_validate(r.json())

    def login(self, email: str, password: str) -> UserPublic:
        """Exchange credentials for a token and sign the session in."""
        try:
            r = self._http.post("/auth/login", data={"username": email, "password": password})
            r.raise_for_status()
            token = r.json()["access_token"]
            me = self._http.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
            me.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("login failed email=%s error=%s", email, self._detail(exc))
            raise AuthenticationError("invalid credentials") from exc
        user = UserPublic.model_validate(me.json())
        self.session.sign_in(user, token)
        return user

    def logout(self) -> None:
        self.session.sign_out()

    # --- tasks ---

    def list_tasks(self) -> List[Task]:
        """All tasks of the signed-in user, newest first; [] if the fetch fails."""
        headers = self._auth_headers()
        try:
            r = self._http.get("/tasks/", headers=headers)
            r.raise_for_status()
            return [Task.model_validate(item) for item in r.json()]
        except (httpx.HTTPError, ValidationError, ValueError):
            logger.exception("error fetching tasks user_id=%s", self.session.user_id)
            return []

    def create_task(self, data: TaskCreate | Dict[str, Any]) -> Task:
        payload = TaskCreate.model_validate(data).model_dump(mode="json")
        return self._write("create", "POST", "/tasks/", payload)

    def update_task(self, task_id: str, fields: TaskUpdate | Dict[str, Any]) -> Task:
        """Merge `fields` into the task (only the keys given are sent)."""
        payload = TaskUpdate.model_validate(fields).model_dump(mode="json", exclude_unset=True)
        return self._write("update", "PATCH", f"/tasks/{task_id}", payload)

    def set_status(self, task_id: str, status: str) -> Task:
        return self.update_task(task_id, {"status": status})

    def delete_task(self, task_id: str) -> None:
        self._write("delete", "DELETE", f"/tasks/{task_id}")

    def _write(self, operation: str, method: str, url: str, payload: Optional[dict] = None):
        headers = self._auth_headers()
        try:
            r = self._http.request(method, url, json=payload, headers=headers)
            r.raise_for_status()
            if r.status_code == httpx.codes.NO_CONTENT:
                return None
            return Task.model_validate(r.json())
        except httpx.HTTPError as exc:
            logger.error(
                "task %s failed user_id=%s url=%s error=%s",
                operation, self.session.user_id, url, self._detail(exc),
            )
            raise TaskOperationError(operation, self._detail(exc)) from exc
        except (ValidationError, ValueError) as exc:
            logger.error(
                "task %s returned a malformed body user_id=%s url=%s",
                operation, self.session.user_id, url,
            )
            raise TaskOperationError(operation, "malformed response") from exc

    # --- derived views (computed locally from a fresh fetch) ---

    def search_tasks(
        self,
        term: str = "",
        status: str = ALL,
        category: str = ALL,
        priority: str = ALL,
    ) -> List[Task]:
        return filter_tasks(self.list_tasks(), term, status, category, priority)

    def categories(self) -> List[str]:
        return distinct_categories(self.list_tasks())

    def dashboard(self) -> DashboardReport:
        return build_dashboard(self.list_tasks(), recent_limit=settings.DASHBOARD_RECENT_LIMIT)

    def analytics(self) -> AnalyticsReport:
        # The API lists newest first; categories group in creation order.
        return build_analytics(list(reversed(self.list_tasks())))
