"""Base repository with common REST operations"""
import logging
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=BaseModel)
CreateT = TypeVar('CreateT', bound=BaseModel)
UpdateT = TypeVar('UpdateT', bound=BaseModel)

# Status codes the task service uses for "nothing found" on list endpoints
EMPTY_RESULT_STATUS_CODES = (400, 404)

# Upper bound on pages fetched while draining a listing whose totalItems is missing
MAX_DRAIN_PAGES = 200


class TaskApiError(Exception):
    """Raised when the task service fails or rejects a request"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BaseRepository(Generic[T, CreateT, UpdateT]):
    """
    Base repository providing common task-service operations.
    Hides the REST envelope ({success, data, message}) from the rest of the application.
    """

    def __init__(self, client: httpx.AsyncClient, resource: str, model_class: Type[T]):
        self._client = client
        self._resource = resource.strip("/")
        self._model_class = model_class

    def _to_model(self, data: Dict[str, Any]) -> T:
        """Convert response dict to domain model"""
        return self._model_class.model_validate(data)

    def _to_models(self, data: List[Dict[str, Any]]) -> List[T]:
        """Convert list of response dicts to domain models"""
        return [self._to_model(item) for item in data]

    def _payload(self, data: BaseModel) -> Dict[str, Any]:
        return data.model_dump(by_alias=True, exclude_none=True, mode='json')

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        empty_on_missing: bool = False,
    ) -> Any:
        """
        Send a request and unwrap the response envelope.

        Args:
            method: HTTP method
            path: Path relative to the client's base URL
            params: Query parameters
            json: JSON body
            empty_on_missing: Return None instead of raising on 400/404

        Returns:
            The envelope's ``data`` field (None when empty_on_missing applies)

        Raises:
            TaskApiError: On transport errors, non-2xx responses or unsuccessful envelopes
        """
        try:
            response = await self._client.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise TaskApiError(f"Task service unreachable: {e}") from e

        if empty_on_missing and response.status_code in EMPTY_RESULT_STATUS_CODES:
            logger.info(f"{method} {path} returned {response.status_code}, treating as empty result")
            return None

        body = self._json_body(response)

        if response.is_error:
            message = body.get("message") if isinstance(body, dict) else None
            raise TaskApiError(
                message or f"Task service returned {response.status_code}",
                status_code=response.status_code,
            )

        if not isinstance(body, dict):
            # Some endpoints answer with a bare payload
            return body

        if body.get("success") is False:
            raise TaskApiError(body.get("message") or "Task service request failed", status_code=response.status_code)

        return body.get("data")

    @staticmethod
    def _json_body(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    async def _find_all_pages(self, path: str, page_size: int) -> List[T]:
        """
        Drain a server-paginated listing into one list.

        Stops on an empty or short page, or once ``totalItems`` items were collected.
        """
        items: List[Dict[str, Any]] = []
        page_index = 0

        while True:
            data = await self._request(
                "GET",
                path,
                params={"pageIndex": page_index, "pageSize": page_size},
                empty_on_missing=True,
            )
            if not data:
                break
            if not isinstance(data, dict) or not isinstance(data.get("items") or [], list):
                logger.error(f"GET {path} returned a non-paging payload: {type(data).__name__}")
                raise TaskApiError("Unexpected listing payload")

            page_items = data.get("items") or []
            items.extend(page_items)

            total_items = data.get("totalItems")
            if not page_items or len(page_items) < page_size:
                break
            if total_items is not None and len(items) >= total_items:
                break

            page_index += 1
            if page_index >= MAX_DRAIN_PAGES:
                logger.warning(f"Stopped draining {path} after {MAX_DRAIN_PAGES} pages")
                break

        return self._to_models(items)

    async def find_by_id(self, id: str) -> Optional[T]:
        """Find a single record by ID"""
        data = await self._request("GET", f"/{self._resource}/{id}", empty_on_missing=True)

        if not data:
            return None

        return self._to_model(data)

    async def create(self, data: CreateT) -> T:
        """Create a new record"""
        result = await self._request("POST", f"/{self._resource}", json=self._payload(data))

        if not result:
            raise TaskApiError("Failed to create record")

        return self._to_model(result)

    async def update(self, data: UpdateT) -> Optional[T]:
        """Update a record (the ID travels in the body)"""
        result = await self._request("PUT", f"/{self._resource}", json=self._payload(data), empty_on_missing=True)

        if not result:
            return None

        return self._to_model(result)

    async def delete(self, id: str) -> bool:
        """Delete a record by ID"""
        try:
            await self._request("DELETE", f"/{self._resource}/{id}")
        except TaskApiError as e:
            if e.status_code in EMPTY_RESULT_STATUS_CODES:
                return False
            raise
        return True
