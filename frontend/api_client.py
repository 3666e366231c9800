"""HTTP client for the mood tracker API."""
import logging
import os
from typing import Any

import httpx

logger = logging.getLogger(__name__)

API_URL = os.getenv("API_URL", "http://localhost:3001")
API_TIMEOUT = float(os.getenv("API_TIMEOUT", "10"))


class ApiError(Exception):
    """A request to the API failed: network error, bad status or bad payload."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MoodApiClient:
    """Thin synchronous wrapper over the REST endpoints.

    Pass `client` to reuse an existing httpx.Client (FastAPI's TestClient
    works too); otherwise one is created for `base_url`.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ):
        self._client = client or httpx.Client(
            base_url=base_url or API_URL,
            timeout=timeout if timeout is not None else API_TIMEOUT,
        )

    def close(self):
        self._client.close()

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            resp = self._client.request(method, path, **kwargs)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            raise ApiError(_error_detail(e.response), status_code=status_code) from e
        except httpx.RequestError as e:
            raise ApiError(f"Could not reach API: {e.__class__.__name__}") from e
        except ValueError as e:
            raise ApiError("API returned invalid JSON") from e

    def health(self) -> dict:
        return self._request("GET", "/api/health")

    def list_moods(self, start_date: str | None = None, end_date: str | None = None) -> list[dict]:
        params = {}
        if start_date:
            params["start_date"] = start_date
        if end_date:
            params["end_date"] = end_date
        return self._request("GET", "/api/moods", params=params)

    def get_stats(self) -> dict:
        return self._request("GET", "/api/moods/stats")

    def create_mood(self, mood: str, energy_level: int | None = None, note: str | None = None) -> dict:
        payload = {"mood": mood, "energy_level": energy_level, "note": note}
        return self._request("POST", "/api/moods", json=payload)

    def delete_mood(self, mood_id: int) -> dict:
        return self._request("DELETE", f"/api/moods/{mood_id}")


def _error_detail(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        data = None
    detail = data.get("detail") if isinstance(data, dict) else None
    return detail if isinstance(detail, str) else f"HTTP {response.status_code}"
