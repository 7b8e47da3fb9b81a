"""HTTP client for the Kindred API.

Collections are fetched once and cached; a successful create, update or
delete drops the cached copy of that collection so the next read refetches.
Errors are reported with one fixed message per operation.
"""
from typing import Any, Dict, List, Optional, Union

import httpx
from loguru import logger
from pydantic import BaseModel

from . import filters

Payload = Union[Dict[str, Any], BaseModel]

RECIPES = "/api/recipes"
LEGACY_AUDIO = "/api/legacy-audio"
TIMELINE_NOTES = "/api/timeline-notes"


class ArchiveClientError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class InvalidPinError(ArchiveClientError):
    pass


def _body(data: Payload, partial: bool = False) -> Dict[str, Any]:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True, exclude_unset=partial)
    return dict(data)


class ArchiveClient:
    """Talks to a running Kindred server.

    ``pin`` enables the local PIN prompt check for deletes. It is only a
    convenience; the server still checks the ``x-pin`` header.
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8000",
        pin: Optional[str] = None,
        http: Optional[httpx.Client] = None,
        timeout: Optional[float] = None,
    ):
        if http is None:
            kwargs = {"base_url": base_url}
            if timeout is not None:
                kwargs["timeout"] = timeout
            http = httpx.Client(**kwargs)
        self._http = http
        self.pin = pin
        self._cache: Dict[str, List[Dict[str, Any]]] = {}

    def close(self):
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    # --- plumbing ---

    def _request(self, method: str, url: str, message: str, expected: int, **kwargs) -> httpx.Response:
        try:
            resp = self._http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {url} failed: {e}")
            raise ArchiveClientError(message) from e
        if resp.status_code != expected:
            logger.warning(f"{method} {url} returned {resp.status_code}: {resp.text}")
            raise ArchiveClientError(message, resp.status_code)
        return resp

    def invalidate(self, collection: Optional[str] = None):
        """Forget one cached collection, or all of them."""
        if collection is None:
            self._cache.clear()
        else:
            self._cache.pop(collection, None)

    def _list(self, collection: str, noun: str, refresh: bool) -> List[Dict[str, Any]]:
        if refresh or collection not in self._cache:
            resp = self._request("GET", collection, f"Failed to load {noun}", 200)
            self._cache[collection] = resp.json()
        return list(self._cache[collection])

    def _get(self, collection: str, noun: str, item_id: int) -> Dict[str, Any]:
        return self._request("GET", f"{collection}/{item_id}", f"Failed to load {noun}", 200).json()

    def _create(self, collection: str, noun: str, data: Payload) -> Dict[str, Any]:
        resp = self._request("POST", collection, f"Failed to add {noun}", 201, json=_body(data))
        self.invalidate(collection)
        return resp.json()

    def _update(self, collection: str, noun: str, item_id: int, data: Payload) -> Dict[str, Any]:
        resp = self._request(
            "PATCH",
            f"{collection}/{item_id}",
            f"Failed to update {noun}",
            200,
            json=_body(data, partial=True),
        )
        self.invalidate(collection)
        return resp.json()

    def _delete(self, collection: str, noun: str, item_id: int, pin: str):
        message = f"Failed to delete {noun}. Check password?"
        if self.pin is not None and pin.lower() != self.pin.lower():
            raise InvalidPinError(message)
        self._request("DELETE", f"{collection}/{item_id}", message, 204, headers={"x-pin": pin})
        self.invalidate(collection)

    # --- Hearth ---

    def recipes(self, refresh: bool = False) -> List[Dict[str, Any]]:
        return filters.newest_first(self._list(RECIPES, "recipes", refresh))

    def get_recipe(self, recipe_id: int) -> Dict[str, Any]:
        return self._get(RECIPES, "recipe", recipe_id)

    def add_recipe(self, data: Payload) -> Dict[str, Any]:
        return self._create(RECIPES, "recipe", data)

    def update_recipe(self, recipe_id: int, data: Payload) -> Dict[str, Any]:
        return self._update(RECIPES, "recipe", recipe_id, data)

    def delete_recipe(self, recipe_id: int, pin: str):
        self._delete(RECIPES, "recipe", recipe_id, pin)

    def search_recipes(self, query: Optional[str] = None, category: Optional[str] = None):
        return filters.search(self.recipes(), query, category)

    # --- Study ---

    def legacy_audio(self, refresh: bool = False) -> List[Dict[str, Any]]:
        return filters.newest_first(self._list(LEGACY_AUDIO, "audio", refresh))

    def get_audio(self, audio_id: int) -> Dict[str, Any]:
        return self._get(LEGACY_AUDIO, "audio", audio_id)

    def add_audio(self, data: Payload) -> Dict[str, Any]:
        return self._create(LEGACY_AUDIO, "audio", data)

    def update_audio(self, audio_id: int, data: Payload) -> Dict[str, Any]:
        return self._update(LEGACY_AUDIO, "audio", audio_id, data)

    def delete_audio(self, audio_id: int, pin: str):
        self._delete(LEGACY_AUDIO, "audio", audio_id, pin)

    def search_audio(self, query: Optional[str] = None, category: Optional[str] = None):
        return filters.search(self.legacy_audio(), query, category)

    def timeline_notes(self, refresh: bool = False) -> List[Dict[str, Any]]:
        return filters.timeline_order(self._list(TIMELINE_NOTES, "timeline", refresh))

    def get_note(self, note_id: int) -> Dict[str, Any]:
        return self._get(TIMELINE_NOTES, "note", note_id)

    def add_note(self, data: Payload) -> Dict[str, Any]:
        return self._create(TIMELINE_NOTES, "note", data)

    def update_note(self, note_id: int, data: Payload) -> Dict[str, Any]:
        return self._update(TIMELINE_NOTES, "note", note_id, data)

    def delete_note(self, note_id: int, pin: str):
        self._delete(TIMELINE_NOTES, "note", note_id, pin)
