from typing import Any, Dict, List, Optional, TypedDict

HAL_FIELDS = ("_links", "_embedded")


class ListEnvelope(TypedDict):
    count: Optional[int]
    total: Optional[int]
    items: List[Any]


def get_link(payload: Dict[str, Any], relation: str) -> Optional[Dict[str, Any]]:
    """
    Safely retrieves a link object from the _links dictionary.
    """
    if not payload or not isinstance(payload.get("_links"), dict):
        return None
    return payload["_links"].get(relation)


def get_link_href(payload: Dict[str, Any], relation: str) -> Optional[str]:
    """
    Extracts the 'href' (URL) from a specific link relation.
    Example: get_link_href(entry, 'collection')
        -> 'https://datamanager.entrecode.de/api/83cc6374/muffin'
    """
    link = get_link(payload, relation)
    return link.get("href") if isinstance(link, dict) else None


def get_embedded(payload: Optional[Dict[str, Any]], relation: str) -> Any:
    """
    Extracts an embedded resource (object or list) from the _embedded dictionary.
    Example: get_embedded(asset_list, 'ec:dm-asset') -> [{'assetID': ...}, ...]
    """
    if not payload or not isinstance(payload.get("_embedded"), dict):
        return None
    return payload["_embedded"].get(relation)


def embedded_items(payload: Optional[Dict[str, Any]], relation: str) -> List[Any]:
    """
    Extract a HAL collection as a list.
    The API returns a bare object instead of a one-element array when a
    collection holds a single item; a missing relation yields [].
    """
    items = get_embedded(payload, relation)
    if items is None:
        return []
    if not isinstance(items, list):
        return [items]
    return items


def first_relation(payload: Optional[Dict[str, Any]]) -> Optional[str]:
    if not payload or not isinstance(payload.get("_embedded"), dict):
        return None
    return next(iter(payload["_embedded"]), None)


def list_envelope(payload: Optional[Dict[str, Any]], relation: str) -> ListEnvelope:
    payload = payload or {}
    return {
        "count": payload.get("count"),
        "total": payload.get("total"),
        "items": embedded_items(payload, relation),
    }


def strip_hal(item: Any) -> Any:
    """Drop _links/_embedded from a resource; other values pass through."""
    if not isinstance(item, dict):
        return item
    return {k: v for k, v in item.items() if k not in HAL_FIELDS}


def clean_result(result: Any) -> Any:
    if isinstance(result, list):
        return [strip_hal(item) for item in result]
    if isinstance(result, dict) and isinstance(result.get("items"), list):
        return {**result, "items": [strip_hal(item) for item in result["items"]]}
    return strip_hal(result)


__all__ = [
    "ListEnvelope",
    "HAL_FIELDS",
    "get_link",
    "get_link_href",
    "get_embedded",
    "embedded_items",
    "first_relation",
    "list_envelope",
    "strip_hal",
    "clean_result",
]
