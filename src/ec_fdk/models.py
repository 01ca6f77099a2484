"""
Pydantic shapes of the API results the SDK hands back.

The SDK itself returns plain dicts; these models document (and can validate)
those dicts and back `ec-fdk describe`.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, RootModel


class BaseHALModel(BaseModel):
    """
    Resource with HAL _links/_embedded kept loosely typed; entrecode mixes
    single link objects and arrays of link objects.
    """

    links: Dict[str, Any] = Field(default_factory=dict, alias="_links")
    embedded: Dict[str, Any] = Field(default_factory=dict, alias="_embedded")

    model_config = ConfigDict(
        populate_by_name=True, extra="allow", protected_namespaces=()
    )


class EntryResource(BaseHALModel):
    id: str
    created: Optional[datetime] = None
    modified: Optional[datetime] = None
    private: Optional[bool] = None
    creator: Optional[str] = Field(default=None, alias="_creator")
    model_title: Optional[str] = Field(default=None, alias="_modelTitle")
    model_title_field: Optional[str] = Field(default=None, alias="_modelTitleField")
    entry_title: Optional[str] = Field(default=None, alias="_entryTitle")


class EntryFieldSchema(BaseModel):
    type: Optional[str] = None
    resource: Optional[str] = None
    required: bool = False
    read_only: Optional[bool] = Field(default=None, alias="readOnly")
    description: Optional[str] = None
    default: Any = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class EntrySchema(RootModel[Dict[str, EntryFieldSchema]]):
    pass


class AssetFile(BaseModel):
    url: str
    size: Optional[int] = None
    resolution: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(extra="allow")


class AssetResource(BaseHALModel):
    asset_id: str = Field(alias="assetID")
    title: Optional[str] = None
    type: Optional[str] = None
    mimetype: Optional[str] = None
    created: Optional[datetime] = None
    tags: List[Any] = Field(default_factory=list)
    duplicates: Optional[int] = None
    file: Optional[AssetFile] = None
    file_variants: List[AssetFile] = Field(default_factory=list, alias="fileVariants")
    thumbnails: List[Any] = Field(default_factory=list)


class DatamanagerResource(BaseHALModel):
    data_manager_id: str = Field(alias="dataManagerID")
    short_id: Optional[str] = Field(default=None, alias="shortID")
    title: Optional[str] = None
    description: Optional[str] = None
    created: Optional[datetime] = None
    default_locale: Optional[str] = Field(default=None, alias="defaultLocale")
    locales: List[str] = Field(default_factory=list)
    hex_color: Optional[str] = Field(default=None, alias="hexColor")
    config: Dict[str, Any] = Field(default_factory=dict)


class ModelResource(BaseHALModel):
    model_id: str = Field(alias="modelID")
    title: str
    title_field: Optional[str] = Field(default=None, alias="titleField")
    description: Optional[str] = None
    created: Optional[datetime] = None
    modified: Optional[datetime] = None
    has_entries: Optional[bool] = Field(default=None, alias="hasEntries")
    hex_color: Optional[str] = Field(default=None, alias="hexColor")
    locales: List[str] = Field(default_factory=list)
    fields: List[Dict[str, Any]] = Field(default_factory=list)
    hooks: List[Any] = Field(default_factory=list)
    policies: List[Any] = Field(default_factory=list)
    config: Dict[str, Any] = Field(default_factory=dict)


class TokenResource(BaseModel):
    access_token_id: str = Field(alias="accessTokenID")
    device: Optional[Dict[str, Any]] = None
    ip_address: Optional[str] = Field(default=None, alias="ipAddress")
    ip_address_location: Optional[str] = Field(
        default=None, alias="ipAddressLocation"
    )
    is_current: Optional[bool] = Field(default=None, alias="isCurrent")
    issued: Optional[datetime] = None
    valid_until: Optional[datetime] = Field(default=None, alias="validUntil")

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class ListModel(BaseModel):
    count: Optional[int] = None
    total: Optional[int] = None


class EntryList(ListModel):
    items: List[EntryResource] = Field(default_factory=list)


class AssetList(ListModel):
    items: List[AssetResource] = Field(default_factory=list)


class DatamanagerList(ListModel):
    items: List[DatamanagerResource] = Field(default_factory=list)


class ModelList(ListModel):
    items: List[ModelResource] = Field(default_factory=list)


class ResourceList(ListModel):
    items: List[Dict[str, Any]] = Field(default_factory=list)


# CLI command -> result model; None means the command prints nothing useful.
COMMAND_MODELS: Dict[str, Optional[Type[BaseModel]]] = {
    "entryList": EntryList,
    "getEntry": EntryResource,
    "createEntry": EntryResource,
    "editEntry": EntryResource,
    "deleteEntry": None,
    "getSchema": EntrySchema,
    "assetList": AssetList,
    "getAsset": AssetResource,
    "deleteAsset": None,
    "dmList": DatamanagerList,
    "getDatamanager": DatamanagerResource,
    "modelList": ModelList,
}


__all__ = [
    "BaseHALModel",
    "EntryResource",
    "EntryFieldSchema",
    "EntrySchema",
    "EntryList",
    "AssetFile",
    "AssetResource",
    "AssetList",
    "DatamanagerResource",
    "DatamanagerList",
    "ModelResource",
    "ModelList",
    "ResourceList",
    "TokenResource",
    "COMMAND_MODELS",
]
