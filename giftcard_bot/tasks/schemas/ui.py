"""
UI Hint Schemas.

A UI hint is an optional structured payload returned alongside a reply. It
tells the presentation layer what to render: selectable options, the
template gallery, a confirmation card, a form, or downloadable files.

Fields are serialized in camelCase for the JavaScript client.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that reads snake_case or camelCase and writes camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UiOption(CamelModel):
    id: str
    label: str


class TemplateOption(CamelModel):
    id: str
    label: str
    image_url: str


class FormField(CamelModel):
    name: str
    label: str
    input_type: str = "text"
    required: bool = True
    value: Optional[Any] = None


class FormDescriptor(CamelModel):
    """Describes a form whose submission comes back as a tagged form payload."""
    kind: str
    title: str
    fields: List[FormField] = []
    submit_label: str = "Submit"


class DownloadItem(CamelModel):
    label: str
    url: str


class UiHint(CamelModel):
    """
    Structured rendering hint for the client.

    Only the attributes relevant to ``kind`` are populated; the rest stay None
    and are dropped from the response.
    """
    kind: str
    title: Optional[str] = None
    options: Optional[List[UiOption]] = None
    templates: Optional[List[TemplateOption]] = None
    details: Optional[Dict[str, Any]] = None
    form: Optional[FormDescriptor] = None
    items: Optional[List[DownloadItem]] = None
