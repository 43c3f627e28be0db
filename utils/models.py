"""Product record model and the `{"products": [...]}` JSON interchange."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from utils.errors import InvalidInput


@dataclass
class ProductRecord:
    """One product: display name plus attributes in display order."""
    name: str
    attributes: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "attributes": dict(self.attributes)}

    @classmethod
    def from_dict(cls, data: Any, position: int = 0) -> "ProductRecord":
        """Build a record from its JSON object, raising InvalidInput on a bad shape."""
        where = f"products[{position}]"
        if not isinstance(data, dict):
            raise InvalidInput(f"{where} must be an object", field=where)

        name = data.get("name")
        if not isinstance(name, str):
            raise InvalidInput(f"{where}.name must be a string", field=f"{where}.name")
        if not name.strip():
            raise InvalidInput(f"{where}.name must not be empty", field=f"{where}.name")

        attributes = data.get("attributes")
        if not isinstance(attributes, dict):
            raise InvalidInput(
                f"{where}.attributes must be an object", field=f"{where}.attributes"
            )
        for key, value in attributes.items():
            if not isinstance(key, str) or not key.strip():
                raise InvalidInput(
                    f"{where}.attributes has an invalid key {key!r}",
                    field=f"{where}.attributes",
                )
            if ":" in key or "：" in key:
                raise InvalidInput(
                    f"{where}.attributes key {key!r} must not contain a colon",
                    field=f"{where}.attributes",
                )
            if not isinstance(value, str):
                raise InvalidInput(
                    f"{where}.attributes[{key!r}] must be a string",
                    field=f"{where}.attributes",
                )

        return cls(name=name, attributes=dict(attributes))


def records_to_payload(records: Sequence[ProductRecord]) -> Dict[str, Any]:
    """Return the interchange object `{"products": [...]}`."""
    return {"products": [r.to_dict() for r in records]}


def records_to_json(records: Sequence[ProductRecord], indent: int = 2) -> str:
    return json.dumps(records_to_payload(records), ensure_ascii=False, indent=indent)


def records_from_payload(payload: Any) -> List[ProductRecord]:
    """
    Accept the shapes a caller may hand over at the boundary:
    - a JSON string of either form below
    - `{"products": [...]}`
    - a bare list of record objects (or ProductRecord instances)
    """
    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise InvalidInput(f"Invalid JSON: {exc.msg}", field="products") from exc

    if isinstance(payload, dict):
        if "products" not in payload:
            raise InvalidInput(
                'Invalid JSON structure. Expected format: {"products": [...]}',
                field="products",
            )
        payload = payload["products"]

    if not isinstance(payload, list):
        raise InvalidInput("products must be an array", field="products")

    records: List[ProductRecord] = []
    for idx, item in enumerate(payload):
        if isinstance(item, ProductRecord):
            records.append(item)
        else:
            records.append(ProductRecord.from_dict(item, position=idx))
    return records
