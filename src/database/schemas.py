"""
JSON schemas for document validation.
This module defines schemas for validating documents in the image collections.
"""

from typing import Dict, Any
import jsonschema


IMAGE_JSON_SCHEMA = {
    "type": "object",
    "properties": {
        "url": {"type": "string", "minLength": 1},
        "public_id": {"type": "string", "minLength": 1}
    },
    "required": ["url", "public_id"],
    "additionalProperties": False
}


def validate_image_document(document: Dict[str, Any]) -> None:
    """Validate an image document against the schema"""
    jsonschema.validate(document, IMAGE_JSON_SCHEMA)


DOCUMENT_VALIDATORS = {
    'images': validate_image_document,
}

# Field used to address a single document in each collection
DOCUMENT_ID_FIELDS = {
    'images': 'public_id',
}
