"""Project package building, serialization and parsing.

The package is the exchange format handed to and received from the file
I/O layer. This module works on in-memory strings only; reading and writing
files is the caller's job.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from canvasmark.documents.models import DocumentPackage, PackageMeta

if TYPE_CHECKING:
    from canvasmark.documents.models import DocumentModel

logger = logging.getLogger(__name__)

PACKAGE_SCHEMA_VERSION = 1


class PackageFormatError(ValueError):
    """Raised when a serialized package cannot be read."""


def build_document_package(document: DocumentModel) -> DocumentPackage:
    """Build the persisted package for a document."""
    return DocumentPackage(
        meta=PackageMeta(
            document_id=document.id,
            title=document.title,
            created_at=document.created_at,
            updated_at=document.updated_at,
            schema_version=PACKAGE_SCHEMA_VERSION,
        ),
        content=document.content,
        blocks=document.blocks,
        assets=document.assets,
    )


def serialize_package(package: DocumentPackage) -> str:
    """Serialize a package to pretty-printed JSON with camelCase keys."""
    return package.model_dump_json(by_alias=True, indent=2)


def parse_package(text: str) -> DocumentPackage:
    """Parse serialized package JSON.

    Args:
        text: Package JSON as produced by serialize_package.

    Returns:
        The validated package.

    Raises:
        PackageFormatError: If the text is not JSON, does not have the
            package shape, or was written by a newer schema version.
    """
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning("Rejected package: invalid JSON (%s)", e)
        raise PackageFormatError(f"Invalid JSON in package: {e}") from e

    try:
        package = DocumentPackage.model_validate(raw)
    except ValidationError as e:
        logger.warning("Rejected package: %d validation errors", e.error_count())
        raise PackageFormatError(f"Package does not match expected shape: {e}") from e

    if package.meta.schema_version > PACKAGE_SCHEMA_VERSION:
        logger.warning(
            "Rejected package: schema version %d is newer than supported %d",
            package.meta.schema_version,
            PACKAGE_SCHEMA_VERSION,
        )
        msg = (
            f"Package schema version {package.meta.schema_version} is newer "
            f"than supported version {PACKAGE_SCHEMA_VERSION}"
        )
        raise PackageFormatError(msg)

    return package
