"""Document state: models, derived statistics, packages and the store."""

from canvasmark.documents.meta import DocumentMeta, derive_meta
from canvasmark.documents.models import (
    DocumentAssets,
    DocumentModel,
    DocumentPackage,
    DocumentThemes,
    PackageMeta,
)
from canvasmark.documents.package import (
    PACKAGE_SCHEMA_VERSION,
    PackageFormatError,
    build_document_package,
    parse_package,
    serialize_package,
)
from canvasmark.documents.store import DocumentState, DocumentStore

__all__ = [
    "PACKAGE_SCHEMA_VERSION",
    "DocumentAssets",
    "DocumentMeta",
    "DocumentModel",
    "DocumentPackage",
    "DocumentState",
    "DocumentStore",
    "DocumentThemes",
    "PackageFormatError",
    "PackageMeta",
    "build_document_package",
    "derive_meta",
    "parse_package",
    "serialize_package",
]
