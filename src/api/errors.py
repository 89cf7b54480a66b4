"""Erreurs email_builder → HTTPException (detail = message utilisateur)."""
from fastapi import HTTPException

from email_builder.errors import (
    AssetUploadError,
    BucketMissing,
    ConstraintViolation,
    EmailBuilderError,
    InvalidImage,
    SizeExceeded,
)


def http_error(e: EmailBuilderError) -> HTTPException:
    if isinstance(e, ConstraintViolation): return HTTPException(409, e.message)
    if isinstance(e, BucketMissing):       return HTTPException(503, e.message)
    if isinstance(e, SizeExceeded):        return HTTPException(413, e.message)
    if isinstance(e, AssetUploadError):    return HTTPException(502, e.message)
    if isinstance(e, InvalidImage):        return HTTPException(400, e.message)
    return HTTPException(500, e.message)
