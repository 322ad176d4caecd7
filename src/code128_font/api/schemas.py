"""Pydantic request/response schemas for the Code 128 API."""

from pydantic import BaseModel, Field

from code128_font.core.encoder import EncodeRequest
from code128_font.core.models import CodeSet, CodeSetPreference, Symbology


# Request models


class BarcodeRequest(BaseModel):
    """Request body for encode/validate/encode-image endpoints."""

    text: str = Field(..., description="Text to encode")
    symbology: Symbology | None = Field(
        default=None, description="Symbology; server default when omitted"
    )
    code_set: CodeSetPreference = Field(
        default=CodeSetPreference.AUTO, description="Start code set hint"
    )
    allow_extended: bool | None = Field(
        default=None, description="Encode Latin-1 characters with FNC4"
    )

    def to_encode_request(self) -> EncodeRequest:
        return EncodeRequest(
            text=self.text,
            symbology=self.symbology,
            code_set=self.code_set,
            allow_extended=self.allow_extended,
        )


class DecodeRequest(BaseModel):
    """Request body for the decode endpoint."""

    text: str | None = Field(default=None, description="Font text to decode")
    symbols: list[int] | None = Field(default=None, description="Symbol values to decode")


# Response models


class EncodeResponse(BaseModel):
    """Response for an encoded barcode."""

    encoded: str = Field(description="Font text drawing the barcode")
    symbols: list[int] | None = Field(
        default=None, description="Symbol values from start to stop"
    )


class ValidateResponse(BaseModel):
    """Response for input validation."""

    valid: bool


class DecodeResponse(BaseModel):
    """Response for a decoded barcode."""

    text: str
    start_code_set: CodeSet
    gs1: bool


class CapabilitiesResponse(BaseModel):
    """Response for encoder capabilities."""

    font_encoding: bool
    image_encoding: bool


class HealthResponse(BaseModel):
    """Response for health check."""

    status: str
    version: str


class ErrorDetail(BaseModel):
    """Error details for rejected input."""

    message: str
    position: int | None = None
    character: str | None = None
