"""FastAPI application for the Code 128 font encoder."""

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from code128_font import __version__
from code128_font.api.schemas import (
    BarcodeRequest,
    CapabilitiesResponse,
    DecodeRequest,
    DecodeResponse,
    EncodeResponse,
    ErrorDetail,
    HealthResponse,
    ValidateResponse,
)
from code128_font.core.decoder import decode_symbols, decode_text
from code128_font.core.encoder import get_encoder
from code128_font.core.exceptions import (
    DecodeError,
    ImageEncodingNotSupportedError,
    InvalidInputError,
)

logger = structlog.get_logger()

app = FastAPI(
    title="Code 128 Font Encoder API",
    description="Code 128, GS1-128 and ISBT 128 font encoding for purchase documents",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _invalid_input(e: InvalidInputError) -> HTTPException:
    detail = ErrorDetail(message=str(e), position=e.position, character=e.character)
    return HTTPException(status_code=400, detail=detail.model_dump())


@app.get("/api/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="ok", version=__version__)


@app.get("/api/capabilities", response_model=CapabilitiesResponse)
async def capabilities() -> CapabilitiesResponse:
    """Report which encodings the service provides."""
    encoder = get_encoder()
    return CapabilitiesResponse(
        font_encoding=encoder.supports_font_encoding(),
        image_encoding=encoder.supports_image_encoding(),
    )


@app.post("/api/encode", response_model=EncodeResponse)
async def encode(request: BarcodeRequest) -> EncodeResponse:
    """Encode text as Code 128 font text.

    The encoded string must be printed with a Code 128 font.
    """
    encoder = get_encoder()
    try:
        encoded = encoder.encode(request.to_encode_request())
    except InvalidInputError as e:
        logger.info("encode_rejected", reason=str(e), position=e.position)
        raise _invalid_input(e)

    try:
        symbols = encoder.font.to_values(encoded)
    except DecodeError:
        # An encode hook returned text that is not drawn by the font
        symbols = None
    return EncodeResponse(encoded=encoded, symbols=symbols)


@app.post("/api/validate", response_model=ValidateResponse)
async def validate(request: BarcodeRequest) -> ValidateResponse:
    """Check whether text can be encoded."""
    return ValidateResponse(valid=get_encoder().validate(request.to_encode_request()))


@app.post("/api/decode", response_model=DecodeResponse)
async def decode(request: DecodeRequest) -> DecodeResponse:
    """Decode font text or symbol values back into data."""
    if (request.text is None) == (request.symbols is None):
        raise HTTPException(status_code=422, detail="Provide exactly one of text or symbols")
    try:
        if request.symbols is not None:
            decoded = decode_symbols(request.symbols)
        else:
            decoded = decode_text(request.text, get_encoder().font)
    except DecodeError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return DecodeResponse(
        text=decoded.text, start_code_set=decoded.start_code_set, gs1=decoded.gs1
    )


@app.post("/api/encode-image")
async def encode_image(request: BarcodeRequest) -> None:
    """Render a barcode image (not available)."""
    try:
        get_encoder().encode_as_image(request.to_encode_request())
    except ImageEncodingNotSupportedError as e:
        raise HTTPException(status_code=501, detail=str(e))
