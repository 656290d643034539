"""Signing service FastAPI application.

Thin HTTP binding over a single ``Signatory``.  The secret key comes from
``PARAMSIGN_SECRET_KEY`` (or is injected through ``create_app``) and is
never returned by any endpoint.

Endpoints:
- POST /sign          – signature of a parameter set
- POST /encode        – parameter set -> base64 token (optionally signed)
- POST /decode        – base64 token -> parameter set
- POST /validate      – check a claimed signature against a parameter set
- POST /verify_token  – decode a token and check its embedded ``sign``
- GET  /health        – liveness + configured algorithm

``EncodingError`` maps to 422, ``DecodingError`` to 400.  A signature
mismatch is a normal 200 response with ``valid: false``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from paramsign.config import SECRET_KEY
from paramsign.errors import DecodingError, EncodingError
from paramsign.signatory import Signatory

logger = logging.getLogger(__name__)

# ------ request / response models ------


class SignRequest(BaseModel):
    params: Dict[str, Any]


class SignResponse(BaseModel):
    sign: str


class EncodeRequest(BaseModel):
    params: Dict[str, Any]
    include_signature: bool = False


class TokenResponse(BaseModel):
    token: str


class DecodeRequest(BaseModel):
    token: str


class ParamsResponse(BaseModel):
    params: Dict[str, Any]


class ValidateRequest(BaseModel):
    params: Dict[str, Any]
    sign: str


class ValidateResponse(BaseModel):
    valid: bool


class VerifyTokenResponse(BaseModel):
    valid: bool
    params: Dict[str, Any]


def create_app(signatory: Signatory | None = None) -> FastAPI:
    """Build the service app around *signatory*.

    When *signatory* is ``None`` one is built from ``PARAMSIGN_SECRET_KEY``.
    """
    if signatory is None:
        if not SECRET_KEY:
            raise RuntimeError("PARAMSIGN_SECRET_KEY is not set")
        signatory = Signatory(SECRET_KEY)

    app = FastAPI(title="paramsign")
    app.state.signatory = signatory

    @app.get("/health")
    async def health():
        return {"status": "ok", "algorithm": signatory.algorithm}

    @app.post("/sign", response_model=SignResponse)
    async def sign(req: SignRequest):
        try:
            return SignResponse(sign=signatory.generate_signature(req.params))
        except EncodingError as exc:
            logger.warning("Sign rejected: %s", exc)
            raise HTTPException(status_code=422, detail=str(exc))

    @app.post("/encode", response_model=TokenResponse)
    async def encode(req: EncodeRequest):
        try:
            token = signatory.encode(req.params, include_signature=req.include_signature)
        except EncodingError as exc:
            logger.warning("Encode rejected: %s", exc)
            raise HTTPException(status_code=422, detail=str(exc))
        return TokenResponse(token=token)

    @app.post("/decode", response_model=ParamsResponse)
    async def decode(req: DecodeRequest):
        try:
            return ParamsResponse(params=signatory.decode(req.token))
        except DecodingError as exc:
            logger.warning("Decode rejected: %s", exc)
            raise HTTPException(status_code=400, detail=str(exc))

    @app.post("/validate", response_model=ValidateResponse)
    async def validate(req: ValidateRequest):
        try:
            valid = signatory.validate(req.params, req.sign)
        except EncodingError as exc:
            logger.warning("Validate rejected: %s", exc)
            raise HTTPException(status_code=422, detail=str(exc))
        if not valid:
            logger.info("Signature mismatch for fields %s", sorted(req.params))
        return ValidateResponse(valid=valid)

    @app.post("/verify_token", response_model=VerifyTokenResponse)
    async def verify_token(req: DecodeRequest):
        try:
            valid, params = signatory.verify_token(req.token)
        except DecodingError as exc:
            logger.warning("Token rejected: %s", exc)
            raise HTTPException(status_code=400, detail=str(exc))
        except EncodingError as exc:
            logger.warning("Token params unrenderable: %s", exc)
            raise HTTPException(status_code=422, detail=str(exc))
        if not valid:
            logger.info("Token signature mismatch")
        return VerifyTokenResponse(valid=valid, params=params)

    return app
