"""
FastAPI router: Solana Action for token transfers.

GET     /api/actions/transfer  action metadata (title, icon, parameters)
OPTIONS /api/actions/transfer  CORS preflight
POST    /api/actions/transfer?toWallet=&token=&amount=  body {"account": payer}
        -> {"type": "transaction", "transaction": <base64 unsigned tx>}
"""

from __future__ import annotations

import base64
import uuid
from typing import Any

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from transfer_blink.api_server.dependencies import action_headers, get_app_settings, get_chain_reader
from transfer_blink.chain.reader import ChainStateReader
from transfer_blink.config.settings import Settings
from transfer_blink.core.exceptions import TransferError
from transfer_blink.logging import bind_request, get_logger
from transfer_blink.transfer.engine import build_transfer
from transfer_blink.utils.wallet_utils import short_address

logger = get_logger(__name__)

router = APIRouter(prefix="/actions", tags=["actions"])

TRANSFER_HREF = "/api/actions/transfer?toWallet={toWallet}&token={token}&amount={amount}"
MISSING_PARAMS_ERROR = "Missing required parameters, you need to provide a wallet, token and amount."


# -----------------------------------------------------------------------------
# Models
# -----------------------------------------------------------------------------


class ActionParameter(BaseModel):
    name: str
    label: str
    type: str = "text"
    required: bool = True


class LinkedAction(BaseModel):
    type: str = "transaction"
    href: str
    label: str
    parameters: list[ActionParameter] = Field(default_factory=list)


class ActionLinks(BaseModel):
    actions: list[LinkedAction]


class ActionGetResponse(BaseModel):
    """GET metadata describing the transfer action to wallets and clients."""

    type: str = "action"
    title: str
    description: str
    icon: str
    label: str
    links: ActionLinks


class ActionPostRequest(BaseModel):
    """POST body: the wallet that will sign (and pay for) the transaction."""

    account: str = Field(..., min_length=1, max_length=64, description="Payer wallet (base58)")


class ActionPostResponse(BaseModel):
    type: str = "transaction"
    transaction: str = Field(..., description="Base64 unsigned versioned transaction")
    message: str | None = None


# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------


def _icon_url(request: Request, settings: Settings) -> str:
    icon = settings.action_icon_path
    if icon.startswith(("http://", "https://")):
        return icon
    return str(request.base_url).rstrip("/") + "/" + icon.lstrip("/")


@router.options("/transfer")
def transfer_options(settings: Settings = Depends(get_app_settings)) -> Response:
    return Response(status_code=200, headers=action_headers(settings))


@router.get("/transfer", response_model=ActionGetResponse)
def transfer_metadata(request: Request, settings: Settings = Depends(get_app_settings)) -> JSONResponse:
    payload = ActionGetResponse(
        title="Solana Transfer Blink",
        description="Transfer any token on Solana with this Blink.",
        icon=_icon_url(request, settings),
        label="Send tokens",
        links=ActionLinks(
            actions=[
                LinkedAction(
                    href=TRANSFER_HREF,
                    label="Send",
                    parameters=[
                        ActionParameter(name="toWallet", label="Enter recipient wallet address"),
                        ActionParameter(name="token", label="Enter the token you want to send"),
                        ActionParameter(name="amount", label="Enter the amount you want to send", type="number"),
                    ],
                )
            ]
        ),
    )
    return JSONResponse(content=payload.model_dump(), headers=action_headers(settings))


@router.post("/transfer", response_model=ActionPostResponse)
def transfer_transaction(
    body: ActionPostRequest,
    to_wallet: str | None = Query(None, alias="toWallet"),
    token: str | None = Query(None),
    amount: str | None = Query(None),
    settings: Settings = Depends(get_app_settings),
    reader: ChainStateReader = Depends(get_chain_reader),
) -> JSONResponse:
    """
    Build an unsigned transfer of `amount` `token` from body.account to toWallet.

    TransferError maps to its own status (400 bad input, 503 chain unavailable, 500 assembly).
    """
    headers = action_headers(settings)
    bind_request(request_id=uuid.uuid4().hex[:12])
    if not (to_wallet or "").strip() or not (token or "").strip() or not (amount or "").strip():
        return JSONResponse(status_code=400, content={"error": MISSING_PARAMS_ERROR}, headers=headers)

    try:
        built = build_transfer(reader, body.account, to_wallet, token.strip(), amount)
    except TransferError as e:
        log = logger.warning if e.retryable or e.http_status >= 500 else logger.info
        log(
            "transfer_rejected",
            code=e.code,
            error=e.message,
            payer=short_address(body.account),
            token=token,
        )
        return JSONResponse(status_code=e.http_status, content=e.to_dict(), headers=headers)

    plan = built.plan
    resp = ActionPostResponse(
        transaction=base64.b64encode(built.serialize()).decode("ascii"),
        message=f"Send {plan.ui_amount} {plan.asset.label}",
    )
    return JSONResponse(content=resp.model_dump(exclude_none=True), headers=headers)


def actions_rules() -> dict[str, Any]:
    """actions.json rules: serve every /api/actions path as-is."""
    return {"rules": [{"pathPattern": "/api/actions/**", "apiPath": "/api/actions/**"}]}
