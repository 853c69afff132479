from fastapi import APIRouter, Depends, HTTPException, Query

from ..providers.base import UpstreamDataError
from ..providers.tatum import TatumProvider
from ..services.address import is_valid_evm_address
from ..services.chains import is_supported_chain, list_chains, normalize_chain
from ..types import (
    ChainInfo,
    ChainsResponse,
    GasPriceResponse,
    GasTiers,
    NativeBalance,
    WalletBalanceResponse,
)
from .deps import get_data_provider

router = APIRouter(prefix="/api")


def _require_chain(chain: str) -> str:
    normalized = normalize_chain(chain)
    if not is_supported_chain(normalized):
        raise HTTPException(status_code=400, detail="Unsupported chain")
    return normalized


@router.get("/chains", response_model=ChainsResponse)
async def supported_chains() -> ChainsResponse:
    return ChainsResponse(chains=[ChainInfo(**chain.to_dict()) for chain in list_chains()])


@router.get("/wallet/{address}", response_model=WalletBalanceResponse)
async def wallet_balance(
    address: str,
    chain: str = Query(default="ethereum"),
    provider: TatumProvider = Depends(get_data_provider),
) -> WalletBalanceResponse:
    chain_id = _require_chain(chain)
    if not is_valid_evm_address(address):
        raise HTTPException(status_code=400, detail="Invalid address")

    try:
        native = await provider.get_native_balance(address, chain_id)
    except UpstreamDataError as exc:
        raise HTTPException(status_code=502, detail=f"Failed to get wallet balance: {exc}")

    return WalletBalanceResponse(
        balance=NativeBalance(balance=native["balance_formatted"]),
        chain=chain_id,
        address=address,
    )


@router.get("/gas/{chain}", response_model=GasPriceResponse)
async def gas_price(chain: str, provider: TatumProvider = Depends(get_data_provider)) -> GasPriceResponse:
    chain_id = _require_chain(chain)
    try:
        tiers = await provider.get_gas_tiers(chain_id)
    except UpstreamDataError as exc:
        raise HTTPException(status_code=502, detail=f"Failed to get gas price: {exc}")

    return GasPriceResponse(
        gas_price=GasTiers(
            slow=tiers["slow"],
            standard=tiers["standard"],
            fast=tiers["fast"],
            base_fee=tiers["baseFee"],
        ),
        chain=chain_id,
    )
